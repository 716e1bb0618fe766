"""Segmentation of stream detail text into content tokens.

A stream's detail text is a comma-separated list whose items may carry
parenthesized annotations::

    aac (LC) (mp4a / 0x6134706D), 48000 Hz, stereo, fltp, 127 kb/s (default)

segments into ``["aac", "48000 Hz", "stereo", "fltp", "127 kb/s"]``.
Annotations may themselves contain commas (``yuv420p(tv, bt709)``), so a
plain ``split(",")`` is not enough.
"""

from __future__ import annotations

_WHITESPACE = " \t\r\n\f\v"


def _skip_whitespace(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in _WHITESPACE:
        pos += 1
    return pos


def _consume_group(text: str, pos: int) -> int:
    """Consume one balanced parenthesized group starting at ``pos``.

    Returns:
        Position just past the closing parenthesis, or ``pos`` unchanged if
        there is no opening parenthesis at ``pos`` or the group never
        closes.
    """
    if pos >= len(text) or text[pos] != "(":
        return pos

    depth = 0
    for end in range(pos, len(text)):
        char = text[end]
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return end + 1
    return pos


def segment_details(details: str) -> list[str]:
    """Split stream detail text into content tokens.

    Each iteration skips leading whitespace, takes the content up to the
    next comma or parenthesis, drops any complete parenthesized groups that
    follow, and consumes one trailing comma. Segmentation stops at the end
    of the text or as soon as an iteration makes no progress (e.g. at an
    unbalanced opening or stray closing parenthesis).

    Args:
        details: Detail text from a stream line. May be empty.

    Returns:
        Ordered list of stripped tokens. Tokens can be empty strings when
        an item consists only of annotations; they keep their position so
        the first token is always the codec slot.
    """
    tokens: list[str] = []
    pos = 0
    length = len(details)

    while pos < length:
        pos = _skip_whitespace(details, pos)

        content_start = pos
        while pos < length and details[pos] not in ",()":
            pos += 1
        content = details[content_start:pos]

        while True:
            group_start = _skip_whitespace(details, pos)
            group_end = _consume_group(details, group_start)
            if group_end == group_start:
                break
            pos = _skip_whitespace(details, group_end)

        if pos < length and details[pos] == ",":
            pos += 1

        # Nothing consumed past leading whitespace: end of text, an
        # unbalanced "(" or a stray ")".
        if pos == content_start:
            break

        tokens.append(content.strip())

    return tokens
