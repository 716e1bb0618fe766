"""CLI parse command for vidprobe."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TextIO

import click

from vidprobe.cli.exit_codes import ExitCode
from vidprobe.config import VidprobeConfig
from vidprobe.domain import MediaDescriptor
from vidprobe.logging import probe_context
from vidprobe.parsing import (
    MediaInfoParser,
    ParseResult,
    format_human,
    format_json,
    is_complete,
    is_good_enough,
    log_descriptor,
    log_probe_line,
)

logger = logging.getLogger(__name__)

_ACCEPTANCE_CHOICES = {
    "good-enough": "good_enough",
    "complete": "complete",
}


@contextmanager
def _open_input(source: Path) -> Iterator[TextIO]:
    """Open the banner input, treating "-" as stdin.

    Undecodable bytes are replaced on both paths.
    """
    with click.open_file(str(source), encoding="utf-8", errors="replace") as f:
        yield f


def _is_acceptable(descriptor: MediaDescriptor, acceptance: str) -> bool:
    if acceptance == "complete":
        return is_complete(descriptor)
    return is_good_enough(descriptor)


def parse_banner(
    stream: TextIO,
    config: VidprobeConfig,
    is_error: bool = True,
    stop_when_usable: bool = False,
) -> ParseResult:
    """Feed a banner stream to a fresh parser.

    Args:
        stream: Text stream with one banner line per line.
        config: Active configuration (line logging, acceptance).
        is_error: Channel flag forwarded with every line.
        stop_when_usable: Stop reading as soon as the descriptor satisfies
            the configured acceptance predicate.

    Returns:
        ParseResult for the closed parser.
    """
    parser = MediaInfoParser(
        line_hook=log_probe_line if config.parser.log_lines else None,
        record_unparsable=config.parser.record_unparsable,
    )
    for line in stream:
        parser.feed_line(line, is_error)
        if stop_when_usable and _is_acceptable(
            parser.descriptor, config.playback.acceptance
        ):
            logger.debug("Descriptor usable after %d lines", parser.lines_seen)
            break

    descriptor = parser.close()
    log_descriptor(descriptor)
    return ParseResult(descriptor=descriptor, issues=parser.issues)


@click.command("parse")
@click.argument("logfile", type=click.Path(path_type=Path, allow_dash=True))
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["human", "json"]),
    default="human",
    help="Output format (default: human)",
)
@click.option(
    "--require",
    "acceptance",
    type=click.Choice(sorted(_ACCEPTANCE_CHOICES)),
    default=None,
    help="Predicate the descriptor must satisfy (default: from config).",
)
@click.option(
    "--channel",
    type=click.Choice(["stderr", "stdout"]),
    default="stderr",
    help="Channel the banner was captured from (default: stderr).",
)
@click.option(
    "--stop-when-usable",
    is_flag=True,
    help="Stop reading once the descriptor satisfies the predicate.",
)
@click.pass_context
def parse_command(
    ctx: click.Context,
    logfile: Path,
    output_format: str,
    acceptance: str | None,
    channel: str,
    stop_when_usable: bool,
) -> None:
    """Parse captured ffmpeg banner output and report media metadata.

    LOGFILE is a text file holding the output of `ffmpeg -i <media>
    -hide_banner`, or "-" to read from stdin.

    Exits 0 when the descriptor is usable, 60 when it is not, and 51 when
    it is not usable and a malformed duration was reported.
    """
    config: VidprobeConfig = ctx.obj["config"]
    if acceptance is not None:
        config.playback.acceptance = _ACCEPTANCE_CHOICES[acceptance]

    if str(logfile) != "-" and not logfile.is_file():
        click.echo(f"Error: File not found: {logfile}", err=True)
        sys.exit(ExitCode.TARGET_NOT_FOUND)

    source = "<stdin>" if str(logfile) == "-" else str(logfile)
    with probe_context("01", source):
        with _open_input(logfile) as stream:
            result = parse_banner(
                stream,
                config,
                is_error=channel == "stderr",
                stop_when_usable=stop_when_usable,
            )

    if output_format == "json":
        click.echo(format_json(result.descriptor, source, result.issues))
    else:
        click.echo(format_human(result.descriptor, source, result.issues))

    if _is_acceptable(result.descriptor, config.playback.acceptance):
        sys.exit(ExitCode.SUCCESS)
    if result.duration_error is not None:
        sys.exit(ExitCode.PARSE_ERROR)
    sys.exit(ExitCode.INCOMPLETE)
