"""Shared test fixtures for vidprobe."""

import logging
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def ffmpeg_fixtures_dir() -> Path:
    """Return the path to the captured ffmpeg banner fixtures."""
    return FIXTURES_DIR / "ffmpeg"


def _read_banner(name: str) -> list[str]:
    """Load a captured ffmpeg banner fixture as a list of lines.

    Args:
        name: Name of the fixture file (without .txt extension).

    Returns:
        Lines of the fixture, line terminators preserved.
    """
    fixture_path = FIXTURES_DIR / "ffmpeg" / f"{name}.txt"
    return fixture_path.read_text(encoding="utf-8").splitlines(keepends=True)


@pytest.fixture
def load_banner():
    """Return a loader for captured ffmpeg banners by fixture name."""
    return _read_banner


@pytest.fixture
def reset_root_logger():
    """Save and restore root logger state around a test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers[:] = original_handlers
    root.setLevel(original_level)


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point VIDPROBE_CONFIG_PATH at an empty temp location.

    Clears VIDPROBE_* variables and the config cache so tests never read the
    developer's real configuration.
    """
    from vidprobe.config import clear_config_cache

    for var in (
        "VIDPROBE_LOG_LEVEL",
        "VIDPROBE_LOG_FORMAT",
        "VIDPROBE_LOG_FILE",
        "VIDPROBE_LOG_LINES",
        "VIDPROBE_ACCEPTANCE",
    ):
        monkeypatch.delenv(var, raising=False)

    config_path = tmp_path / "config.toml"
    monkeypatch.setenv("VIDPROBE_CONFIG_PATH", str(config_path))
    clear_config_cache()
    yield config_path
    clear_config_cache()
