"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to functions)
2. Environment variables (VIDPROBE_*)
3. Config file (~/.vidprobe/config.toml)
4. Default values

Environment variables:
- VIDPROBE_CONFIG_PATH: Path to config file (overrides default location)
- VIDPROBE_LOG_LEVEL: Log level (debug, info, warning, error)
- VIDPROBE_LOG_FORMAT: Log format (text, json)
- VIDPROBE_LOG_FILE: Log file path
- VIDPROBE_LOG_LINES: Log every raw banner line at DEBUG (true/false)
- VIDPROBE_ACCEPTANCE: Playback acceptance (good_enough, complete)
"""

from __future__ import annotations

import logging
import threading
import tomllib
from pathlib import Path

from pydantic import ValidationError

from vidprobe.config.env import EnvReader
from vidprobe.config.models import (
    LoggingConfig,
    ParserConfig,
    PlaybackConfig,
    VidprobeConfig,
)
from vidprobe.config.schema import ConfigFileSchema

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".vidprobe"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"

# path -> (validated schema, mtime)
_config_cache: dict[Path, tuple[ConfigFileSchema, float]] = {}
_config_cache_lock = threading.Lock()


class ConfigError(Exception):
    """Raised when the configuration file or values are invalid."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(message)


def get_default_config_path(env_reader: EnvReader | None = None) -> Path:
    """Get the config file path, honoring VIDPROBE_CONFIG_PATH.

    Returns:
        Path to config file.
    """
    reader = env_reader or EnvReader()
    return reader.get_path("VIDPROBE_CONFIG_PATH", DEFAULT_CONFIG_FILE)


def _describe_validation_error(e: ValidationError) -> str:
    errors = e.errors()
    first_error = errors[0] if errors else {}
    location = ".".join(str(loc) for loc in first_error.get("loc", []))
    msg = first_error.get("msg", "validation error")
    return f"{len(errors)} error(s), first at {location}: {msg}"


def _read_config_file(path: Path) -> ConfigFileSchema:
    """Parse and validate one config file.

    Raises:
        ConfigError: If the file is not valid TOML or fails validation.
    """
    try:
        with path.open("rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}", path=path) from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}", path=path) from e

    try:
        return ConfigFileSchema.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(
            f"Invalid config file {path}: {_describe_validation_error(e)}",
            path=path,
        ) from e


def load_config_file(path: Path | None = None) -> ConfigFileSchema:
    """Load and validate the TOML config file.

    Results are cached per path and reloaded when the file's mtime changes.
    A missing file yields an empty schema (all defaults).

    Args:
        path: Path to config file. If None, uses the default location.

    Returns:
        Validated ConfigFileSchema.

    Raises:
        ConfigError: If the file exists but is invalid.
    """
    if path is None:
        path = get_default_config_path()

    try:
        current_mtime = path.stat().st_mtime
    except FileNotFoundError:
        logger.debug("Config file not found: %s", path)
        return ConfigFileSchema()

    with _config_cache_lock:
        cached = _config_cache.get(path)
        if cached is not None and cached[1] == current_mtime:
            return cached[0]

        schema = _read_config_file(path)
        _config_cache[path] = (schema, current_mtime)
        logger.debug("Loaded config from %s", path)
        return schema


def clear_config_cache() -> None:
    """Clear the config file cache. Primarily useful for testing."""
    with _config_cache_lock:
        _config_cache.clear()


def _first_set(*values):
    for value in values:
        if value is not None:
            return value
    return None


def get_config(
    config_path: Path | None = None,
    env_reader: EnvReader | None = None,
) -> VidprobeConfig:
    """Get configuration with env > file > default precedence.

    CLI overrides are applied by the caller (see build_logging_config).

    Args:
        config_path: Path to config file (overrides VIDPROBE_CONFIG_PATH).
        env_reader: Optional EnvReader for testing (uses os.environ if None).

    Returns:
        Merged VidprobeConfig.

    Raises:
        ConfigError: If the config file or an environment value is invalid.
    """
    reader = env_reader or EnvReader()
    path = config_path or get_default_config_path(reader)
    file_config = load_config_file(path)

    log_file = _first_set(
        reader.get_path("VIDPROBE_LOG_FILE"), file_config.logging.file
    )
    defaults = LoggingConfig()

    try:
        logging_config = LoggingConfig(
            level=_first_set(
                reader.get_str("VIDPROBE_LOG_LEVEL"),
                file_config.logging.level,
                defaults.level,
            ),
            file=Path(log_file).expanduser() if log_file is not None else None,
            format=_first_set(
                reader.get_str("VIDPROBE_LOG_FORMAT"),
                file_config.logging.format,
                defaults.format,
            ),
            include_stderr=_first_set(
                file_config.logging.include_stderr, defaults.include_stderr
            ),
            max_bytes=_first_set(file_config.logging.max_bytes, defaults.max_bytes),
            backup_count=_first_set(
                file_config.logging.backup_count, defaults.backup_count
            ),
        )
        parser_config = ParserConfig(
            log_lines=_first_set(
                reader.get_bool("VIDPROBE_LOG_LINES"),
                file_config.parser.log_lines,
                False,
            ),
            record_unparsable=_first_set(file_config.parser.record_unparsable, False),
        )
        playback_config = PlaybackConfig(
            acceptance=_first_set(
                reader.get_str("VIDPROBE_ACCEPTANCE"),
                file_config.playback.acceptance,
                "good_enough",
            ),
        )
    except ValueError as e:
        raise ConfigError(f"Invalid configuration value: {e}", path=path) from e

    return VidprobeConfig(
        logging=logging_config,
        parser=parser_config,
        playback=playback_config,
    )
