"""Configuration management for vidprobe.

Configuration is loaded with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (VIDPROBE_*)
3. Config file (~/.vidprobe/config.toml)
4. Default values (lowest priority)
"""

from vidprobe.config.env import EnvReader
from vidprobe.config.loader import (
    ConfigError,
    clear_config_cache,
    get_config,
    get_default_config_path,
    load_config_file,
)
from vidprobe.config.logging_factory import build_logging_config
from vidprobe.config.models import (
    LoggingConfig,
    ParserConfig,
    PlaybackConfig,
    VidprobeConfig,
)
from vidprobe.config.schema import ConfigFileSchema

__all__ = [
    # Models
    "LoggingConfig",
    "ParserConfig",
    "PlaybackConfig",
    "VidprobeConfig",
    "ConfigFileSchema",
    # Loader
    "ConfigError",
    "clear_config_cache",
    "get_config",
    "get_default_config_path",
    "load_config_file",
    "EnvReader",
    # Logging
    "build_logging_config",
]
