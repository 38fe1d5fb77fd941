"""Configuration management for vidwatch.

Configuration is resolved once at startup with the following precedence:
1. CLI options (highest priority)
2. Environment variables (VIDWATCH_*)
3. Default values (lowest priority)
"""

from vidwatch.config.builder import (
    ConfigBuilder,
    ConfigSource,
    build_config,
    source_from_env,
)
from vidwatch.config.env import EnvReader
from vidwatch.config.models import (
    DEFAULT_EXTENSIONS,
    LoggingConfig,
    ToolPathsConfig,
    TranscodeSettings,
    WatchConfig,
    normalize_extension,
)

__all__ = [
    # Models
    "DEFAULT_EXTENSIONS",
    "LoggingConfig",
    "ToolPathsConfig",
    "TranscodeSettings",
    "WatchConfig",
    "normalize_extension",
    # Builder
    "ConfigBuilder",
    "ConfigSource",
    "EnvReader",
    "build_config",
    "source_from_env",
]
