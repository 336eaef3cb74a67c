"""Configuration loading and models."""

from covrelay.config.loader import CONFIG_FILENAME, load_config
from covrelay.config.models import (
    DEFAULT_CODACY_URL,
    ApiTokenConfig,
    BuildConfig,
    HttpConfig,
    LoggingConfig,
    LogOutputConfig,
    ProjectConfig,
    ReporterConfig,
)

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_CODACY_URL",
    "ApiTokenConfig",
    "BuildConfig",
    "HttpConfig",
    "LogOutputConfig",
    "LoggingConfig",
    "ProjectConfig",
    "ReporterConfig",
    "load_config",
]
