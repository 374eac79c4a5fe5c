"""Module de configuration."""

from runmany.config.settings import (
    CONFIG_ENV_VAR,
    DEFAULT_SEARCH_PATHS,
    LoggingSettings,
    RunmanySettings,
    load_settings,
    read_config_file,
)

__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_SEARCH_PATHS",
    "LoggingSettings",
    "RunmanySettings",
    "load_settings",
    "read_config_file",
]
