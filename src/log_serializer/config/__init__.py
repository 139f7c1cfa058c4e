"""Config – environment settings for the default masking policy."""
from log_serializer.config.settings import (
    EnvSettingsLoader,
    LogSerializerSettings,
    Settings,
    SettingsLoader,
    configure_from_env,
)

__all__ = [
    "EnvSettingsLoader",
    "LogSerializerSettings",
    "Settings",
    "SettingsLoader",
    "configure_from_env",
]
