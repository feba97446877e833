"""Config – settings loading and validation errors."""
from searchable.config.settings import (
    EnvSettingsLoader,
    Settings,
    SettingsFactory,
    SettingsLoader,
)
from searchable.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
