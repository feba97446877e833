"""Config settings – env-based settings dataclasses."""
from searchable.config.settings.base import Settings
from searchable.config.settings.factory import SettingsFactory
from searchable.config.settings.loaders import EnvSettingsLoader, SettingsLoader

__all__ = ["EnvSettingsLoader", "Settings", "SettingsFactory", "SettingsLoader"]
