"""Config validation errors.

Each error names the settings field and, when it came from the environment,
the variable that held it (``SEARCH_NUMERIC_TOLERANCE`` for
``SearchSettings.numeric_tolerance``).
"""
from __future__ import annotations

from searchable.kernel.errors import ApplicationError


def _describe(setting_name: str, env_var: str | None) -> str:
    return f"{env_var} ({setting_name})" if env_var else setting_name


class ConfigError(ApplicationError):
    """Settings could not be loaded or failed validation."""

    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str, *, env_var: str | None = None) -> None:
        super().__init__(
            f"Setting {_describe(setting_name, env_var)} is required",
            detail={"setting": setting_name, "env_var": env_var},
        )
        self.setting_name = setting_name
        self.env_var = env_var


class InvalidSettingValueError(ConfigError):
    """A setting is present but unusable: unparseable or out of range."""

    default_code = "invalid_setting_value"

    def __init__(
        self,
        setting_name: str,
        value: object,
        reason: str,
        *,
        env_var: str | None = None,
    ) -> None:
        super().__init__(
            f"Setting {_describe(setting_name, env_var)} has invalid value {value!r}: {reason}",
            detail={"setting": setting_name, "env_var": env_var, "value": value, "reason": reason},
        )
        self.setting_name = setting_name
        self.env_var = env_var
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
