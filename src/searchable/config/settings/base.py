"""Config settings – Settings base class."""
from __future__ import annotations

import dataclasses
from typing import ClassVar, NoReturn

from searchable.config.validation.errors import InvalidSettingValueError


@dataclasses.dataclass
class Settings:
    """Dataclass settings read from ``<_prefix>_<FIELD>`` environment variables.

    Subclasses validate in :meth:`_validate` and report bad values through
    :meth:`_reject`, so the error names the variable an operator has to fix.
    """

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    @classmethod
    def env_var(cls, field_name: str) -> str:
        """``SearchSettings.env_var("numeric_tolerance") == "SEARCH_NUMERIC_TOLERANCE"``."""
        return f"{cls._prefix}_{field_name}".upper().lstrip("_")

    def _validate(self) -> None:
        """Override to check field values after construction."""

    def _reject(self, field_name: str, reason: str) -> NoReturn:
        raise InvalidSettingValueError(
            field_name,
            getattr(self, field_name),
            reason,
            env_var=self.env_var(field_name),
        )


__all__ = ["Settings"]
