"""Application search – SearchSettings."""
from __future__ import annotations

import dataclasses
from typing import Any, ClassVar

from searchable.application.search.classifier import DEFAULT_NUMERIC_FIELD_PATTERNS
from searchable.config.settings import EnvSettingsLoader, Settings, SettingsFactory

__all__ = ["SearchSettings", "load_search_settings"]


@dataclasses.dataclass
class SearchSettings(Settings):
    """Tunables for search compilation, read from ``SEARCH_*`` env vars."""

    _prefix: ClassVar[str] = "SEARCH"

    all_columns_token: str = "all"
    numeric_tolerance: float = 0.0001
    numeric_field_patterns: list[str] = dataclasses.field(
        default_factory=lambda: list(DEFAULT_NUMERIC_FIELD_PATTERNS)
    )
    script_aware_charset: str = "utf8mb4"
    decimal_precision: int = 15
    decimal_scale: int = 4

    def _validate(self) -> None:
        if not self.all_columns_token:
            self._reject("all_columns_token", "must not be empty")
        if self.numeric_tolerance <= 0:
            self._reject("numeric_tolerance", "must be positive")
        if not self.script_aware_charset.replace("_", "").isalnum():
            self._reject("script_aware_charset", "must be a charset name")
        if self.decimal_precision <= 0:
            self._reject("decimal_precision", "must be positive")
        if not 0 <= self.decimal_scale <= self.decimal_precision:
            self._reject(
                "decimal_scale",
                f"must be between 0 and decimal_precision ({self.decimal_precision})",
            )


def load_search_settings(overrides: dict[str, Any] | None = None) -> SearchSettings:
    """Build :class:`SearchSettings` from the environment plus *overrides*."""
    return SettingsFactory.create(SearchSettings, [EnvSettingsLoader()], overrides)
