"""Config settings – SettingsFactory."""
from __future__ import annotations

import dataclasses
from typing import Any, Sequence, TypeVar

from searchable.config.settings.base import Settings
from searchable.config.settings.loaders import SettingsLoader
from searchable.config.validation.errors import ConfigError, MissingRequiredSettingError

T = TypeVar("T", bound=Settings)


def _is_required(field: dataclasses.Field[Any]) -> bool:
    return (
        field.default is dataclasses.MISSING
        and field.default_factory is dataclasses.MISSING  # type: ignore[misc]
    )


class SettingsFactory:
    """Build one settings instance from several sources.

    Sources are layered: each loader's values replace the previous ones and
    *overrides* replace them all.  ``load_search_settings`` uses this with the
    environment as the single loader and caller overrides on top.
    """

    @staticmethod
    def collect(
        settings_cls: type[T],
        loaders: Sequence[SettingsLoader] | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Return the layered field values without constructing *settings_cls*.

        Loader errors propagate: a bad ``SEARCH_*`` value is reported, never
        replaced by the default.
        """
        values: dict[str, Any] = {}
        for loader in loaders or []:
            loaded = loader.load(settings_cls)
            values.update(
                (field.name, getattr(loaded, field.name))
                for field in dataclasses.fields(loaded)  # type: ignore[arg-type]
            )
        values.update(overrides or {})
        return values

    @staticmethod
    def create(
        settings_cls: type[T],
        loaders: Sequence[SettingsLoader] | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> T:
        """Construct *settings_cls* from *loaders* and *overrides*.

        Raises :class:`MissingRequiredSettingError` for a field without a
        default that no source supplied, lets the settings' own
        :class:`InvalidSettingValueError` through, and wraps anything else
        (an unknown override key, say) in :class:`ConfigError`.
        """
        values = SettingsFactory.collect(settings_cls, loaders, overrides)
        for field in dataclasses.fields(settings_cls):  # type: ignore[arg-type]
            if field.name not in values and _is_required(field):
                raise MissingRequiredSettingError(
                    field.name, env_var=settings_cls.env_var(field.name)
                )
        try:
            return settings_cls(**values)
        except ConfigError:
            raise
        except TypeError as exc:
            raise ConfigError(
                f"Cannot build {settings_cls.__name__}: {exc}", cause=exc
            ) from exc


__all__ = ["SettingsFactory"]
