"""Application search – ColumnConfig and configuration normalization.

A searchable entity declares a mapping of column keys to raw entries.  Each
raw entry is either a plain label (``"Customer"``) or a structured mapping
(``{"relation": "customer", "field": "name", "label": "Customer"}``).  Both
shapes are tagged at the boundary and normalized into one :class:`ColumnConfig`
so nothing downstream branches on shape again.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias

__all__ = [
    "ColumnConfig",
    "ColumnConfigMapping",
    "LabelOnly",
    "Structured",
    "normalize_config",
    "tag_raw_config",
    "titleize",
]

ColumnConfigMapping: TypeAlias = Mapping[str, Any]

_MISSING = object()


def titleize(key: str) -> str:
    """``"order_total"`` -> ``"Order total"`` (only the first letter is raised)."""
    text = key.replace("_", " ")
    return text[:1].upper() + text[1:]


@dataclass(frozen=True)
class LabelOnly:
    """Raw entry given as a bare label value."""
    label: Any


@dataclass(frozen=True)
class Structured:
    """Raw entry given as a mapping of options."""
    options: Mapping[str, Any]


@dataclass(frozen=True)
class ColumnConfig:
    """Canonical configuration of one searchable column."""

    key: str
    field: str | None
    label: str | None = None
    relation: str | None = None
    type: str | None = None

    @property
    def has_field(self) -> bool:
        return bool(self.field)

    @property
    def is_relation(self) -> bool:
        """True when the field lives on a related record."""
        return bool(self.relation) and bool(self.field)

    @property
    def display_label(self) -> str:
        if self.label is not None:
            return self.label
        return titleize(self.key)


def tag_raw_config(raw: Any) -> LabelOnly | Structured:
    if isinstance(raw, Mapping):
        return Structured(raw)
    return LabelOnly(raw)


def normalize_config(column_key: str, raw: Any) -> ColumnConfig:
    """Turn one raw configuration entry into a :class:`ColumnConfig`.

    A label-only entry searches the column named by its key.  A structured
    entry starts from ``{"field": column_key}`` and overlays whatever the
    caller supplied, so an explicit ``field`` wins over the key.
    """
    match tag_raw_config(raw):
        case LabelOnly(label=label):
            return ColumnConfig(
                key=column_key,
                field=column_key,
                label=None if label is None else str(label),
            )
        case Structured(options=options):
            field = options.get("field", _MISSING)
            label = options.get("label")
            return ColumnConfig(
                key=column_key,
                field=column_key if field is _MISSING else _optional_str(field),
                label=None if label is None else str(label),
                relation=_optional_str(options.get("relation")),
                type=_optional_str(options.get("type")),
            )
    raise AssertionError("unreachable")  # pragma: no cover


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)
