"""Application search – QueryBuilder port and raw condition objects.

The compiler never talks to a record store directly.  It drives a
:class:`QueryBuilder`, which adapters implement for a concrete backend
(SQLAlchemy, in-memory, recording fake).  Nested groups are built by passing
a callable that receives a fresh child builder.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Literal, Protocol, TypeAlias, runtime_checkable

from searchable.application.search.columns import ColumnConfigMapping

__all__ = [
    "BuildFn",
    "CharsetNormalizedContains",
    "Operator",
    "QueryBuilder",
    "RawCondition",
    "RoundedNumericMatch",
    "Searchable",
    "SUPPORTED_OPERATORS",
]

Operator = Literal["=", "LIKE"]
SUPPORTED_OPERATORS: frozenset[str] = frozenset({"=", "LIKE"})


@dataclass(frozen=True)
class RoundedNumericMatch:
    """``ABS(ROUND(field, 0) - value) < tolerance``.

    Matches stored values that round to the searched whole number.
    """

    field: str
    value: float
    tolerance: float = 0.0001


@dataclass(frozen=True)
class CharsetNormalizedContains:
    """``CONVERT(field USING charset) LIKE pattern``."""

    field: str
    pattern: str
    charset: str = "utf8mb4"


RawCondition: TypeAlias = RoundedNumericMatch | CharsetNormalizedContains

BuildFn: TypeAlias = Callable[["QueryBuilder"], None]


@runtime_checkable
class QueryBuilder(Protocol):
    """Port: the query-building primitives the search compiler relies on.

    Every ``or_*`` call adds a clause OR-combined with the clauses already in
    the current group.  ``and_group`` attaches a child group as one clause
    AND-combined with the rest of the query.
    """

    def and_group(self, build: BuildFn) -> None: ...
    def or_group(self, build: BuildFn) -> None: ...
    def or_where(self, field: str, operator: Operator, value: Any) -> None: ...
    def or_where_raw(self, condition: RawCondition) -> None: ...
    def or_where_has(self, relation: str, build: BuildFn) -> None: ...


@runtime_checkable
class Searchable(Protocol):
    """Capability of an entity type that declares searchable columns."""

    @classmethod
    def get_searchable_columns(cls) -> ColumnConfigMapping: ...
