"""Application search – in-memory QueryBuilder and InMemorySearchFilter.

Evaluates compiled search predicates against plain Python records (dicts or
attribute-style objects), with the same semantics the SQL adapters produce:
case-insensitive ``LIKE``, numeric equality, half-up integer rounding.
"""
from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Callable, Generic, TypeVar

from searchable.application.search.builder import (
    SUPPORTED_OPERATORS,
    BuildFn,
    CharsetNormalizedContains,
    Operator,
    RawCondition,
    RoundedNumericMatch,
)
from searchable.application.search.columns import ColumnConfigMapping
from searchable.application.search.compiler import SearchCompiler
from searchable.application.search.settings import SearchSettings

T = TypeVar("T")
Predicate = Callable[[Any], bool]

__all__ = ["InMemoryQueryBuilder", "InMemorySearchFilter", "like_to_regex"]


def like_to_regex(pattern: str) -> re.Pattern[str]:
    """Translate a SQL ``LIKE`` pattern (``%``/``_`` wildcards) to a regex."""
    parts = []
    for char in pattern:
        if char == "%":
            parts.append(".*")
        elif char == "_":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.IGNORECASE | re.DOTALL)


def _get(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _related(record: Any, path: str) -> list[Any]:
    current = [record]
    for name in path.split("."):
        nxt: list[Any] = []
        for item in current:
            value = _get(item, name)
            if value is None:
                continue
            if isinstance(value, (list, tuple, set, frozenset)):
                nxt.extend(value)
            else:
                nxt.append(value)
        current = nxt
    return current


def _to_decimal(value: Any) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


class InMemoryQueryBuilder:
    """QueryBuilder that compiles to a Python predicate."""

    def __init__(self) -> None:
        self._all: list[Predicate] = []
        self._any: list[Predicate] = []

    def __bool__(self) -> bool:
        return bool(self._all or self._any)

    def and_group(self, build: BuildFn) -> None:
        child = InMemoryQueryBuilder()
        build(child)
        if child:
            self._all.append(child.matches)

    def or_group(self, build: BuildFn) -> None:
        child = InMemoryQueryBuilder()
        build(child)
        if child:
            self._any.append(child.matches)

    def or_where(self, field: str, operator: Operator, value: Any) -> None:
        if operator not in SUPPORTED_OPERATORS:
            raise ValueError(f"Unsupported operator {operator!r}")
        if operator == "LIKE":
            regex = like_to_regex(str(value))
            self._any.append(lambda r: self._like(_get(r, field), regex))
        else:
            self._any.append(lambda r: self._equals(_get(r, field), value))

    def or_where_raw(self, condition: RawCondition) -> None:
        match condition:
            case RoundedNumericMatch(field=field, value=value, tolerance=tolerance):
                self._any.append(lambda r: self._rounds_to(_get(r, field), value, tolerance))
            case CharsetNormalizedContains(field=field, pattern=pattern):
                regex = like_to_regex(pattern)
                self._any.append(lambda r: self._like(_get(r, field), regex))
            case _:
                raise TypeError(f"Unsupported raw condition {condition!r}")

    def or_where_has(self, relation: str, build: BuildFn) -> None:
        child = InMemoryQueryBuilder()
        build(child)
        self._any.append(lambda r: any(child.matches(item) for item in _related(r, relation)))

    def matches(self, record: Any) -> bool:
        if not all(predicate(record) for predicate in self._all):
            return False
        return not self._any or any(predicate(record) for predicate in self._any)

    @staticmethod
    def _like(value: Any, regex: re.Pattern[str]) -> bool:
        return value is not None and regex.fullmatch(str(value)) is not None

    @staticmethod
    def _equals(value: Any, expected: Any) -> bool:
        if value is None:
            return False
        if isinstance(expected, float):
            stored = _to_decimal(value)
            return stored is not None and stored == Decimal(str(expected))
        return value == expected

    @staticmethod
    def _rounds_to(value: Any, expected: float, tolerance: float) -> bool:
        stored = _to_decimal(value)
        if stored is None:
            return False
        rounded = stored.quantize(Decimal(1), rounding=ROUND_HALF_UP)
        return abs(rounded - Decimal(str(expected))) < Decimal(str(tolerance))


class InMemorySearchFilter(Generic[T]):
    """Search a list of records using a column configuration mapping.

    Example::

        orders = InMemorySearchFilter(rows)
        orders.search({"ref": "Reference", "total": "Total"}, "100")
    """

    def __init__(self, records: Iterable[T], settings: SearchSettings | None = None) -> None:
        self._records = list(records)
        self._compiler = SearchCompiler(settings)

    def search(
        self,
        columns: ColumnConfigMapping,
        term: str | None,
        column: str | None = None,
    ) -> list[T]:
        builder = InMemoryQueryBuilder()
        self._compiler.apply(builder, columns, term, column)
        return [record for record in self._records if builder.matches(record)]
