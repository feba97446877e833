"""SQLAlchemy adapter – SqlAlchemyQueryBuilder.

Implements the search ``QueryBuilder`` port on top of SQLAlchemy 2.x Core
expressions.  Field and relation names are resolved through the model's
mapper, never interpolated into SQL text; search terms always travel as bound
parameters.
"""
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import (
    ColumnElement,
    Float,
    Integer,
    Numeric,
    String,
    and_,
    cast,
    func,
    inspect,
    literal,
    or_,
)
from sqlalchemy.orm import RelationshipProperty

from searchable.adapters.sqlalchemy.expressions import convert_using
from searchable.application.search.builder import (
    SUPPORTED_OPERATORS,
    BuildFn,
    CharsetNormalizedContains,
    Operator,
    RawCondition,
    RoundedNumericMatch,
)
from searchable.application.search.settings import SearchSettings
from searchable.kernel.errors import UnknownColumnError, UnknownRelationError

logger = logging.getLogger(__name__)


def _is_numeric(column: Any) -> bool:
    return isinstance(column.expression.type, (Numeric, Integer))


def _as_string(column: Any) -> Any:
    return column if isinstance(column.expression.type, String) else cast(column, String)


def _as_text(value: float) -> str:
    """Render a parsed search number the way it is usually stored as text."""
    return str(int(value)) if value.is_integer() else repr(value)


class SqlAlchemyQueryBuilder:
    """Collects search clauses for one mapped model class.

    Usage::

        builder = SqlAlchemyQueryBuilder(Order)
        SearchCompiler().apply(builder, Order.__searchable__, "acme")
        stmt = builder.apply_to(select(Order))
    """

    def __init__(self, model: type[Any], *, settings: SearchSettings | None = None) -> None:
        self._model = model
        self._mapper = inspect(model)
        self._settings = settings or SearchSettings()
        self._conjuncts: list[ColumnElement[bool]] = []
        self._disjuncts: list[ColumnElement[bool]] = []

    @property
    def model(self) -> type[Any]:
        return self._model

    def _child(self, model: type[Any] | None = None) -> "SqlAlchemyQueryBuilder":
        return SqlAlchemyQueryBuilder(model or self._model, settings=self._settings)

    # QueryBuilder port ------------------------------------------------
    def and_group(self, build: BuildFn) -> None:
        child = self._child()
        build(child)
        criterion = child.criterion()
        if criterion is not None:
            self._conjuncts.append(criterion)

    def or_group(self, build: BuildFn) -> None:
        child = self._child()
        build(child)
        criterion = child.criterion()
        if criterion is not None:
            self._disjuncts.append(criterion)

    def or_where(self, field: str, operator: Operator, value: Any) -> None:
        if operator not in SUPPORTED_OPERATORS:
            raise ValueError(f"Unsupported operator {operator!r}")
        column = self.column(field)
        if operator == "LIKE":
            self._disjuncts.append(_as_string(column).ilike(value))
        elif isinstance(value, float) and not _is_numeric(column):
            self._disjuncts.append(_as_string(column) == _as_text(value))
        else:
            self._disjuncts.append(column == value)

    def or_where_raw(self, condition: RawCondition) -> None:
        match condition:
            case RoundedNumericMatch(field=field, value=value, tolerance=tolerance):
                column = self.column(field)
                if not _is_numeric(column):
                    logger.debug("search.rounded_match_skipped field=%s reason=non_numeric_column", field)
                    return
                numeric = cast(
                    column,
                    Numeric(self._settings.decimal_precision, self._settings.decimal_scale),
                )
                clause = func.abs(func.round(numeric, 0) - literal(value, Float)) < literal(
                    tolerance, Float
                )
            case CharsetNormalizedContains(field=field, pattern=pattern, charset=charset):
                clause = convert_using(self.column(field), charset).like(pattern)
            case _:
                raise TypeError(f"Unsupported raw condition {condition!r}")
        self._disjuncts.append(clause)

    def or_where_has(self, relation: str, build: BuildFn) -> None:
        path = self.relation_path(relation)
        child = self._child(path[-1].mapper.class_)
        build(child)
        criterion = child.criterion()
        for prop in reversed(path):
            attr = prop.class_attribute
            criterion = attr.any(criterion) if prop.uselist else attr.has(criterion)
        self._disjuncts.append(criterion)

    # Resolution ---------------------------------------------------------
    def column(self, field: str) -> Any:
        """Return the mapped column attribute for *field* (attribute key or column name)."""
        attrs = self._mapper.column_attrs
        if field in attrs:
            return attrs[field].class_attribute
        for prop in attrs:
            if any(getattr(col, "name", None) == field for col in prop.columns):
                return prop.class_attribute
        raise UnknownColumnError(self._model.__name__, field)

    def relation_path(self, relation: str) -> list[RelationshipProperty[Any]]:
        """Resolve a (possibly dotted) relation name into relationship properties."""
        mapper = self._mapper
        path: list[RelationshipProperty[Any]] = []
        for name in relation.split("."):
            prop = mapper.relationships.get(name)
            if prop is None:
                raise UnknownRelationError(self._model.__name__, relation)
            path.append(prop)
            mapper = prop.mapper
        return path

    # Output -------------------------------------------------------------
    def criterion(self) -> ColumnElement[bool] | None:
        clauses = list(self._conjuncts)
        if self._disjuncts:
            clauses.append(or_(*self._disjuncts))
        if not clauses:
            return None
        return clauses[0] if len(clauses) == 1 else and_(*clauses)

    def apply_to(self, statement: Any) -> Any:
        """Attach the collected clauses to *statement*; unchanged when empty."""
        criterion = self.criterion()
        if criterion is None:
            return statement
        return statement.where(criterion)


__all__ = ["SqlAlchemyQueryBuilder"]
