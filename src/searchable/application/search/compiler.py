"""Application search – SearchCompiler.

Compiles a column configuration mapping and one search term into calls on a
:class:`~searchable.application.search.builder.QueryBuilder`::

    <other filters> AND (col_a LIKE %term% OR EXISTS(rel WHERE f LIKE %term%) OR ...)

Entries are compiled independently.  An entry that cannot be compiled is
logged and skipped; it never aborts the rest of the search.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from searchable.application.search.builder import (
    CharsetNormalizedContains,
    QueryBuilder,
    RoundedNumericMatch,
)
from searchable.application.search.classifier import (
    is_numeric_term,
    parse_numeric_term,
    should_use_numeric_search,
)
from searchable.application.search.columns import (
    ColumnConfig,
    ColumnConfigMapping,
    normalize_config,
)
from searchable.application.search.matcher import needs_script_aware_match
from searchable.application.search.settings import SearchSettings
from searchable.kernel.errors import SearchError

logger = logging.getLogger(__name__)

__all__ = ["SearchCompiler", "SearchRequest", "apply_search"]


@dataclass(frozen=True)
class SearchRequest:
    term: str | None
    column: str = "all"

    @property
    def is_empty(self) -> bool:
        """``None``, ``""`` and ``"0"`` never narrow a query."""
        return not self.term or self.term == "0"


class SearchCompiler:
    """Build the search predicate for one entity's column configuration."""

    def __init__(self, settings: SearchSettings | None = None) -> None:
        self._settings = settings or SearchSettings()

    @property
    def settings(self) -> SearchSettings:
        return self._settings

    def apply(
        self,
        builder: QueryBuilder,
        columns: ColumnConfigMapping,
        term: str | None,
        column: str | None = None,
    ) -> QueryBuilder:
        """Add the search clause for *term* to *builder* and return it.

        An empty term leaves *builder* untouched.  *column* is either the
        all-columns token (default ``"all"``) or one key of *columns*; an
        unknown key adds nothing.
        """
        target = self._settings.all_columns_token if column is None else column
        request = SearchRequest(term, target)
        if request.is_empty:
            return builder

        entries = self._select_entries(columns, request.column)
        if not entries:
            logger.debug("search.no_columns column=%s", request.column)
            return builder

        def build(group: QueryBuilder) -> None:
            for key, raw in entries:
                self.apply_column(group, key, raw, request.term or "")

        builder.and_group(build)
        return builder

    def _select_entries(
        self, columns: ColumnConfigMapping, column: str
    ) -> list[tuple[str, Any]]:
        if column == self._settings.all_columns_token:
            return list(columns.items())
        if column in columns:
            return [(column, columns[column])]
        return []

    def apply_column(self, builder: QueryBuilder, key: str, raw: Any, term: str) -> None:
        """OR one column's sub-predicate into *builder*."""
        config = normalize_config(key, raw)
        field, relation = config.field, config.relation
        if not field:
            logger.debug("search.column_skipped column=%s reason=no_field", key)
            return

        try:
            if relation:
                self._apply_relation(builder, config, relation, field, term)
            else:
                self._apply_direct(builder, config, field, term)
        except SearchError as exc:
            logger.warning("search.column_skipped column=%s reason=%s", key, exc.code)

    def _apply_relation(
        self, builder: QueryBuilder, config: ColumnConfig, relation: str, field: str, term: str
    ) -> None:
        def inner(related: QueryBuilder) -> None:
            if needs_script_aware_match(term):
                related.or_where_raw(
                    CharsetNormalizedContains(field, f"%{term}%", self._settings.script_aware_charset)
                )
            else:
                self._apply_direct(related, config, field, term)

        builder.or_where_has(relation, inner)

    def _apply_direct(
        self, builder: QueryBuilder, config: ColumnConfig, field: str, term: str
    ) -> None:
        numeric = should_use_numeric_search(
            config, term, self._settings.numeric_field_patterns
        )

        if numeric and is_numeric_term(term):
            value = parse_numeric_term(term)
            tolerance = self._settings.numeric_tolerance

            def either(group: QueryBuilder) -> None:
                group.or_where(field, "=", value)
                group.or_where_raw(RoundedNumericMatch(field, value, tolerance))

            builder.or_group(either)
        else:
            builder.or_where(field, "LIKE", f"%{term}%")


def apply_search(
    builder: QueryBuilder,
    columns: ColumnConfigMapping,
    term: str | None,
    column: str | None = None,
    *,
    settings: SearchSettings | None = None,
) -> QueryBuilder:
    """Shortcut for ``SearchCompiler(settings).apply(...)``."""
    return SearchCompiler(settings).apply(builder, columns, term, column)
