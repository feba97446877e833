"""SQLAlchemy ORM mixins – SearchableMixin."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import Select, select

from searchable.adapters.sqlalchemy.builder import SqlAlchemyQueryBuilder
from searchable.application.search.compiler import SearchCompiler
from searchable.application.search.options import get_search_column_options
from searchable.application.search.settings import SearchSettings


class SearchableMixin:
    """Adds declarative multi-column search to an ORM model.

    Mix into any concrete ORM model class that extends
    :class:`~sqlalchemy.orm.DeclarativeBase`::

        class Invoice(SearchableMixin, Base):
            __tablename__ = "invoices"
            __searchable__ = {
                "reference": "Reference",
                "total_amount": {"label": "Total"},
                "customer": {"relation": "customer", "field": "full_name"},
            }

        stmt = Invoice.search("acme")                 # every column
        stmt = Invoice.search("120", column="total_amount")

    Entries are either a plain label or a mapping with any of ``field``,
    ``label``, ``relation`` and ``type`` (``"number"`` forces numeric
    comparison).
    """

    __searchable__ = {}  # type: ignore[var-annotated]

    @classmethod
    def get_searchable_columns(cls) -> Mapping[str, Any]:
        return cls.__searchable__

    @classmethod
    def get_search_column_options(cls) -> dict[str, str]:
        """``{column_key: label}`` for populating a search-column picker."""
        return get_search_column_options(cls.get_searchable_columns())

    @classmethod
    def apply_search(
        cls,
        statement: Any,
        term: str | None,
        column: str | None = None,
        *,
        settings: SearchSettings | None = None,
    ) -> Any:
        """Return *statement* narrowed to rows matching *term*.

        *statement* is returned as-is when *term* is empty.
        """
        builder = SqlAlchemyQueryBuilder(cls, settings=settings)
        SearchCompiler(settings).apply(builder, cls.get_searchable_columns(), term, column)
        return builder.apply_to(statement)

    @classmethod
    def search(
        cls,
        term: str | None,
        column: str | None = None,
        *,
        settings: SearchSettings | None = None,
    ) -> Select[Any]:
        return cls.apply_search(select(cls), term, column, settings=settings)


__all__ = ["SearchableMixin"]
