"""SQLAlchemy adapter – SqlAlchemySearchRepository."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from sqlalchemy import select

from searchable.adapters.sqlalchemy.builder import SqlAlchemyQueryBuilder
from searchable.application.search.compiler import SearchCompiler
from searchable.application.search.settings import SearchSettings
from searchable.observability.logging import get_logger

TModel = TypeVar("TModel")


class SqlAlchemySearchRepository(Generic[TModel]):
    """Runs searches for one model against an ``AsyncSession``.

    *columns* defaults to ``model.get_searchable_columns()``.
    """

    def __init__(
        self,
        session: Any,
        model: type[TModel],
        *,
        columns: Mapping[str, Any] | None = None,
        settings: SearchSettings | None = None,
    ) -> None:
        self._session = session
        self._model = model
        self._columns = columns
        self._settings = settings
        self._compiler = SearchCompiler(settings)
        self._log = get_logger(__name__, model=model.__name__)

    @property
    def columns(self) -> Mapping[str, Any]:
        if self._columns is not None:
            return self._columns
        return self._model.get_searchable_columns()  # type: ignore[attr-defined]

    def statement(self, term: str | None, column: str | None = None) -> Any:
        builder = SqlAlchemyQueryBuilder(self._model, settings=self._settings)
        self._compiler.apply(builder, self.columns, term, column)
        return builder.apply_to(select(self._model))

    async def search(
        self,
        term: str | None,
        column: str | None = None,
        *,
        limit: int | None = None,
    ) -> list[TModel]:
        stmt = self.statement(term, column)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self._session.execute(stmt)
        items = list(result.scalars().all())
        self._log.debug("search.executed", column=column, term=term, results=len(items))
        return items


__all__ = ["SqlAlchemySearchRepository"]
