"""SQLAlchemy adapter – query builder, searchable mixin, async repository."""
from searchable.adapters.sqlalchemy.builder import SqlAlchemyQueryBuilder
from searchable.adapters.sqlalchemy.expressions import convert_using
from searchable.adapters.sqlalchemy.mixins import SearchableMixin
from searchable.adapters.sqlalchemy.repository import SqlAlchemySearchRepository

__all__ = [
    "SearchableMixin",
    "SqlAlchemyQueryBuilder",
    "SqlAlchemySearchRepository",
    "convert_using",
]
