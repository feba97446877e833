"""
searchable – declarative multi-column search for SQLAlchemy models.

Import path convention::

    from searchable.application.search import apply_search, get_search_column_options
    from searchable.adapters.sqlalchemy import SearchableMixin
    from searchable.kernel.errors import SearchError
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
