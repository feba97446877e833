"""Domain errors – search configuration that cannot be resolved."""

from __future__ import annotations

from typing import Any

from searchable.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a domain rule is violated."""

    default_code = "domain_error"


class SearchError(DomainError):
    """A searchable column configuration could not be compiled."""

    default_code = "search_error"


class UnknownColumnError(SearchError):
    """The configured ``field`` is not a mapped column on the entity."""

    default_code = "unknown_search_column"

    def __init__(self, entity: str, field: str, **kwargs: Any) -> None:
        super().__init__(
            f"{entity} has no searchable column '{field}'",
            detail={"entity": entity, "field": field},
            **kwargs,
        )
        self.entity = entity
        self.field = field


class UnknownRelationError(SearchError):
    """The configured ``relation`` is not an association on the entity."""

    default_code = "unknown_search_relation"

    def __init__(self, entity: str, relation: str, **kwargs: Any) -> None:
        super().__init__(
            f"{entity} has no relation '{relation}'",
            detail={"entity": entity, "relation": relation},
            **kwargs,
        )
        self.entity = entity
        self.relation = relation


__all__ = [
    "DomainError",
    "SearchError",
    "UnknownColumnError",
    "UnknownRelationError",
]
