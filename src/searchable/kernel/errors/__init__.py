"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError              (domain.py)
    │   └── SearchError
    │       ├── UnknownColumnError
    │       └── UnknownRelationError
    └── ApplicationError         (application.py)
        └── ConfigError          (searchable.config.validation)
"""

from searchable.kernel.errors.application import ApplicationError
from searchable.kernel.errors.base import BaseError
from searchable.kernel.errors.domain import (
    DomainError,
    SearchError,
    UnknownColumnError,
    UnknownRelationError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "DomainError",
    "SearchError",
    "UnknownColumnError",
    "UnknownRelationError",
]
