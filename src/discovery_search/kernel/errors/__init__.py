"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError                  (domain.py)
    │   ├── NotFoundError
    │   └── SearchError
    │       ├── UnsupportedSearchUrlError
    │       └── UnsupportedSearchTypeError
    └── ApplicationError             (application.py)
        ├── UnsupportedOperationError
        └── ConfigError              (discovery_search.config.validation)
"""

from discovery_search.kernel.errors.application import (
    ApplicationError,
    UnsupportedOperationError,
)
from discovery_search.kernel.errors.base import BaseError
from discovery_search.kernel.errors.domain import (
    DomainError,
    NotFoundError,
    SearchError,
    UnsupportedSearchTypeError,
    UnsupportedSearchUrlError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "DomainError",
    "NotFoundError",
    "SearchError",
    "UnsupportedOperationError",
    "UnsupportedSearchTypeError",
    "UnsupportedSearchUrlError",
]
