"""Domain errors – malformed search structure and missing resources."""

from __future__ import annotations

from typing import Any

from discovery_search.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a search-model rule is violated."""

    default_code = "domain_error"


class NotFoundError(DomainError):
    """The requested resource does not exist."""

    default_code = "not_found"

    def __init__(
        self,
        resource: str,
        identifier: Any = None,
        **kwargs: Any,
    ) -> None:
        msg = f"{resource} not found"
        if identifier is not None:
            msg = f"{resource} '{identifier}' not found"
        super().__init__(msg, resource=resource, identifier=identifier, **kwargs)
        self.resource = resource
        self.identifier = identifier


class SearchError(DomainError):
    """Base class for refused search input."""

    default_code = "search_error"


class UnsupportedSearchUrlError(SearchError):
    """The request parameters have a structure we refuse to guess about.

    Raised, for example, when ``lookfor`` arrives as a list with more than
    one element.
    """

    default_code = "unsupported_search_url"

    def __init__(self, message: str = "Unsupported search URL.", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class UnsupportedSearchTypeError(SearchError):
    """The search type is neither ``basic`` nor ``advanced``."""

    default_code = "unsupported_search_type"

    def __init__(self, search_type: str, **kwargs: Any) -> None:
        super().__init__(f"Unsupported search type: {search_type}", search_type=search_type, **kwargs)
        self.search_type = search_type


__all__ = [
    "DomainError",
    "NotFoundError",
    "SearchError",
    "UnsupportedSearchTypeError",
    "UnsupportedSearchUrlError",
]
