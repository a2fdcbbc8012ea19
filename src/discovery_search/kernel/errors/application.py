"""Application-layer errors – misuse of an operation by the caller."""

from __future__ import annotations

from typing import Any

from discovery_search.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class UnsupportedOperationError(ApplicationError):
    """The active search family does not support the requested operation."""

    default_code = "unsupported_operation"

    def __init__(
        self,
        operation: str,
        family: str,
        **kwargs: Any,
    ) -> None:
        super().__init__(f"{family} does not support {operation}().", operation=operation, **kwargs)
        self.operation = operation
        self.family = family


__all__ = ["ApplicationError", "UnsupportedOperationError"]
