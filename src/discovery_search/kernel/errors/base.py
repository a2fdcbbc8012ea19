"""Root error class for the discovery-search error hierarchy.

Errors render as ``"<code>: <message>"`` and flatten into keyword context that
can be passed straight to a structlog event::

    except SearchError as err:
        log.warning("search_refused", **err.to_dict())
"""

from __future__ import annotations

from typing import Any


class BaseError(Exception):
    """Root of the error hierarchy.

    *search_class_id* names the backend family (``"Solr"``, ``"EDS"``, ...)
    that refused the operation; any extra keyword arguments are kept as
    ``context`` and end up in :meth:`to_dict`.
    """

    default_code: str = "discovery_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        search_class_id: str | None = None,
        cause: BaseException | None = None,
        **context: Any,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.search_class_id = search_class_id
        self.context: dict[str, Any] = context
        if cause is not None:
            self.__cause__ = cause

    @property
    def cause(self) -> BaseException | None:
        return self.__cause__

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, code={self.code!r})"

    def to_dict(self) -> dict[str, Any]:
        """Flat event fields: ``error_code``, ``error``, family and context."""
        payload: dict[str, Any] = {"error_code": self.code, "error": self.message}
        if self.search_class_id is not None:
            payload["search_class_id"] = self.search_class_id
        payload.update(self.context)
        if self.__cause__ is not None:
            payload["cause"] = repr(self.__cause__)
        return payload


__all__ = ["BaseError"]
