"""Observability – structlog processors and get_logger helper."""
from __future__ import annotations

from typing import Any

import structlog


class SearchContextProcessor:
    """structlog processor that tags events with the active search family.

    Bind ``search_class_id`` on a logger (Params and Options do this) and the
    processor copies it into ``backend`` so log consumers can filter by
    family without knowing the internal key name::

        structlog.configure(processors=[SearchContextProcessor(), ...])
    """

    def __call__(
        self,
        logger: Any,           # noqa: ARG002
        method_name: str,      # noqa: ARG002
        event_dict: dict[str, Any],
    ) -> dict[str, Any]:
        family = event_dict.get("search_class_id")
        if family is not None:
            event_dict.setdefault("backend", family)
        return event_dict


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a bound structlog logger.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


__all__ = ["SearchContextProcessor", "get_logger"]
