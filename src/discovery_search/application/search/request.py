"""Application search – inbound request-parameter reader.

The engine reads request data through the small :class:`RequestParams`
protocol only.  :class:`QueryStringRequest` is the stock implementation; it
accepts either a mapping or a raw URL query string, where ``name[]=…``
parameters become lists and a repeated plain ``name`` keeps its last value.
"""
from __future__ import annotations

from typing import Any, Mapping, Protocol, Union, runtime_checkable
from urllib.parse import parse_qsl

from discovery_search.config.tree import FALSE_STRINGS

ParamValue = Union[str, list[str]]


@runtime_checkable
class RequestParams(Protocol):
    def get(self, name: str, default: Any = None) -> Any: ...


class QueryStringRequest:
    """Read-only key→value(s) request parameters."""

    def __init__(self, params: Mapping[str, Any] | None = None) -> None:
        self._params: dict[str, Any] = {}
        for key, value in (params or {}).items():
            if isinstance(value, tuple):
                value = list(value)
            self._params[key] = value

    @classmethod
    def from_query_string(cls, query: str) -> "QueryStringRequest":
        params: dict[str, Any] = {}
        for key, value in parse_qsl(query.lstrip("?"), keep_blank_values=True):
            if key.endswith("[]"):
                params.setdefault(key[:-2], []).append(value)
            else:
                params[key] = value
        return cls(params)

    def get(self, name: str, default: Any = None) -> Any:
        return self._params.get(name, default)

    def __contains__(self, name: object) -> bool:
        return name in self._params

    def to_dict(self) -> dict[str, Any]:
        return dict(self._params)

    def __repr__(self) -> str:
        return f"QueryStringRequest({self._params!r})"


def as_list(value: Any) -> list[Any]:
    """Normalise a scalar-or-list request value to a list (``None`` → ``[]``)."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def first(value: Any) -> Any:
    """Flatten a list value to its first element (legacy URL compatibility)."""
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def as_flag(value: Any) -> bool:
    """Read a flag parameter; absent, empty, ``0``, ``false``, ``no`` and ``off`` are unset."""
    value = first(value)
    if value is None:
        return False
    return str(value).strip().lower() not in FALSE_STRINGS


__all__ = ["ParamValue", "QueryStringRequest", "RequestParams", "as_flag", "as_list", "first"]
