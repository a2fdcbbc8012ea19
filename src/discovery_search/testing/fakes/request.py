"""Testing fakes – FakeRequest."""
from __future__ import annotations

from typing import Any

from discovery_search.application.search.request import QueryStringRequest


class FakeRequest(QueryStringRequest):
    """Request built from keyword arguments; records the names that were read.

    ``FakeRequest(lookfor="cats", filter=['format:"Book"'])``
    """

    def __init__(self, **params: Any) -> None:
        super().__init__(params)
        self.accessed: list[str] = []

    def get(self, name: str, default: Any = None) -> Any:
        self.accessed.append(name)
        return super().get(name, default)


__all__ = ["FakeRequest"]
