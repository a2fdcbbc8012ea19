"""Application search – Results: one executed search and its paging."""
from __future__ import annotations

import dataclasses
import math
from typing import Any, Protocol, runtime_checkable

from discovery_search.application.search.base.params import Params
from discovery_search.application.search.url_query import UrlQueryHelper, UrlQueryHelperFactory
from discovery_search.observability.logging import get_logger

log = get_logger(__name__)


@dataclasses.dataclass
class BackendResponse:
    """What a backend returns for one page of a search."""

    total: int
    records: list[Any] = dataclasses.field(default_factory=list)


@runtime_checkable
class SearchBackend(Protocol):
    def search(self, params: Params) -> BackendResponse: ...


class Results:
    """Wraps a :class:`Params` and the backend response it produced.

    The backend is called at most once; every accessor that needs data
    triggers :meth:`perform` lazily.
    """

    def __init__(
        self,
        params: Params,
        backend: SearchBackend | None = None,
        url_query_factory: UrlQueryHelperFactory | None = None,
    ) -> None:
        self.params = params
        self.backend = backend
        self._url_query_factory = url_query_factory or UrlQueryHelperFactory()
        self._total: int | None = None
        self._records: list[Any] = []

    def get_params(self) -> Params:
        return self.params

    def get_options(self) -> Any:
        return self.params.get_options()

    def perform(self) -> None:
        if self._total is not None:
            return
        if self.backend is None:
            self._total = 0
            self._records = []
            return
        response = self.backend.search(self.params)
        self._total = int(response.total)
        self._records = list(response.records)
        log.info(
            "search_performed",
            search_class_id=self.params.get_search_class_id(),
            total=self._total,
            page=self.params.get_page(),
            limit=self.params.get_limit(),
        )

    def get_result_total(self) -> int:
        self.perform()
        return self._total or 0

    def get_results(self) -> list[Any]:
        self.perform()
        return list(self._records)

    def get_start_record(self) -> int:
        return (self.params.get_page() - 1) * self.params.get_limit() + 1

    def get_end_record(self) -> int:
        total = self.get_result_total()
        end = self.params.get_page() * self.params.get_limit()
        return total if end > total else end

    def get_visible_total(self) -> int:
        """Result total, capped by the configured visible result limit."""
        total = self.get_result_total()
        visible_limit = self.params.get_options().get_visible_search_result_limit()
        if visible_limit > 0:
            return min(total, visible_limit)
        return total

    def get_page_count(self) -> int:
        limit = self.params.get_limit()
        if limit <= 0:
            return 0
        return math.ceil(self.get_visible_total() / limit)

    def get_url_query(self) -> UrlQueryHelper:
        return self._url_query_factory.from_params(self.params)


__all__ = ["BackendResponse", "Results", "SearchBackend"]
