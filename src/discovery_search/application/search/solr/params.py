"""Solr search parameters."""
from __future__ import annotations

import copy
from typing import Any, Iterable

from discovery_search.application.search.base.params import Params
from discovery_search.application.search.ranges import format_range_display
from discovery_search.application.search.request import RequestParams, first

ILLUSTRATED_FILTERS = {"1": "illustrated:Illustrated", "0": 'illustrated:"Not Illustrated"'}
DEFAULT_QUERY_ID_LIMIT = 1024


class SolrParams(Params):
    """Adds id override queries, custom checkbox filters and range display."""

    searching_by_id = False

    def _init_facet_settings(self) -> None:
        super()._init_facet_settings()
        legacy = {str(k): str(v) for k, v in self._facet_settings().section("LegacyFields").items()}
        if legacy:
            self.set_facet_aliases({**self.get_facet_aliases(), **legacy})

    def _init_search(self, request: RequestParams) -> None:
        ids = request.get("overrideIds")
        if isinstance(ids, list):
            self.set_query_ids(ids)
        else:
            super()._init_search(request)

    def _init_filters(self, request: RequestParams) -> None:
        super()._init_filters(request)
        illustration = first(request.get("illustration"))
        if illustration is not None and str(illustration) in ILLUSTRATED_FILTERS:
            self.add_filter(ILLUSTRATED_FILTERS[str(illustration)])

    def set_query_ids(self, ids: Iterable[str]) -> None:
        """Replace the query with an explicit ``id:(...)`` list."""
        # spellcheck/highlight are switched off on a private copy of the options
        self.options = copy.copy(self.options)
        self.options.spellcheck_enabled(False)
        self.options.disable_highlighting()

        ids = list(ids)
        if not ids:
            self.set_override_query("NOT *:*")
            return
        quoted = ['"' + str(i).replace('"', '\\"') + '"' for i in ids]
        self.searching_by_id = True
        self.set_override_query("id:(" + " OR ".join(quoted) + ")")
        self._log.debug("query_ids_set", count=len(ids))

    def get_query_id_limit(self) -> int:
        main = self.config_loader.get(self.options.main_ini)
        return main.section("Index").get_int("maxBooleanClauses", DEFAULT_QUERY_ID_LIMIT) or DEFAULT_QUERY_ID_LIMIT

    def format_filter_list_entry(self, field: str, value: str, operator: str, translate: bool) -> dict[str, str]:
        entry = super().format_filter_list_entry(field, value, operator, translate)
        display = format_range_display(value)
        if display is not None:
            entry["display_text"] = display
        return entry

    def get_checkbox_facets(
        self,
        include: Iterable[str] | None = None,
        include_dynamic: bool = True,
    ) -> list[dict[str, Any]]:
        """Inverted custom filters expand the result set, so they stay visible."""
        facets = super().get_checkbox_facets(include, include_dynamic)
        custom = self._facet_settings().section("CustomFilters")
        filter_field = custom.get_str("custom_filter_field", "vufind")
        inverted = custom.section("inverted_filters")
        for facet in facets:
            field, _, custom_filter = facet["filter"].partition(":")
            if field == filter_field and custom_filter in inverted:
                facet["always_visible"] = True
        return facets


__all__ = ["SolrParams"]
