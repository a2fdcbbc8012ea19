"""Solr search options."""
from __future__ import annotations

from discovery_search.application.search.base.options import Options
from discovery_search.config.loaders import ConfigLoader
from discovery_search.i18n import Translator


class SolrOptions(Options):
    search_class_id = "Solr"

    def __init__(self, config_loader: ConfigLoader, translator: Translator | None = None) -> None:
        self.sort_tie_breaker: str | None = None
        self.empty_search_relevance_override: str | None = None
        super().__init__(config_loader, translator)

    def _load_family_settings(self) -> None:
        super()._load_family_settings()
        general = self.config_loader.get(self.search_ini).section("General")
        self.sort_tie_breaker = general.get_str("tie_breaker_sort")
        self.empty_search_relevance_override = general.get_str("empty_search_relevance_override")

    def default_sort_options(self) -> dict[str, str]:
        return {
            "relevance": "sort_relevance",
            "year": "sort_year",
            "year asc": "sort_year_asc",
            "callnumber-sort": "sort_callnumber",
            "author": "sort_author",
            "title": "sort_title",
        }

    def get_sort_tie_breaker(self) -> str | None:
        return self.sort_tie_breaker

    def get_empty_search_relevance_override(self) -> str | None:
        return self.empty_search_relevance_override

    def get_advanced_search_action(self) -> str | None:
        return "search-advanced"

    def get_facet_list_action(self) -> str:
        return "search-facetlist"


__all__ = ["SolrOptions"]
