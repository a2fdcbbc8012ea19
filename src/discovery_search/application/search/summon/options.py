"""Summon search options."""
from __future__ import annotations

from discovery_search.application.search.base.options import Options


class SummonOptions(Options):
    search_class_id = "Summon"
    search_ini = "Summon"
    facets_ini = "Summon"

    def default_sort_options(self) -> dict[str, str]:
        return {
            "relevance": "sort_relevance",
            "PublicationDate:desc": "sort_year",
            "PublicationDate:asc": "sort_year_asc",
        }

    def get_search_action(self) -> str:
        return "summon-search"

    def get_advanced_search_action(self) -> str | None:
        return "summon-advanced"


__all__ = ["SummonOptions"]
