"""Summon search parameters."""
from __future__ import annotations

from typing import Any, Iterable

from discovery_search.application.search.base.options import Options
from discovery_search.application.search.base.params import Params
from discovery_search.application.search.ranges import format_range_display

DATE_FACET = "PublicationDate"
EXPANDING_CHECKBOX_FIELDS = ("holdingsOnly", "queryExpansion")


class SummonParams(Params):
    """Summon facets may carry extra ``,``-separated parameters."""

    def __init__(self, options: Options) -> None:
        self.full_facet_settings: list[str] = []
        self.date_facet_settings: list[str] = []
        super().__init__(options)

    def add_facet(self, field: str, label: str | None = None, ored: bool = False) -> None:
        if DATE_FACET in field:
            self.date_facet_settings.append(DATE_FACET)
        else:
            self.full_facet_settings.append(field)
        super().add_facet(field.split(",")[0], label, ored)

    def reset_facet_config(self) -> None:
        super().reset_facet_config()
        self.full_facet_settings = []
        self.date_facet_settings = []

    def get_full_facet_settings(self) -> list[str]:
        return list(self.full_facet_settings)

    def get_date_facet_settings(self) -> list[str]:
        return list(self.date_facet_settings)

    def get_facet_label(self, field: str, value: str | None = None, default: str | None = None) -> str:
        # Unknown fields show their own name
        return super().get_facet_label(field, value, default or field)

    def get_checkbox_facets(
        self,
        include: Iterable[str] | None = None,
        include_dynamic: bool = True,
    ) -> list[dict[str, Any]]:
        facets = super().get_checkbox_facets(include, include_dynamic)
        for facet in facets:
            if facet["filter"].split(":", 1)[0] in EXPANDING_CHECKBOX_FIELDS:
                facet["always_visible"] = True
        return facets

    def format_filter_list_entry(self, field: str, value: str, operator: str, translate: bool) -> dict[str, str]:
        entry = super().format_filter_list_entry(field, value, operator, translate)
        display = format_range_display(value, separator="-")
        if display is not None:
            entry["display_text"] = display
        return entry

    def clone(self) -> "SummonParams":
        clone = super().clone()
        clone.full_facet_settings = list(self.full_facet_settings)
        clone.date_facet_settings = list(self.date_facet_settings)
        return clone


__all__ = ["SummonParams"]
