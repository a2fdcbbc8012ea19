"""EDS search parameters."""
from __future__ import annotations

from typing import Any

from discovery_search.application.search.base.params import Params
from discovery_search.application.search.eds.options import EDSOptions
from discovery_search.application.search.request import RequestParams, first

DATE_FACET = "PublicationDate"
_FACET_ID_PREFIXES = ("LIMIT|", "SEARCHMODE|")


class EDSParams(Params):
    """Views are stored as ``list|<eds view>``; limiters and expanders are checkboxes."""

    options: EDSOptions

    def __init__(self, options: EDSOptions) -> None:
        self.full_facet_settings: list[str] = []
        self.date_facet_settings: list[str] = []
        self.search_mode: str | None = None
        super().__init__(options)

    def init_from_request(self, request: RequestParams) -> None:
        super().init_from_request(request)
        mode = first(request.get("searchmode"))
        self.search_mode = str(mode) if mode is not None else self.options.get_default_mode()

    def get_search_mode(self) -> str | None:
        return self.search_mode

    def get_view(self) -> str:
        return (self.view or "").split("|")[0] or self.options.get_default_view()

    def get_eds_view(self) -> str:
        parts = (self.view or "").split("|")
        return parts[1] if len(parts) > 1 else self.options.get_eds_view()

    def get_view_list(self) -> dict[str, dict[str, Any]]:
        current = f"{self.get_view()}|{self.get_eds_view()}"
        return {
            key: {"desc": desc, "selected": key == current}
            for key, desc in self.options.get_view_options().items()
        }

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

    def init_checkbox_facets(self, section: str = "CheckboxFacets") -> None:
        """Configured checkboxes, then search-screen limiters and expanders."""
        super().init_checkbox_facets(section)
        for limiter in self.options.get_search_screen_limiters().values():
            self.add_checkbox_facet(limiter["selectedvalue"], limiter["description"], True)
        for expander in self.options.get_search_screen_expanders().values():
            self.add_checkbox_facet(expander["selectedvalue"], expander["description"], True)

    def get_facet_label(self, field: str, value: str | None = None, default: str | None = None) -> str:
        if value is not None:
            checkbox = self.checkbox_facets.get(field, {}).get(f"{field}:{value}")
            if checkbox is not None:
                return checkbox.description
        facet_id = field
        for prefix in _FACET_ID_PREFIXES:
            if field.startswith(prefix):
                facet_id = field[len(prefix):]
                break
        return super().get_facet_label(facet_id, value, default or facet_id)

    def clone(self) -> "EDSParams":
        clone = super().clone()
        clone.full_facet_settings = list(self.full_facet_settings)
        clone.date_facet_settings = list(self.date_facet_settings)
        return clone


__all__ = ["EDSParams"]
