"""EDS search options.

Limiters, expanders and search modes are described by the backend's info
call; callers pass that description in as *api_info*::

    {
        "limiters": {"FT": {"Label": "Full Text", "Type": "select",
                            "DefaultOn": "n", "LimiterValues": [{"Value": "y"}]}},
        "expanders": {"fulltext": {"Label": "Search full text", "DefaultOn": "y"}},
        "search_modes": {"all": "All terms", "any": "Any terms"},
        "default_mode": "all",
    }

Only the limiters and expanders named in ``General.common_limiters`` /
``General.common_expanders`` are offered as checkboxes.
"""
from __future__ import annotations

from typing import Any, Mapping

from discovery_search.application.search.base.options import Options
from discovery_search.config.loaders import ConfigLoader
from discovery_search.config.tree import ConfigTree
from discovery_search.i18n import Translator

VIEW_OPTIONS = {
    "list|title": "Title View",
    "list|brief": "Brief View",
    "list|detailed": "Detailed View",
}


class EDSOptions(Options):
    search_class_id = "EDS"
    search_ini = "EDS"
    facets_ini = "EDS"

    def __init__(
        self,
        config_loader: ConfigLoader,
        translator: Translator | None = None,
        api_info: Mapping[str, Any] | None = None,
    ) -> None:
        self.api_info: dict[str, Any] = dict(api_info or {})
        self.common_limiters: list[str] = []
        self.common_expanders: list[str] = []
        super().__init__(config_loader, translator)

    def _load_family_settings(self) -> None:
        super()._load_family_settings()
        search_settings = self.config_loader.get(self.search_ini)
        general = search_settings.section("General")
        self.common_limiters = self._common_setting(general, "common_limiters", self.get_available_limiters())
        self.common_expanders = self._common_setting(general, "common_expanders", self.get_available_expanders())
        translated = search_settings.section("Advanced_Facet_Settings").get_list("translated_facets")
        if translated:
            self.set_translated_facets([str(t) for t in translated])

    def _init_view_options(self, search_settings: ConfigTree) -> None:
        general = search_settings.section("General")
        self.view_options = dict(VIEW_OPTIONS)
        self.default_view = "list|" + (general.get_str("default_view", "brief") or "brief")

    @staticmethod
    def _common_setting(general: ConfigTree, setting: str, legal: Mapping[str, Any]) -> list[str]:
        requested = general.get_str(setting, "") or ""
        return [name.strip() for name in requested.split(",") if name.strip() in legal]

    def default_sort_options(self) -> dict[str, str]:
        return {"relevance": "sort_relevance", "date": "sort_year", "date2": "sort_year_asc"}

    def get_default_view(self) -> str:
        return self.default_view.split("|")[0]

    def get_eds_view(self) -> str:
        parts = self.default_view.split("|")
        return parts[1] if len(parts) > 1 else self.default_view

    def get_mode_options(self) -> dict[str, str]:
        return dict(self.api_info.get("search_modes", {}))

    def get_default_mode(self) -> str | None:
        return self.api_info.get("default_mode")

    def get_available_limiters(self) -> dict[str, Any]:
        return dict(self.api_info.get("limiters", {}))

    def get_available_expanders(self) -> dict[str, Any]:
        return dict(self.api_info.get("expanders", {}))

    def _label_for_checkbox_filter(self, label: str, default: str) -> str:
        # Untranslated keys fall back to the backend's label
        return default if self.translate(label) == label else label

    def get_search_screen_limiters(self) -> dict[str, dict[str, Any]]:
        limiters = self.get_available_limiters()
        result: dict[str, dict[str, Any]] = {}
        for key in self.common_limiters:
            limiter = limiters[key]
            result[key] = {
                "selectedvalue": f"LIMIT|{key}:y",
                "description": self._label_for_checkbox_filter(f"eds_limiter_{key}", limiter.get("Label", key)),
                "selected": limiter.get("DefaultOn") == "y",
            }
        return result

    def get_search_screen_expanders(self) -> dict[str, dict[str, Any]]:
        expanders = self.get_available_expanders()
        result: dict[str, dict[str, Any]] = {}
        for key in self.common_expanders:
            expander = expanders[key]
            result[key] = {
                "selectedvalue": f"EXPAND:{key}",
                "description": self._label_for_checkbox_filter(f"eds_expander_{key}", expander.get("Label", key)),
            }
        return result

    def get_default_expanders(self) -> list[str]:
        return [key for key, expander in self.get_available_expanders().items() if expander.get("DefaultOn") == "y"]

    def get_default_filters(self) -> list[str]:
        """Configured defaults plus expanders and select limiters that default on."""
        if self.default_filters:
            return list(self.default_filters)
        defaults = [f"EXPAND:{key}" for key in self.get_default_expanders()]
        for key, limiter in self.get_available_limiters().items():
            values = limiter.get("LimiterValues") or []
            if limiter.get("Type") == "select" and limiter.get("DefaultOn") == "y" and values:
                defaults.append(f"LIMIT|{key}:{values[0]['Value']}")
        return defaults

    def get_search_action(self) -> str:
        return "eds-search"

    def get_advanced_search_action(self) -> str | None:
        return "eds-advanced"


__all__ = ["EDSOptions", "VIEW_OPTIONS"]
