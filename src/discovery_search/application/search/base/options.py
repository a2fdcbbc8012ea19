"""Application search – per-family search options.

An :class:`Options` instance is built once from configuration and then only
read.  The explicit setters (:meth:`Options.set_limit_options`,
:meth:`Options.set_delimited_facets`, :meth:`Options.set_translated_facets`,
:meth:`Options.set_default_facet_delimiter`) count as re-initialisation and
must not be called on an instance shared between concurrent requests.
"""
from __future__ import annotations

import copy
from typing import Any, ClassVar, Mapping

from discovery_search.config.loaders import ConfigLoader
from discovery_search.config.tree import ConfigTree
from discovery_search.config.validation import InvalidSettingValueError, UnexpectedClassShapeError
from discovery_search.i18n import DEFAULT_DOMAIN, NullTranslator, Translator
from discovery_search.observability.logging import get_logger

log = get_logger(__name__)


def explode_list_setting(value: Any, setting_name: str = "list") -> list[int]:
    """Parse ``"20,40,60"`` (or a list) into integers."""
    parts = value if isinstance(value, (list, tuple)) else str(value).split(",")
    result: list[int] = []
    for part in parts:
        text = str(part).strip()
        if not text:
            continue
        try:
            result.append(int(text))
        except ValueError as exc:
            raise InvalidSettingValueError(setting_name, value, "expected integers") from exc
    return result


def _ordered_mapping(tree: ConfigTree, key: str) -> dict[str, str]:
    value = tree.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise InvalidSettingValueError(key, value, "expected a key/value section")
    return {str(k): str(v) for k, v in value.items()}


class Options:
    """Read-only settings for one search family.

    Concrete families declare ``search_class_id`` and the names of the
    configuration trees they read.
    """

    search_class_id: ClassVar[str | None] = None
    main_ini: ClassVar[str] = "config"
    search_ini: ClassVar[str] = "searches"
    facets_ini: ClassVar[str] = "facets"

    def __init__(self, config_loader: ConfigLoader, translator: Translator | None = None) -> None:
        self.config_loader = config_loader
        self.translator: Translator = translator or NullTranslator()

        self.sort_options: dict[str, str] = {}
        self.hidden_sort_options: list[str] = []
        self.facet_sort_options: dict[str, dict[str, str]] = {}
        self.default_sort = "relevance"
        self.default_sort_by_handler: dict[str, str] = {}
        self.rss_sort: str | None = None
        self.default_handler: str | None = None
        self.advanced_handlers: dict[str, str] = {}
        self.basic_handlers: dict[str, str] = {}
        self.special_advanced_facets = ""
        self.retain_filters_by_default = True
        self.always_display_reset_filters = False
        self.default_filters: list[str] = []
        self.default_limit = 20
        self.limit_options: list[int] = [self.default_limit]
        self.default_view = "list"
        self.view_options: dict[str, str] = {}
        self._default_facet_delimiter: str | None = None
        self._delimited_facets: list[str] = []
        self._processed_delimited_facets: dict[str, str] | None = None
        self.translated_facets: list[str] = []
        self.translated_facets_text_domains: dict[str, str] = {}
        self.translated_facets_formats: dict[str, str] = {}
        self.hierarchical_facets: list[str] = []
        self.hierarchical_facet_separators: dict[str, str] = {}
        self.spellcheck = True
        self.highlight = False
        self.autocomplete_enabled = False
        self.autocomplete_auto_submit = True
        self.shards: dict[str, str] = {}
        self.default_selected_shards: list[str] = []
        self.visible_shard_checkboxes = False
        self.result_limit = -1

        self._load_base_settings()
        self._load_family_settings()
        log.debug(
            "options_loaded",
            search_class_id=self.get_search_class_id(),
            handlers=len(self.basic_handlers),
            sort_options=len(self.sort_options),
        )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def _load_base_settings(self) -> None:
        facet_settings = self.config_loader.get(self.facets_ini)
        family_id = self.get_search_class_id()
        available = facet_settings.section("AvailableFacetSortOptions").section(family_id)
        for facet, sort_options in available.items():
            self.facet_sort_options[facet] = {}
            for field_and_label in str(sort_options).split(","):
                field, _, label = field_and_label.partition("=")
                self.facet_sort_options[facet][field.strip()] = label.strip()

        search_settings = self.config_loader.get(self.search_ini)
        general = search_settings.section("General")
        self.retain_filters_by_default = general.get_bool("retain_filters_by_default", True)
        self.always_display_reset_filters = general.get_bool("always_display_reset_filters", False)
        self.hidden_sort_options = [str(p) for p in search_settings.section("HiddenSorting").get_list("pattern")]

    def _load_family_settings(self) -> None:
        """Read the handler/sort/limit/view/facet sections shared by most families."""
        search_settings = self.config_loader.get(self.search_ini)
        general = search_settings.section("General")

        if general.has("default_limit"):
            limit = general.get_int("default_limit")
            if limit is None or limit < 1:
                raise InvalidSettingValueError("default_limit", general.get("default_limit"), "expected a positive integer")
            self.default_limit = limit
        if general.has("limit_options"):
            self.limit_options = explode_list_setting(general.get("limit_options"), "limit_options")
        else:
            self.limit_options = [self.default_limit]
        if general.has("default_sort"):
            self.default_sort = general.get_str("default_sort", self.default_sort) or self.default_sort
        self.default_sort_by_handler = _ordered_mapping(search_settings, "DefaultSortingByType")
        self.rss_sort = search_settings.section("RSS").get_str("sort")
        self.default_handler = general.get_str("default_handler")
        self.default_filters = [str(f) for f in general.get_list("default_filters")]
        self.result_limit = general.get_int("result_limit", -1) or -1

        self.basic_handlers = _ordered_mapping(search_settings, "Basic_Searches")
        self.advanced_handlers = _ordered_mapping(search_settings, "Advanced_Searches")
        self.sort_options = _ordered_mapping(search_settings, "Sorting") or self.default_sort_options()
        self._init_view_options(search_settings)

        self.highlight = general.get_bool("highlighting") or general.get_bool("snippets")
        autocomplete = search_settings.section("Autocomplete")
        self.autocomplete_enabled = autocomplete.get_bool("enabled", self.autocomplete_enabled)
        self.autocomplete_auto_submit = autocomplete.get_bool("auto_submit", self.autocomplete_auto_submit)

        self._init_shards(search_settings)

        facet_settings = self.config_loader.get(self.facets_ini)
        advanced = facet_settings.section("Advanced_Settings")
        translated = advanced.get_list("translated_facets")
        if translated:
            self.set_translated_facets([str(t) for t in translated])
        if advanced.has("delimiter"):
            self.set_default_facet_delimiter(advanced.get_str("delimiter"))
        delimited = advanced.get_list("delimited_facets")
        if delimited:
            self.set_delimited_facets([str(d) for d in delimited])
        self.special_advanced_facets = advanced.get_str("special_facets", "") or ""
        special = facet_settings.section("SpecialFacets")
        self.hierarchical_facets = [str(f) for f in special.get_list("hierarchical")]
        self.hierarchical_facet_separators = _ordered_mapping(special, "hierarchicalFacetSeparators")

        main = self.config_loader.get(self.main_ini)
        self.spellcheck = main.section("Spelling").get_bool("enabled", self.spellcheck)

    def default_sort_options(self) -> dict[str, str]:
        return {"relevance": "sort_relevance"}

    def _init_view_options(self, search_settings: ConfigTree) -> None:
        general = search_settings.section("General")
        if general.has("default_view"):
            self.default_view = general.get_str("default_view", self.default_view) or self.default_view
        views = _ordered_mapping(search_settings, "Views")
        if views:
            self.view_options = views
        elif general.has("default_view"):
            self.view_options = {self.default_view: self.default_view}
        else:
            self.view_options = {"list": "List"}

    def _init_shards(self, search_settings: ConfigTree) -> None:
        self.shards = _ordered_mapping(search_settings, "IndexShards")
        if not self.shards:
            return
        preferences = search_settings.section("ShardPreferences")
        checked = [str(s) for s in preferences.get_list("defaultChecked")]
        self.default_selected_shards = checked or list(self.shards)
        self.visible_shard_checkboxes = preferences.get_bool("showCheckboxes", False)

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    def get_search_class_id(self) -> str:
        """Family tag (``"Solr"``, ``"Summon"``, ...); ``"Mock"`` for test doubles."""
        if self.search_class_id:
            return self.search_class_id
        class_name = type(self).__name__
        if class_name.startswith("Mock"):
            return "Mock"
        raise UnexpectedClassShapeError(f"{type(self).__module__}.{class_name}")

    def translate(self, key: Any, tokens: Mapping[str, str] | None = None, default: str | None = None) -> str:
        return self.translator.translate(key, tokens, default)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def get_basic_handlers(self) -> dict[str, str]:
        return dict(self.basic_handlers)

    def get_advanced_handlers(self) -> dict[str, str]:
        return dict(self.advanced_handlers)

    def get_default_handler(self) -> str | None:
        if self.default_handler:
            return self.default_handler
        return next(iter(self.basic_handlers), None)

    def get_handler_for_label(self, label: str | None) -> str | None:
        """Reverse-lookup a handler by its translated label (basic first)."""
        if label:
            wanted = self.translate(label)
            for handlers in (self.basic_handlers, self.advanced_handlers):
                for handler, current in handlers.items():
                    if self.translate(current) == wanted:
                        return handler
        return self.get_default_handler()

    def get_label_for_basic_handler(self, handler: str) -> str | None:
        return self.basic_handlers.get(handler)

    def get_human_readable_field_name(self, field: str) -> str:
        if field in self.basic_handlers:
            return self.translate(self.basic_handlers[field])
        if field in self.advanced_handlers:
            return self.translate(self.advanced_handlers[field])
        return field

    # ------------------------------------------------------------------
    # Sorting, limits, views
    # ------------------------------------------------------------------

    def get_sort_options(self) -> dict[str, str]:
        return dict(self.sort_options)

    def get_hidden_sort_options(self) -> list[str]:
        return list(self.hidden_sort_options)

    def get_facet_sort_options(self, facet: str = "*") -> dict[str, str]:
        return dict(self.facet_sort_options.get(facet, self.facet_sort_options.get("*", {})))

    def get_default_sort_by_handler(self, handler: str | None = None) -> str:
        if not handler:
            handler = self.get_default_handler()
        if handler and handler in self.default_sort_by_handler:
            return self.default_sort_by_handler[handler]
        return self.default_sort

    def get_rss_sort(self, sort: str) -> str:
        """Prefix *sort* with the configured RSS sort (replacing ``relevance``)."""
        if not self.rss_sort:
            return sort
        if sort == "relevance":
            return self.rss_sort
        return f"{self.rss_sort},{sort}"

    def get_default_limit(self) -> int:
        return self.default_limit

    def get_limit_options(self) -> list[int]:
        return list(self.limit_options)

    def set_limit_options(self, options: list[int]) -> None:
        if not options:
            return
        self.limit_options = [int(o) for o in options]
        if self.default_limit not in self.limit_options:
            self.default_limit = self.limit_options[0]

    def get_default_view(self) -> str:
        return self.default_view

    def get_default_view_setting(self) -> str:
        """Default view as stored in the view options (before any splitting)."""
        return self.default_view

    def get_view_options(self) -> dict[str, str]:
        return dict(self.view_options)

    # ------------------------------------------------------------------
    # Facet display settings
    # ------------------------------------------------------------------

    def get_default_facet_delimiter(self) -> str | None:
        return self._default_facet_delimiter

    def set_default_facet_delimiter(self, delimiter: str | None) -> None:
        self._default_facet_delimiter = delimiter
        self._processed_delimited_facets = None

    def get_delimited_facets(self, processed: bool = False) -> Any:
        """Raw ``field|delimiter`` entries, or (processed) a field → delimiter map."""
        if not processed:
            return list(self._delimited_facets)
        if self._processed_delimited_facets is None:
            default = self.get_default_facet_delimiter()
            result: dict[str, str] = {}
            for current in self._delimited_facets:
                field, sep, delimiter = current.partition("|")
                if sep:
                    result[field] = delimiter
                elif default:
                    result[field] = default
            self._processed_delimited_facets = result
        return dict(self._processed_delimited_facets)

    def set_delimited_facets(self, facets: list[str]) -> None:
        self._delimited_facets = list(facets)
        self._processed_delimited_facets = None

    def get_translated_facets(self) -> list[str]:
        return list(self.translated_facets)

    def set_translated_facets(self, facets: list[str]) -> None:
        """Accepts ``field``, ``field:domain`` or ``field:domain:format`` entries."""
        self.translated_facets = []
        self.translated_facets_text_domains = {}
        self.translated_facets_formats = {}
        for current in facets:
            parts = current.split(":")
            self.translated_facets.append(parts[0])
            if len(parts) > 1:
                self.translated_facets_text_domains[parts[0]] = parts[1]
            if len(parts) > 2:
                self.translated_facets_formats[parts[0]] = parts[2]

    def get_text_domain_for_translated_facet(self, field: str) -> str:
        return self.translated_facets_text_domains.get(field, DEFAULT_DOMAIN)

    def get_format_for_translated_facet(self, field: str) -> str | None:
        return self.translated_facets_formats.get(field)

    def get_hierarchical_facets(self) -> list[str]:
        return list(self.hierarchical_facets)

    def get_hierarchical_facet_separators(self) -> dict[str, str]:
        return dict(self.hierarchical_facet_separators)

    def limit_order_override(self, limit: str) -> list[str]:
        """Facet values forced to the front of the list for the *limit* bucket."""
        advanced = self.config_loader.get(self.facets_ini).section("Advanced_Settings")
        delimiter = advanced.get_str("limitDelimiter", "::") or "::"
        configured = advanced.section("limitOrderOverride").get_str(limit, "") or ""
        return [part.strip() for part in configured.split(delimiter)]

    # ------------------------------------------------------------------
    # Filters, shards and feature flags
    # ------------------------------------------------------------------

    def get_default_filters(self) -> list[str]:
        return list(self.default_filters)

    def get_retain_filter_setting(self) -> bool:
        return self.retain_filters_by_default

    def should_display_reset_filters(self) -> bool:
        return self.always_display_reset_filters or self.get_retain_filter_setting()

    def get_shards(self) -> dict[str, str]:
        return dict(self.shards)

    def get_default_selected_shards(self) -> list[str]:
        return list(self.default_selected_shards)

    def show_shard_checkboxes(self) -> bool:
        return self.visible_shard_checkboxes

    def get_visible_search_result_limit(self) -> int:
        return int(self.result_limit)

    def spellcheck_enabled(self, enabled: bool | None = None) -> bool:
        if enabled is not None:
            self.spellcheck = enabled
        return self.spellcheck

    def highlight_enabled(self) -> bool:
        return self.highlight

    def disable_highlighting(self) -> None:
        self.highlight = False

    def is_autocomplete_enabled(self) -> bool:
        return self.autocomplete_enabled

    def get_special_advanced_facets(self) -> str:
        return self.special_advanced_facets

    def get_search_action(self) -> str:
        return "search-results"

    def get_advanced_search_action(self) -> str | None:
        return None

    def __copy__(self) -> "Options":
        clone = self.__class__.__new__(self.__class__)
        clone.__dict__.update(self.__dict__)
        for key, value in self.__dict__.items():
            if isinstance(value, (list, dict)):
                clone.__dict__[key] = copy.copy(value)
        return clone


__all__ = ["Options", "explode_list_setting"]
