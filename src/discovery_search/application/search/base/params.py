"""Application search – Params, the per-request search state.

``Params`` owns the query tree, the visible and hidden filter stores and the
paging/sort/view/shard selection of one request.  It reads validation rules
and defaults from a shared :class:`~discovery_search.application.search.base.options.Options`
and never mutates it (the Solr id override copies it first).

Initialisation order matters; see :meth:`Params.init_from_request`.
"""
from __future__ import annotations

import copy
import re
from typing import Any, Iterable, Mapping

from discovery_search.application.search import ranges
from discovery_search.application.search.base.options import Options
from discovery_search.application.search.filters import (
    CheckboxFacet,
    FilterStore,
    parse_filter,
)
from discovery_search.application.search.minified import MinifiedSearch, expand_query, minify_query
from discovery_search.application.search.query import (
    Group,
    Operator,
    QueryNode,
    Term,
    display_query,
    iter_terms,
    to_advanced,
)
from discovery_search.application.search.request import QueryStringRequest, RequestParams, as_flag, as_list, first
from discovery_search.config.tree import ConfigTree
from discovery_search.kernel.errors import (
    UnsupportedOperationError,
    UnsupportedSearchTypeError,
    UnsupportedSearchUrlError,
)
from discovery_search.observability.logging import get_logger

log = get_logger(__name__)

UNRECOGNIZED_FACET_LABEL = "unrecognized_facet_label"
RSS_VIEW = "rss"
RSS_MIN_LIMIT = 50

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _intval(value: Any) -> int:
    """Loose integer cast: leading digits win, anything else is 0."""
    value = first(value)
    if value is None:
        return 0
    if isinstance(value, (bool, int)):
        return int(value)
    if isinstance(value, float):
        return int(value)
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0


def _section_map(tree: ConfigTree, key: str) -> dict[str, str]:
    return {str(k): str(v) for k, v in tree.section(key).items()}


class Params:
    """Search state of a single request, validated against *options*."""

    def __init__(self, options: Options) -> None:
        self.options = options
        self.config_loader = options.config_loader
        self.search_type = "basic"
        self.query: QueryNode = Term("", options.get_default_handler())
        self.page = 1
        self.limit = options.get_default_limit()
        self.sort: str | None = None
        self.skip_rss_sort = False
        self.view: str | None = None
        self.selected_shards: list[str] = []
        self.default_filters_applied = False
        self.override_query: str | None = None

        self.filters = FilterStore()
        self.hidden_filters = FilterStore(check_duplicates=False)
        self.facet_config: dict[str, str] = {}
        self.ored_facets: list[str] = []
        self.checkbox_facets: dict[str, dict[str, CheckboxFacet]] = {}
        self.extra_facet_labels: dict[str, str] = {}

        self._log = log.bind(search_class_id=options.get_search_class_id())
        self._init_facet_settings()

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    def _facet_settings(self) -> ConfigTree:
        return self.config_loader.get(self.options.facets_ini)

    def _init_facet_settings(self) -> None:
        facets = self._facet_settings()
        self.set_facet_aliases(_section_map(facets, "FacetAliases"))
        self.extra_facet_labels = _section_map(facets, "ExtraFacetLabels")
        self.init_facet_list("Results", "Results_Settings")
        self.init_checkbox_facets()

    def init_facet_list(self, facet_list: str, facet_settings: str) -> bool:
        """Activate the facets listed in one facets-config section.

        Returns False when the section is empty.
        """
        facets = self._facet_settings()
        listed = facets.section(facet_list)
        if not listed:
            return False
        or_setting = facets.section(facet_settings).get_str("orFacets", "") or ""
        ored = [f.strip() for f in or_setting.split(",") if f.strip()]
        for field, label in listed.items():
            self.add_facet(field, str(label), "*" in ored or field in ored)
        return True

    def init_advanced_facets(self) -> bool:
        return self.init_facet_list("Advanced", "Advanced_Settings")

    def init_home_page_facets(self) -> bool:
        if not self.init_facet_list("HomePage", "HomePage_Settings"):
            return self.init_advanced_facets()
        return True

    def init_checkbox_facets(self, section: str = "CheckboxFacets") -> None:
        for filter_string, description in self._facet_settings().section(section).items():
            self.add_checkbox_facet(filter_string, str(description))

    def set_facet_aliases(self, aliases: Mapping[str, str]) -> None:
        self.filters.set_aliases(aliases)
        self.hidden_filters.set_aliases(aliases)

    def get_facet_aliases(self) -> dict[str, str]:
        return self.filters.aliases

    def get_aliases_for_facet_field(self, field: str) -> list[str]:
        return self.filters.aliases_for(field)

    @classmethod
    def from_url_params(cls, options: Options, url_params: Mapping[str, Any]) -> "Params":
        """Build a Params from a URL parameter map (see ``UrlQueryHelper``)."""
        params = cls(options)
        params.init_from_request(QueryStringRequest(url_params))
        return params

    # ------------------------------------------------------------------
    # Identity and translation
    # ------------------------------------------------------------------

    def get_options(self) -> Options:
        return self.options

    def get_search_class_id(self) -> str:
        return self.options.get_search_class_id()

    def translate(self, key: Any, tokens: Mapping[str, str] | None = None, default: str | None = None) -> str:
        return self.options.translate(key, tokens, default)

    # ------------------------------------------------------------------
    # Request initialisation
    # ------------------------------------------------------------------

    def init_from_request(self, request: RequestParams) -> None:
        """Populate the search state from request parameters.

        View comes first because the RSS view changes the default limit and
        sort; sort comes after the search because the default sort depends on
        the search handler.
        """
        self._init_view(request)
        self._init_limit(request)
        self._init_page(request)
        self._init_shards(request)
        self._init_search(request)
        self._init_sort(request)
        self._init_filters(request)
        self._init_hidden_filters(request)
        self._log.debug(
            "params_initialized",
            search_type=self.search_type,
            page=self.page,
            limit=self.limit,
            sort=self.sort,
            view=self.view,
            filters=len(self.filters),
        )

    def _init_view(self, request: RequestParams) -> None:
        view = first(request.get("view"))
        if not view:
            self.set_view(self.options.get_default_view_setting())
        elif view == RSS_VIEW or view in self.options.get_view_options():
            self.set_view(str(view))
        else:
            self._log.debug("view_rejected", requested=view)
            self.set_view(self.options.get_default_view_setting())

    def _init_limit(self, request: RequestParams) -> None:
        default_limit = self.options.get_default_limit()
        limit_options = self.options.get_limit_options()
        limit = _intval(request.get("limit"))
        if limit and limit != default_limit:
            max_limit = max(limit_options) if limit_options else default_limit
            if limit in limit_options or 0 < limit < max_limit:
                self.limit = limit
                return
            self._log.debug("limit_rejected", requested=limit, default=default_limit)
        if self.get_view() == RSS_VIEW and default_limit < RSS_MIN_LIMIT:
            default_limit = RSS_MIN_LIMIT
        self.limit = default_limit

    def _init_page(self, request: RequestParams) -> None:
        self.page = max(_intval(request.get("page")), 1)

    def _init_shards(self, request: RequestParams) -> None:
        legal = self.options.get_shards()
        selected: list[str] = []
        for shard in as_list(request.get("shard")):
            if shard in legal:
                selected.append(str(shard))
            else:
                self._log.debug("shard_rejected", shard=shard)
        self.selected_shards = selected or self.options.get_default_selected_shards()

    def _init_search(self, request: RequestParams) -> None:
        if not self._init_basic_search(request):
            self._init_advanced_search(request)

    def _init_basic_search(self, request: RequestParams) -> bool:
        lookfor = request.get("lookfor")
        if lookfor is None:
            return False
        if isinstance(lookfor, (list, tuple)):
            if len(lookfor) > 1:
                raise UnsupportedSearchUrlError(search_class_id=self.get_search_class_id())
            lookfor = lookfor[0] if lookfor else ""
        self.set_basic_search(str(lookfor), first(request.get("type")))
        return True

    def _init_advanced_search(self, request: RequestParams) -> None:
        """Read ``lookfor<n>``/``type<n>``/``bool<n>`` groups and ``join``.

        A request with ``lookfor0`` is advanced even when every term is
        empty; without it the search is an empty basic search.
        """
        if request.get("lookfor0") is None:
            self.set_basic_search("")
            return
        default_handler = self.options.get_default_handler()
        groups: list[QueryNode] = []
        index = 0
        while (lookfor := request.get(f"lookfor{index}")) is not None:
            types = as_list(request.get(f"type{index}"))
            terms: list[QueryNode] = []
            for position, text in enumerate(as_list(lookfor)):
                if text is None or str(text) == "":
                    continue
                handler = types[position] if position < len(types) and types[position] else default_handler
                terms.append(Term(str(text), handler))
            if terms:
                operator = Operator.parse(first(request.get(f"bool{index}")), Operator.AND)
                groups.append(Group(operator, terms))
            index += 1
        self.search_type = "advanced"
        self.query = Group(Operator.parse(first(request.get("join")), Operator.AND), groups)

    def _init_sort(self, request: RequestParams) -> None:
        if request.get("skip_rss_sort", "unset") != "unset":
            self.skip_rss_sort = True
        self.set_sort(first(request.get("sort")))

    def _init_filters(self, request: RequestParams) -> None:
        for raw in as_list(request.get("filter")):
            if raw:
                self.add_filter(str(raw))

        if as_flag(request.get("dfApplied")):
            self.default_filters_applied = True
        else:
            defaults = self.options.get_default_filters()
            for raw in defaults:
                self.add_filter(raw)
            if defaults:
                self.default_filters_applied = True

        self._init_range_filters(request)

    def _init_range_filters(self, request: RequestParams) -> None:
        for kind in self.range_kinds():
            self.init_generic_range_filters(
                request, kind.request_param, kind.value_filter, kind.filter_generator
            )

    def _init_hidden_filters(self, request: RequestParams) -> None:
        for raw in as_list(request.get("hiddenFilters")):
            if raw:
                self.add_hidden_filter(str(raw))

    # ------------------------------------------------------------------
    # Query
    # ------------------------------------------------------------------

    def set_basic_search(self, lookfor: str, handler: str | None = None) -> None:
        self.search_type = "basic"
        if not handler:
            handler = self.options.get_default_handler()
        if not lookfor.strip():
            lookfor = ""
        self.query = Term(lookfor, handler)

    def convert_to_advanced_search(self) -> None:
        if self.search_type == "advanced":
            return
        if self.search_type != "basic" or not isinstance(self.query, Term):
            raise UnsupportedSearchTypeError(self.search_type, search_class_id=self.get_search_class_id())
        self.query = to_advanced(self.query)
        self.search_type = "advanced"

    def get_query(self) -> QueryNode:
        return self.query

    def set_query(self, query: QueryNode) -> None:
        self.query = query
        self.search_type = "basic" if isinstance(query, Term) else "advanced"

    def get_search_type(self) -> str:
        return self.search_type

    def get_search_handler(self) -> str | None:
        """The handler of a basic search; None for a group query."""
        if isinstance(self.query, Term):
            return self.query.handler
        return None

    def get_display_query(self) -> str:
        return display_query(
            self.query,
            translate=self.translate,
            field_label=self.options.get_human_readable_field_name,
            default_handler=self.options.get_default_handler(),
        )

    def replace_search_term(self, old: str, new: str) -> None:
        self.query.replace_term(old, new)

    def get_display_query_with_replaced_term(self, old: str, new: str) -> str:
        original = self.query
        self.query = copy.deepcopy(original)
        try:
            self.replace_search_term(old, new)
            return self.get_display_query()
        finally:
            self.query = original

    def find_search_term(self, needle: str) -> bool:
        return self.query.contains_term(needle)

    def all_terms(self) -> list[Term]:
        return list(iter_terms(self.query))

    def extract_advanced_terms(self) -> str:
        return " ".join(term.text for term in iter_terms(self.query))

    def get_override_query(self) -> str | None:
        return self.override_query

    def set_override_query(self, query: str | None) -> None:
        self.override_query = query

    def set_query_ids(self, ids: Iterable[str]) -> None:
        raise UnsupportedOperationError(
            "set_query_ids", type(self).__name__, search_class_id=self.get_search_class_id()
        )

    def get_query_id_limit(self) -> int:
        """Maximum number of ids :meth:`set_query_ids` accepts (-1: unlimited)."""
        return -1

    # ------------------------------------------------------------------
    # Sort, limit, page, view, shards
    # ------------------------------------------------------------------

    def get_default_sort(self) -> str:
        return self.options.get_default_sort_by_handler(self.get_search_handler())

    def get_sort(self) -> str | None:
        return self.sort

    def set_sort(self, sort: str | None, force: bool = False) -> None:
        """Invalid or empty values fall back to the handler's default sort."""
        if force:
            self.sort = sort
            return
        if sort and sort in self.options.get_sort_options():
            self.sort = sort
        else:
            if sort:
                self._log.debug("sort_rejected", requested=sort)
            self.sort = self.get_default_sort()
        if not self.skip_rss_sort and self.get_view() == RSS_VIEW:
            self.sort = self.options.get_rss_sort(self.sort)

    def get_limit(self) -> int:
        return self.limit

    def set_limit(self, limit: int) -> None:
        self.limit = int(limit)

    def get_page(self) -> int:
        return self.page

    def set_page(self, page: int) -> None:
        self.page = int(page)

    def get_view(self) -> str:
        return self.view if self.view is not None else self.options.get_default_view()

    def get_raw_view(self) -> str:
        """The view as requested, before any family-specific splitting."""
        return self.view if self.view is not None else self.options.get_default_view_setting()

    def set_view(self, view: str | None) -> None:
        self.view = view

    def get_selected_shards(self) -> list[str]:
        return list(self.selected_shards)

    def get_view_list(self) -> dict[str, dict[str, Any]]:
        current = self.get_view()
        return {
            key: {"desc": desc, "selected": key == current}
            for key, desc in self.options.get_view_options().items()
        }

    def get_limit_list(self) -> dict[int, dict[str, Any]]:
        return {
            limit: {"desc": limit, "selected": limit == self.limit}
            for limit in self.options.get_limit_options()
        }

    def get_sort_list(self) -> dict[str, dict[str, Any]]:
        return {
            sort: {"desc": desc, "selected": sort == self.sort}
            for sort, desc in self.options.get_sort_options().items()
        }

    # ------------------------------------------------------------------
    # Visible filters
    # ------------------------------------------------------------------

    def parse_filter(self, raw: str) -> tuple[str, str]:
        return parse_filter(raw)

    def has_filter(self, raw: str) -> bool:
        return self.filters.has(raw)

    def add_filter(self, raw: str) -> None:
        self.filters.add(raw)

    def remove_filter(self, raw: str) -> None:
        self.filters.remove(raw)

    def remove_all_filters(self, field: str | None = None) -> None:
        self.filters.remove_all(field)

    def get_filters(self) -> dict[str, list[str]]:
        """Raw filter map: stored field key → values."""
        return self.filters.raw()

    def get_filters_as_query_params(self) -> list[str]:
        return self.filters.as_query_params()

    def has_defaults_applied(self) -> bool:
        return self.default_filters_applied

    def get_filter_list(self, exclude_checkbox_filters: bool = False) -> dict[str, list[dict[str, str]]]:
        """Applied filters grouped by facet label, ready for display.

        Each entry is a dict with the snake_case keys ``value``,
        ``display_text``, ``field`` (no boolean prefix) and ``operator``
        (``"AND"``, ``"OR"`` or ``"NOT"``).
        """
        skip: set[tuple[str, str]] = set()
        if exclude_checkbox_filters:
            for facet in self.get_raw_checkbox_facets():
                skip.add(parse_filter(facet.filter))

        translated = self.options.get_translated_facets()
        result: dict[str, list[dict[str, str]]] = {}
        for entry in self.filters.entries():
            if (entry.key, entry.value) in skip:
                continue
            label = self.get_facet_label(entry.field, entry.value)
            result.setdefault(label, []).append(
                self.format_filter_list_entry(
                    entry.field, entry.value, entry.operator.value, entry.field in translated
                )
            )
        return result

    def format_filter_list_entry(self, field: str, value: str, operator: str, translate: bool) -> dict[str, str]:
        raw_display_text = self.get_facet_value_raw_display_text(field, value)
        display_text = self.translate_facet_value(field, raw_display_text) if translate else raw_display_text
        return {"value": value, "display_text": display_text, "field": field, "operator": operator}

    def get_facet_value_raw_display_text(self, field: str, value: str) -> str:
        """Text after the last delimiter for delimited facets, else *value*."""
        delimiter = self.options.get_delimited_facets(processed=True).get(field)
        if delimiter:
            return value.split(delimiter)[-1]
        return value

    def translate_facet_value(self, field: str, text: str) -> str:
        domain = self.options.get_text_domain_for_translated_facet(field)
        translated = self.translate((domain, text))
        fmt = self.options.get_format_for_translated_facet(field)
        if fmt:
            return self.translate(fmt, {"%%raw%%": text, "%%translated%%": translated})
        return translated

    # ------------------------------------------------------------------
    # Hidden filters
    # ------------------------------------------------------------------

    def add_hidden_filter(self, raw: str) -> None:
        self.hidden_filters.add(raw)

    def add_hidden_filter_for_field(self, field: str, value: str) -> None:
        self.hidden_filters.add_for_field(field, value)

    def get_hidden_filters(self) -> dict[str, list[str]]:
        return self.hidden_filters.raw()

    def get_hidden_filters_as_query_params(self) -> list[str]:
        return self.hidden_filters.as_query_params()

    # ------------------------------------------------------------------
    # Facets
    # ------------------------------------------------------------------

    def add_facet(self, field: str, label: str | None = None, ored: bool = False) -> None:
        self.facet_config[field] = label or field
        if ored and field not in self.ored_facets:
            self.ored_facets.append(field)

    def get_facet_config(self) -> dict[str, str]:
        return dict(self.facet_config)

    def reset_facet_config(self) -> None:
        self.facet_config = {}
        self.ored_facets = []

    def get_facet_operator(self, field: str) -> str:
        return Operator.OR.value if field in self.ored_facets else Operator.AND.value

    def add_checkbox_facet(self, filter_string: str, description: str, dynamic: bool = False) -> None:
        facet = CheckboxFacet.from_filter(filter_string, description, dynamic)
        self.checkbox_facets.setdefault(facet.field, {})[filter_string] = facet

    def get_raw_checkbox_facets(self) -> list[CheckboxFacet]:
        return [facet for facets in self.checkbox_facets.values() for facet in facets.values()]

    def get_checkbox_facets(
        self,
        include: Iterable[str] | None = None,
        include_dynamic: bool = True,
    ) -> list[dict[str, Any]]:
        """Checkbox facets with their current selection state.

        *include* restricts the result to the listed filter strings; dynamic
        checkboxes are kept regardless when *include_dynamic* is set.
        """
        wanted = None if include is None else set(include)
        result: list[dict[str, Any]] = []
        for facet in self.get_raw_checkbox_facets():
            if wanted is not None and facet.filter not in wanted and not (include_dynamic and facet.dynamic):
                continue
            result.append(
                {
                    "desc": facet.description,
                    "filter": facet.filter,
                    "selected": self.has_filter(facet.filter),
                    "always_visible": facet.always_visible,
                    "dynamic": facet.dynamic,
                }
            )
        return result

    def get_facet_label(self, field: str, value: str | None = None, default: str | None = None) -> str:
        """Resolve the display label of *field*.

        Order: checkbox facet for ``field:value``, facet config, facet config
        of the aliased field, extra facet labels, *default*, then the
        ``unrecognized_facet_label`` key.
        """
        if value is not None:
            checkbox = self.checkbox_facets.get(field, {}).get(f"{field}:{value}")
            if checkbox is not None:
                return checkbox.description
        if field in self.facet_config:
            return self.facet_config[field]
        canonical = self.get_facet_aliases().get(field)
        if canonical is not None and canonical in self.facet_config:
            return self.facet_config[canonical]
        if field in self.extra_facet_labels:
            return self.extra_facet_labels[field]
        if canonical is not None and canonical in self.extra_facet_labels:
            return self.extra_facet_labels[canonical]
        return default or UNRECOGNIZED_FACET_LABEL

    # ------------------------------------------------------------------
    # Ranges
    # ------------------------------------------------------------------

    def format_year_for_date_range(self, year: Any) -> str:
        return ranges.format_year_for_date_range(year)

    def format_date_for_full_date_range(self, date: Any) -> str:
        return ranges.format_date_for_full_date_range(date)

    def format_value_for_numeric_range(self, num: Any) -> str:
        return ranges.format_value_for_numeric_range(num)

    def build_generic_range_filter(self, field: str, start: str, end: str, case_sensitive: bool = True) -> str:
        return ranges.build_generic_range_filter(field, start, end, case_sensitive)

    def build_date_range_filter(self, field: str, start: str, end: str) -> str:
        return ranges.build_date_range_filter(field, start, end)

    def build_full_date_range_filter(self, field: str, start: str, end: str) -> str:
        return ranges.build_full_date_range_filter(field, start, end)

    def build_numeric_range_filter(self, field: str, start: str, end: str) -> str:
        return ranges.build_numeric_range_filter(field, start, end)

    def range_kinds(self) -> list[ranges.RangeKind]:
        """Range request parameters handled by this family, bound to its builders."""
        return [
            ranges.YEAR_RANGE.replace(
                value_filter=self.format_year_for_date_range,
                filter_generator=self.build_date_range_filter,
            ),
            ranges.FULL_DATE_RANGE.replace(
                value_filter=self.format_date_for_full_date_range,
                filter_generator=self.build_full_date_range_filter,
            ),
            ranges.GENERIC_RANGE.replace(
                filter_generator=lambda field, start, end: self.build_generic_range_filter(field, start, end, False),
            ),
            ranges.NUMERIC_RANGE.replace(
                value_filter=self.format_value_for_numeric_range,
                filter_generator=self.build_numeric_range_filter,
            ),
        ]

    def init_generic_range_filters(
        self,
        request: RequestParams,
        request_param: str = "genericrange",
        value_filter: ranges.ValueFilter | None = None,
        filter_generator: ranges.FilterGenerator | None = None,
    ) -> list[str]:
        return ranges.init_generic_range_filters(
            request, self.add_filter, request_param, value_filter, filter_generator
        )

    # ------------------------------------------------------------------
    # Persistence and copying
    # ------------------------------------------------------------------

    def minify(self) -> MinifiedSearch:
        return MinifiedSearch(
            terms=minify_query(self.query),
            filters=self.filters.raw(),
            hidden_filters=self.hidden_filters.raw(),
            search_type=self.search_type,
            search_class_id=self.get_search_class_id(),
        )

    def deminify(self, minified: MinifiedSearch | Mapping[str, Any]) -> None:
        """Restore query, type and filters from a saved search."""
        if not isinstance(minified, MinifiedSearch):
            minified = MinifiedSearch.from_dict(minified)
        self.filters.replace(minified.filters)
        self.hidden_filters.replace(minified.hidden_filters)
        search_type, query = expand_query(minified.terms, self.options.get_default_handler())
        self.search_type = minified.search_type or search_type
        self.query = query
        if self.options.get_default_filters():
            self.default_filters_applied = True

    def clone(self) -> "Params":
        """Copy with its own query tree, filter stores and Options copy."""
        clone = copy.copy(self)
        clone.options = copy.copy(self.options)
        clone.query = copy.deepcopy(self.query)
        clone.filters = copy.copy(self.filters)
        clone.hidden_filters = copy.copy(self.hidden_filters)
        clone.selected_shards = list(self.selected_shards)
        clone.facet_config = dict(self.facet_config)
        clone.ored_facets = list(self.ored_facets)
        clone.checkbox_facets = {k: dict(v) for k, v in self.checkbox_facets.items()}
        clone.extra_facet_labels = dict(self.extra_facet_labels)
        return clone

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(type={self.search_type!r}, query={self.query!r}, "
            f"filters={self.filters!r}, page={self.page}, limit={self.limit}, sort={self.sort!r})"
        )


__all__ = ["RSS_MIN_LIMIT", "RSS_VIEW", "UNRECOGNIZED_FACET_LABEL", "Params"]
