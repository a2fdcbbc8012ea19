"""Application search – URL query helper.

:class:`UrlQueryHelperFactory` turns a :class:`Params` snapshot into the
smallest parameter map that reproduces it: sort, limit, view, page and
shards only appear when they differ from their defaults.  The resulting
:class:`UrlQueryHelper` is immutable; every ``set_*``/``add_*``/``remove_*``
call returns a new helper, which is how pagination, sort and facet links are
built from one search.
"""
from __future__ import annotations

import copy
import dataclasses
from typing import TYPE_CHECKING, Any, Iterable, Mapping
from urllib.parse import urlencode

from discovery_search.application.search.filters import field_aliases, operator_prefix, parse_filter
from discovery_search.application.search.query import Group, QueryNode, Term

if TYPE_CHECKING:
    from discovery_search.application.search.base.params import Params

UrlParams = dict[str, Any]


@dataclasses.dataclass(frozen=True)
class UrlQueryConfig:
    """Defaults a helper compares against when deciding what to emit."""

    default_handler: str | None = None
    default_sort: str | None = None
    default_limit: int | None = None
    default_view: str | None = None
    facet_aliases: Mapping[str, str] = dataclasses.field(default_factory=dict)
    basic_search_param: str = "lookfor"


def query_to_params(query: QueryNode, config: UrlQueryConfig) -> UrlParams:
    """Search-term parameters for *query*.

    A basic search yields ``lookfor`` (when non-empty) and ``type`` (when not
    the default handler).  An advanced search yields ``join`` plus
    ``bool<n>``/``lookfor<n>``/``type<n>`` per group; with no groups it still
    carries an empty ``lookfor0`` so the search reads back as advanced.
    """
    result: UrlParams = {}
    if isinstance(query, Term):
        if query.text:
            result[config.basic_search_param] = query.text
        if query.handler and query.handler != config.default_handler:
            result["type"] = query.handler
        return result

    result["join"] = query.operator.value
    groups = [child for child in query.children if isinstance(child, Group)]
    if not groups:
        result["lookfor0"] = [""]
    for index, child in enumerate(groups):
        result[f"bool{index}"] = [child.operator.value]
        lookfor: list[str] = []
        types: list[str] = []
        for term in child.children:
            if isinstance(term, Term):
                lookfor.append(term.text)
                types.append(term.handler or "")
        result[f"lookfor{index}"] = lookfor
        result[f"type{index}"] = types
    return result


class UrlQueryHelper:
    """Immutable view of a search as URL parameters."""

    def __init__(
        self,
        url_params: Mapping[str, Any],
        query: QueryNode,
        config: UrlQueryConfig | None = None,
        suppress_query: bool = False,
    ) -> None:
        self._url_params: UrlParams = {
            k: (list(v) if isinstance(v, list) else v) for k, v in url_params.items()
        }
        self._query = query
        self.config = config or UrlQueryConfig()
        self._suppress_query = suppress_query

    def _copy(self, url_params: UrlParams | None = None, query: QueryNode | None = None) -> "UrlQueryHelper":
        return type(self)(
            self._url_params if url_params is None else url_params,
            self._query if query is None else query,
            self.config,
            self._suppress_query,
        )

    def _params_copy(self) -> UrlParams:
        return {k: (list(v) if isinstance(v, list) else v) for k, v in self._url_params.items()}

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def get_param_array(self) -> UrlParams:
        """Search-term parameters followed by the delta parameters."""
        result: UrlParams = {}
        if not self._suppress_query:
            result.update(query_to_params(self._query, self.config))
        result.update(self._params_copy())
        return result

    def get_params(self) -> str:
        """URL-encoded query string; list values use ``name[]``."""
        pairs: list[tuple[str, str]] = []
        for key, value in self.get_param_array().items():
            if isinstance(value, list):
                pairs.extend((f"{key}[]", str(v)) for v in value)
            else:
                pairs.append((key, str(value)))
        return urlencode(pairs)

    def as_hidden_fields(self, exclude: Iterable[str] | None = None) -> list[tuple[str, str]]:
        """``(name, value)`` pairs for hidden form inputs."""
        skip = set(exclude or ())
        fields: list[tuple[str, str]] = []
        for key, value in self.get_param_array().items():
            if key in skip:
                continue
            if isinstance(value, list):
                fields.extend((f"{key}[]", str(v)) for v in value)
            else:
                fields.append((key, str(value)))
        return fields

    def is_query_suppressed(self) -> bool:
        return self._suppress_query

    def get_query(self) -> QueryNode:
        return self._query

    def __str__(self) -> str:
        return self.get_params()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UrlQueryHelper):
            return NotImplemented
        return self.get_param_array() == other.get_param_array()

    def __repr__(self) -> str:
        return f"UrlQueryHelper({self.get_param_array()!r})"

    # ------------------------------------------------------------------
    # Derived helpers
    # ------------------------------------------------------------------

    def _update(self, name: str, value: Any, default: Any = None, clear_page: bool = False) -> "UrlQueryHelper":
        params = self._params_copy()
        if value is None or value == "" or (default is not None and str(value) == str(default)):
            params.pop(name, None)
        else:
            params[name] = str(value)
        if clear_page:
            params.pop("page", None)
        return self._copy(params)

    def add_filter(self, raw: str) -> "UrlQueryHelper":
        params = self._params_copy()
        params.setdefault("filter", []).append(raw)
        params.pop("page", None)
        return self._copy(params)

    def add_facet(self, field: str, value: str, operator: str = "AND") -> "UrlQueryHelper":
        return self.add_filter(f'{operator_prefix(operator)}{field}:"{value}"')

    def remove_facet(self, field: str, value: str, operator: str = "AND") -> "UrlQueryHelper":
        """Drop every filter on *field* (or an alias of it) with *value*."""
        aliases = field_aliases(operator_prefix(operator) + field, self.config.facet_aliases)
        params = self._params_copy()
        kept: list[str] = []
        for current in params.get("filter", []):
            current_field, current_value = parse_filter(current)
            if current_field not in aliases or current_value != value:
                kept.append(current)
        if kept:
            params["filter"] = kept
        else:
            params.pop("filter", None)
        params.pop("page", None)
        return self._copy(params)

    def remove_filter(self, raw: str) -> "UrlQueryHelper":
        target = parse_filter(raw)
        params = self._params_copy()
        kept = [current for current in params.get("filter", []) if parse_filter(current) != target]
        if kept:
            params["filter"] = kept
        else:
            params.pop("filter", None)
        params.pop("page", None)
        return self._copy(params)

    def remove_all_filters(self) -> "UrlQueryHelper":
        params = self._params_copy()
        params.pop("filter", None)
        params.pop("page", None)
        return self._copy(params)

    def set_page(self, page: int) -> "UrlQueryHelper":
        return self._update("page", page, 1)

    def set_sort(self, sort: str) -> "UrlQueryHelper":
        return self._update("sort", sort, self.config.default_sort, clear_page=True)

    def set_limit(self, limit: int) -> "UrlQueryHelper":
        return self._update("limit", limit, self.config.default_limit, clear_page=True)

    def set_view(self, view: str) -> "UrlQueryHelper":
        return self._update("view", view, self.config.default_view)

    def set_handler(self, handler: str) -> "UrlQueryHelper":
        """Change the handler of a basic search; group queries are unchanged."""
        if not isinstance(self._query, Term):
            return self._copy()
        return self._copy(query=Term(self._query.text, handler))

    def set_search_terms(self, lookfor: str) -> "UrlQueryHelper":
        handler = self._query.handler if isinstance(self._query, Term) else self.config.default_handler
        params = self._params_copy()
        params.pop("page", None)
        return self._copy(params, Term(lookfor, handler))

    def replace_term(self, old: str, new: str) -> "UrlQueryHelper":
        query = copy.deepcopy(self._query)
        query.replace_term(old, new)
        params = self._params_copy()
        params.pop("page", None)
        return self._copy(params, query)

    def suppress_query(self, suppress: bool = True) -> "UrlQueryHelper":
        return type(self)(self._url_params, self._query, self.config, suppress)


class UrlQueryHelperFactory:
    """Build :class:`UrlQueryHelper` instances from :class:`Params`."""

    def get_config(self, params: "Params") -> UrlQueryConfig:
        options = params.get_options()
        return UrlQueryConfig(
            default_handler=options.get_default_handler(),
            default_sort=params.get_default_sort(),
            default_limit=options.get_default_limit(),
            default_view=options.get_default_view_setting(),
            facet_aliases=params.get_facet_aliases(),
        )

    def get_url_params(self, params: "Params", config: UrlQueryConfig) -> UrlParams:
        url_params: UrlParams = {}
        sort = params.get_sort()
        if sort is not None and sort != config.default_sort:
            url_params["sort"] = sort
        limit = params.get_limit()
        if limit is not None and limit != config.default_limit:
            url_params["limit"] = str(limit)
        view = params.get_raw_view()
        if view is not None and view != config.default_view:
            url_params["view"] = view
        if params.get_page() != 1:
            url_params["page"] = str(params.get_page())

        filters = params.get_filters_as_query_params()
        if filters:
            url_params["filter"] = filters
        hidden = params.get_hidden_filters_as_query_params()
        if hidden:
            url_params["hiddenFilters"] = hidden

        shards = sorted(params.get_selected_shards())
        if shards and shards != sorted(params.get_options().get_default_selected_shards()):
            url_params["shard"] = shards

        if params.has_defaults_applied():
            url_params["dfApplied"] = "1"
        return url_params

    def from_params(self, params: "Params") -> UrlQueryHelper:
        config = self.get_config(params)
        return UrlQueryHelper(self.get_url_params(params, config), copy.deepcopy(params.get_query()), config)


__all__ = [
    "UrlParams",
    "UrlQueryConfig",
    "UrlQueryHelper",
    "UrlQueryHelperFactory",
    "query_to_params",
]
