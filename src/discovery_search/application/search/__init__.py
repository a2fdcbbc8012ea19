"""Application search – query model, filters, ranges, Params and URL state.

Public API::

    from discovery_search.application.search import default_registry, QueryStringRequest

    params = default_registry().create_params("Solr", loader)
    params.init_from_request(QueryStringRequest.from_query_string("lookfor=cats"))
    UrlQueryHelperFactory().from_params(params).get_params()
"""
from discovery_search.application.search.filters import (
    ADVANCED_FILTER_FIELD,
    CheckboxFacet,
    FilterEntry,
    FilterStore,
    is_advanced_filter,
    parse_filter,
)
from discovery_search.application.search.minified import MinifiedSearch
from discovery_search.application.search.query import Group, Operator, QueryNode, Term, display_query
from discovery_search.application.search.ranges import RangeKind, RangeSpec, build_generic_range_filter
from discovery_search.application.search.request import QueryStringRequest, RequestParams
from discovery_search.application.search.base import BackendResponse, Options, Params, Results, SearchBackend
from discovery_search.application.search.url_query import UrlQueryConfig, UrlQueryHelper, UrlQueryHelperFactory
from discovery_search.application.search.registry import SearchFamilyRegistry, default_registry

__all__ = [
    "ADVANCED_FILTER_FIELD",
    "BackendResponse",
    "CheckboxFacet",
    "FilterEntry",
    "FilterStore",
    "Group",
    "MinifiedSearch",
    "Operator",
    "Options",
    "Params",
    "QueryNode",
    "QueryStringRequest",
    "RangeKind",
    "RangeSpec",
    "RequestParams",
    "Results",
    "SearchBackend",
    "SearchFamilyRegistry",
    "Term",
    "UrlQueryConfig",
    "UrlQueryHelper",
    "UrlQueryHelperFactory",
    "build_generic_range_filter",
    "default_registry",
    "display_query",
    "is_advanced_filter",
    "parse_filter",
]
