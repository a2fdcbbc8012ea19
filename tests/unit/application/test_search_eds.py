"""Unit tests for the EDS search family."""

from __future__ import annotations

import pytest

from discovery_search.application.search.eds import EDSOptions, EDSParams
from discovery_search.application.search.request import QueryStringRequest
from discovery_search.application.search.url_query import UrlQueryHelperFactory
from discovery_search.config import DictConfigLoader

API_INFO = {
    "limiters": {
        "FT": {"Label": "Full Text", "Type": "select", "DefaultOn": "n", "LimiterValues": [{"Value": "y"}]},
        "RV": {"Label": "Peer Reviewed", "Type": "select", "DefaultOn": "y", "LimiterValues": [{"Value": "y"}]},
        "LA99": {"Label": "Language", "Type": "multiselectvalue", "DefaultOn": "n"},
    },
    "expanders": {
        "fulltext": {"Label": "Also search within full text", "DefaultOn": "y"},
        "thesaurus": {"Label": "Apply equivalent subjects", "DefaultOn": "n"},
    },
    "search_modes": {"all": "All terms", "any": "Any terms", "bool": "Boolean"},
    "default_mode": "all",
}


def _config(**general) -> dict:
    return {
        "EDS": {
            "General": {
                "default_view": "brief",
                "common_limiters": "FT, RV, XX",
                "common_expanders": "fulltext",
                **general,
            },
            "Basic_Searches": {"AllFields": "All Fields", "TI": "Title"},
            "Results": {"SourceType": "Format", "PublicationDate,1,2": "Publication Date"},
        }
    }


def _options(**general) -> EDSOptions:
    return EDSOptions(DictConfigLoader(_config(**general)), api_info=API_INFO)


def _params(request: dict | None = None, **general) -> EDSParams:
    params = EDSParams(_options(**general))
    params.init_from_request(QueryStringRequest(request or {}))
    return params


class TestEDSOptions:
    def test_views(self) -> None:
        options = _options()
        assert options.get_default_view() == "list"
        assert options.get_eds_view() == "brief"
        assert options.get_default_view_setting() == "list|brief"
        assert list(options.get_view_options()) == ["list|title", "list|brief", "list|detailed"]

    def test_default_view_without_config(self) -> None:
        options = EDSOptions(DictConfigLoader({}), api_info=API_INFO)
        assert options.get_default_view_setting() == "list|brief"

    def test_modes(self) -> None:
        options = _options()
        assert options.get_mode_options() == API_INFO["search_modes"]
        assert options.get_default_mode() == "all"

    def test_search_screen_limiters(self) -> None:
        assert _options().get_search_screen_limiters() == {
            "FT": {"selectedvalue": "LIMIT|FT:y", "description": "Full Text", "selected": False},
            "RV": {"selectedvalue": "LIMIT|RV:y", "description": "Peer Reviewed", "selected": True},
        }

    def test_search_screen_expanders(self) -> None:
        assert _options().get_search_screen_expanders() == {
            "fulltext": {"selectedvalue": "EXPAND:fulltext", "description": "Also search within full text"}
        }

    def test_default_filters_from_api_info(self) -> None:
        assert _options().get_default_filters() == ["EXPAND:fulltext", "LIMIT|RV:y"]

    def test_configured_default_filters_win(self) -> None:
        assert _options(default_filters=["SourceType:Books"]).get_default_filters() == ["SourceType:Books"]

    def test_sort_defaults(self) -> None:
        assert list(_options().get_sort_options()) == ["relevance", "date", "date2"]

    def test_without_api_info(self) -> None:
        options = EDSOptions(DictConfigLoader(_config()))
        assert options.get_search_screen_limiters() == {}
        assert options.get_default_filters() == []
        assert options.get_default_mode() is None

    def test_actions(self) -> None:
        options = _options()
        assert options.get_search_action() == "eds-search"
        assert options.get_advanced_search_action() == "eds-advanced"


class TestEDSParamsViews:
    def test_default_view(self) -> None:
        params = _params()
        assert params.get_view() == "list"
        assert params.get_eds_view() == "brief"
        assert params.get_raw_view() == "list|brief"

    def test_requested_view(self) -> None:
        params = _params({"view": "list|detailed"})
        assert params.get_view() == "list"
        assert params.get_eds_view() == "detailed"
        assert params.get_view_list()["list|detailed"]["selected"]
        assert not params.get_view_list()["list|brief"]["selected"]

    def test_invalid_view_falls_back(self) -> None:
        assert _params({"view": "grid"}).get_raw_view() == "list|brief"


class TestEDSParamsSearchMode:
    def test_default_mode(self) -> None:
        assert _params().get_search_mode() == "all"

    def test_requested_mode(self) -> None:
        assert _params({"searchmode": "any"}).get_search_mode() == "any"


class TestEDSParamsFilters:
    def test_defaults_applied(self) -> None:
        params = _params()
        assert params.get_filters() == {"EXPAND": ["fulltext"], "LIMIT|RV": ["y"]}
        assert params.has_defaults_applied()

    def test_url_round_trip(self) -> None:
        params = _params({"view": "list|title"})
        url = UrlQueryHelperFactory().from_params(params)
        assert url.get_param_array() == {
            "view": "list|title",
            "filter": ['EXPAND:"fulltext"', 'LIMIT|RV:"y"'],
            "dfApplied": "1",
        }
        rebuilt = EDSParams.from_url_params(_options(), url.get_param_array())
        assert rebuilt.get_filters() == params.get_filters()
        assert rebuilt.get_eds_view() == "title"

    def test_checkbox_facets_include_limiters_and_expanders(self) -> None:
        params = _params()
        facets = {f["filter"]: f for f in params.get_checkbox_facets()}
        assert list(facets) == ["LIMIT|FT:y", "LIMIT|RV:y", "EXPAND:fulltext"]
        assert facets["LIMIT|RV:y"]["selected"]
        assert not facets["LIMIT|FT:y"]["selected"]
        assert all(f["dynamic"] for f in facets.values())
        assert len(params.get_checkbox_facets()) == 3

    def test_checkbox_labels_ready_on_construction(self) -> None:
        params = _params()
        assert params.get_facet_label("LIMIT|RV", "y") == "Peer Reviewed"
        assert params.get_facet_label("EXPAND", "fulltext") == "Also search within full text"
        before = params.get_filter_list()
        params.get_checkbox_facets()
        assert params.get_filter_list() == before
        assert set(before) == {"Peer Reviewed", "Also search within full text"}

    def test_checkbox_facets_survive_clone(self) -> None:
        clone = _params().clone()
        assert [f.filter for f in clone.get_raw_checkbox_facets()] == ["LIMIT|FT:y", "LIMIT|RV:y", "EXPAND:fulltext"]

    def test_filter_list_excludes_limiters(self) -> None:
        params = _params({"filter": ["SourceType:Books"]})
        assert list(params.get_filter_list(exclude_checkbox_filters=True)) == ["Format"]

    @pytest.mark.parametrize(
        ("field", "expected"),
        [("LIMIT|FT", "FT"), ("SEARCHMODE|all", "all"), ("SourceType", "Format"), ("Other", "Other")],
    )
    def test_facet_label_strips_prefixes(self, field, expected) -> None:
        assert _params().get_facet_label(field) == expected


class TestEDSParamsFacets:
    def test_facet_settings_split(self) -> None:
        params = _params()
        assert list(params.get_facet_config()) == ["SourceType", "PublicationDate"]
        assert params.get_full_facet_settings() == ["SourceType"]
        assert params.get_date_facet_settings() == ["PublicationDate"]

    def test_clone(self) -> None:
        params = _params()
        clone = params.clone()
        clone.add_facet("Language")
        assert isinstance(clone, EDSParams)
        assert params.get_full_facet_settings() == ["SourceType"]
