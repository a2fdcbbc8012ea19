"""Unit tests for the Solr search family."""

from __future__ import annotations

from discovery_search.application.search.request import QueryStringRequest
from discovery_search.application.search.solr import SolrOptions, SolrParams
from discovery_search.config import DictConfigLoader
from discovery_search.testing import solr_config


def _params(request: dict | None = None, config: dict | None = None) -> SolrParams:
    params = SolrParams(SolrOptions(DictConfigLoader(config or solr_config())))
    params.init_from_request(QueryStringRequest(request or {}))
    return params


class TestSolrOptions:
    def test_tie_breaker_and_relevance_override(self) -> None:
        config = solr_config()
        config["searches"]["General"].update(
            {"tie_breaker_sort": "id asc", "empty_search_relevance_override": "year"}
        )
        options = SolrOptions(DictConfigLoader(config))
        assert options.get_sort_tie_breaker() == "id asc"
        assert options.get_empty_search_relevance_override() == "year"

    def test_unset_extras(self) -> None:
        options = SolrOptions(DictConfigLoader(solr_config()))
        assert options.get_sort_tie_breaker() is None
        assert options.get_empty_search_relevance_override() is None

    def test_spelling_from_main_config(self) -> None:
        config = solr_config()
        config["config"]["Spelling"]["enabled"] = False
        assert not SolrOptions(DictConfigLoader(config)).spellcheck_enabled()


class TestSolrQueryIds:
    def test_id_query(self) -> None:
        params = _params()
        params.set_query_ids(["a", 'b"c'])
        assert params.get_override_query() == 'id:("a" OR "b\\"c")'
        assert params.searching_by_id

    def test_empty_ids_match_nothing(self) -> None:
        params = _params()
        params.set_query_ids([])
        assert params.get_override_query() == "NOT *:*"
        assert not params.searching_by_id

    def test_options_copied_before_disabling_features(self) -> None:
        config = solr_config()
        config["searches"]["General"]["highlighting"] = True
        params = _params({}, config)
        shared = params.get_options()
        params.set_query_ids(["1"])
        assert params.get_options() is not shared
        assert not params.get_options().spellcheck_enabled()
        assert not params.get_options().highlight_enabled()
        assert shared.spellcheck_enabled()
        assert shared.highlight_enabled()

    def test_clone_independent_of_original(self) -> None:
        params = _params({"lookfor": "cats", "filter": ["-format:Book"]})
        clone = params.clone()
        clone.set_query_ids(["1"])
        clone.replace_search_term("cats", "dogs")
        clone.add_filter("~building:Main")
        assert isinstance(clone, SolrParams)
        assert params.get_override_query() is None
        assert not params.searching_by_id
        assert params.get_options().spellcheck_enabled()
        assert params.get_query().text == "cats"
        assert params.get_filters() == {"-format": ["Book"]}
        assert clone.get_filters_as_query_params() == ['-format:"Book"', '~building:"Main"']

    def test_override_ids_request(self) -> None:
        params = _params({"overrideIds": ["x", "y"]})
        assert params.get_override_query() == 'id:("x" OR "y")'
        assert params.get_query().text == ""

    def test_query_id_limit(self) -> None:
        assert _params().get_query_id_limit() == 1024
        config = solr_config()
        config["config"]["Index"]["maxBooleanClauses"] = 50
        assert _params({}, config).get_query_id_limit() == 50


class TestSolrFacets:
    def test_legacy_fields_are_aliases(self) -> None:
        config = solr_config()
        config["facets"]["LegacyFields"] = {"old_language": "language"}
        params = _params({"filter": ["old_language:English"]}, config)
        assert params.has_filter("language:English")
        assert params.get_facet_aliases() == {"format_legacy": "format", "old_language": "language"}
        assert params.get_aliases_for_facet_field("language") == ["language", "old_language"]

    def test_case_insensitive_range_display(self) -> None:
        params = _params({"genericrange": ["title"], "titlefrom": "a", "titleto": "m"})
        entry = params.get_filter_list()["unrecognized_facet_label"][0]
        assert entry["value"] == "([a TO m] OR [A TO M])"
        assert entry["display_text"] == "a - m"

    def test_custom_filter_field_setting(self) -> None:
        config = solr_config()
        config["facets"]["CustomFilters"] = {"custom_filter_field": "custom", "inverted_filters": {"all": "x"}}
        params = _params({}, config)
        params.add_checkbox_facet("custom:all", "Everything")
        params.add_checkbox_facet("vufind:all", "Not custom")
        visible = {f["filter"]: f["always_visible"] for f in params.get_checkbox_facets()}
        assert visible["custom:all"]
        assert not visible["vufind:all"]
