"""Unit tests for family search options."""

from __future__ import annotations

import copy

import pytest

from discovery_search.application.search.base.options import Options, explode_list_setting
from discovery_search.application.search.solr import SolrOptions
from discovery_search.config import DictConfigLoader, InvalidSettingValueError, UnexpectedClassShapeError
from discovery_search.i18n import DictTranslator
from discovery_search.testing import solr_config


class MockOptions(Options):
    pass


class NamelessOptions(Options):
    pass


def _options(**overrides) -> SolrOptions:
    config = solr_config()
    for name, sections in overrides.items():
        for section, values in sections.items():
            config.setdefault(name, {}).setdefault(section, {}).update(values)
    return SolrOptions(DictConfigLoader(config))


class TestExplodeListSetting:
    def test_comma_string(self) -> None:
        assert explode_list_setting("10, 20,,40") == [10, 20, 40]

    def test_list(self) -> None:
        assert explode_list_setting([5, "15"]) == [5, 15]

    def test_invalid(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            explode_list_setting("10,many", "limit_options")


class TestSearchClassId:
    def test_declared_tag(self) -> None:
        assert _options().get_search_class_id() == "Solr"

    def test_mock_class(self) -> None:
        assert MockOptions(DictConfigLoader()).get_search_class_id() == "Mock"

    def test_untagged_class_raises(self) -> None:
        with pytest.raises(UnexpectedClassShapeError):
            NamelessOptions(DictConfigLoader())


class TestHandlers:
    def test_default_handler_configured(self) -> None:
        assert _options().get_default_handler() == "AllFields"

    def test_default_handler_falls_back_to_first_basic(self) -> None:
        config = solr_config()
        del config["searches"]["General"]["default_handler"]
        config["searches"]["Basic_Searches"] = {"Title": "Title", "Author": "Author"}
        assert SolrOptions(DictConfigLoader(config)).get_default_handler() == "Title"

    def test_no_handlers(self) -> None:
        assert MockOptions(DictConfigLoader()).get_default_handler() is None

    def test_handler_for_label(self) -> None:
        assert _options().get_handler_for_label("Author") == "Author"

    def test_handler_for_advanced_label(self) -> None:
        assert _options().get_handler_for_label("adv_search_title") == "Title"

    def test_handler_for_translated_label(self) -> None:
        config = solr_config()
        translator = DictTranslator({"default": {"Author": "Autor"}})
        options = SolrOptions(DictConfigLoader(config), translator)
        assert options.get_handler_for_label("Autor") == "Author"

    def test_handler_for_unknown_label(self) -> None:
        assert _options().get_handler_for_label("Nope") == "AllFields"
        assert _options().get_handler_for_label(None) == "AllFields"

    def test_label_for_basic_handler(self) -> None:
        assert _options().get_label_for_basic_handler("Subject") == "Subject"
        assert _options().get_label_for_basic_handler("Nope") is None

    def test_human_readable_field_name(self) -> None:
        options = _options()
        assert options.get_human_readable_field_name("Title") == "Title"
        assert options.get_human_readable_field_name("unknown_field") == "unknown_field"


class TestSortLimitView:
    def test_sort_options_from_config(self) -> None:
        assert list(_options().get_sort_options()) == ["relevance", "year", "year asc", "title"]

    def test_default_sort_options_when_unconfigured(self) -> None:
        config = solr_config()
        del config["searches"]["Sorting"]
        assert "callnumber-sort" in SolrOptions(DictConfigLoader(config)).get_sort_options()

    def test_default_sort_by_handler(self) -> None:
        options = _options()
        assert options.get_default_sort_by_handler("Title") == "title"
        assert options.get_default_sort_by_handler("Author") == "relevance"
        assert options.get_default_sort_by_handler() == "relevance"

    def test_rss_sort(self) -> None:
        options = _options()
        assert options.get_rss_sort("relevance") == "year"
        assert options.get_rss_sort("title") == "year,title"

    def test_limits(self) -> None:
        options = _options()
        assert options.get_default_limit() == 20
        assert options.get_limit_options() == [10, 20, 40, 60, 80, 100]

    def test_invalid_default_limit(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            _options(searches={"General": {"default_limit": 0}})

    def test_set_limit_options_resets_default(self) -> None:
        options = _options()
        options.set_limit_options([5, 15])
        assert options.get_default_limit() == 5
        assert options.get_limit_options() == [5, 15]

    def test_views(self) -> None:
        options = _options()
        assert options.get_default_view() == "list"
        assert options.get_default_view_setting() == "list"
        assert options.get_view_options() == {"list": "List", "grid": "Grid"}

    def test_views_unconfigured(self) -> None:
        assert MockOptions(DictConfigLoader()).get_view_options() == {"list": "List"}


class TestFacetSettings:
    def test_delimited_facets_processed(self) -> None:
        options = _options(facets={"Advanced_Settings": {"delimiter": "|", "delimited_facets": ["a", "b|::"]}})
        assert options.get_delimited_facets() == ["a", "b|::"]
        assert options.get_delimited_facets(processed=True) == {"a": "|", "b": "::"}

    def test_delimited_facets_cache_invalidated(self) -> None:
        options = _options(facets={"Advanced_Settings": {"delimiter": "|", "delimited_facets": ["a"]}})
        assert options.get_delimited_facets(processed=True) == {"a": "|"}
        options.set_default_facet_delimiter("/")
        assert options.get_delimited_facets(processed=True) == {"a": "/"}
        options.set_delimited_facets(["c|;"])
        assert options.get_delimited_facets(processed=True) == {"c": ";"}

    def test_no_default_delimiter_skips_plain_entries(self) -> None:
        options = _options(facets={"Advanced_Settings": {"delimited_facets": ["a", "b|::"]}})
        assert options.get_delimited_facets(processed=True) == {"b": "::"}

    def test_translated_facets(self) -> None:
        options = _options(
            facets={"Advanced_Settings": {"translated_facets": ["format", "language:Languages:%%translated%% (%%raw%%)"]}}
        )
        assert options.get_translated_facets() == ["format", "language"]
        assert options.get_text_domain_for_translated_facet("format") == "default"
        assert options.get_text_domain_for_translated_facet("language") == "Languages"
        assert options.get_format_for_translated_facet("language") == "%%translated%% (%%raw%%)"
        assert options.get_format_for_translated_facet("format") is None

    def test_limit_order_override(self) -> None:
        options = _options(facets={"Advanced_Settings": {"limitOrderOverride": {"format": "Book:: Map ::CD"}}})
        assert options.limit_order_override("format") == ["Book", "Map", "CD"]

    def test_limit_order_override_custom_delimiter(self) -> None:
        options = _options(
            facets={"Advanced_Settings": {"limitDelimiter": ";", "limitOrderOverride": {"format": "a; b"}}}
        )
        assert options.limit_order_override("format") == ["a", "b"]

    def test_facet_sort_options(self) -> None:
        options = _options(
            facets={"AvailableFacetSortOptions": {"Solr": {"*": "count=sort_count,index=sort_alphabetic"}}}
        )
        assert options.get_facet_sort_options("format") == {"count": "sort_count", "index": "sort_alphabetic"}

    def test_hierarchical(self) -> None:
        options = _options(
            facets={"SpecialFacets": {"hierarchical": ["building"], "hierarchicalFacetSeparators": {"building": "/"}}}
        )
        assert options.get_hierarchical_facets() == ["building"]
        assert options.get_hierarchical_facet_separators() == {"building": "/"}


class TestShardsAndFlags:
    def test_shards(self) -> None:
        options = _options(
            searches={"IndexShards": {"main": "localhost/main", "extra": "localhost/extra"},
                      "ShardPreferences": {"defaultChecked": ["main"], "showCheckboxes": True}}
        )
        assert list(options.get_shards()) == ["main", "extra"]
        assert options.get_default_selected_shards() == ["main"]
        assert options.show_shard_checkboxes()

    def test_shards_default_all_selected(self) -> None:
        options = _options(searches={"IndexShards": {"a": "x", "b": "y"}})
        assert options.get_default_selected_shards() == ["a", "b"]

    def test_spellcheck_toggle(self) -> None:
        options = _options()
        assert options.spellcheck_enabled()
        assert options.spellcheck_enabled(False) is False

    def test_highlight(self) -> None:
        options = _options(searches={"General": {"highlighting": True}})
        assert options.highlight_enabled()
        options.disable_highlighting()
        assert not options.highlight_enabled()

    def test_result_limit_default(self) -> None:
        assert _options().get_visible_search_result_limit() == -1

    def test_default_filters_and_retention(self) -> None:
        options = _options(searches={"General": {"default_filters": ["format:Book"], "retain_filters_by_default": False}})
        assert options.get_default_filters() == ["format:Book"]
        assert not options.get_retain_filter_setting()
        assert not options.should_display_reset_filters()

    def test_actions(self) -> None:
        options = _options()
        assert options.get_search_action() == "search-results"
        assert options.get_advanced_search_action() == "search-advanced"
        assert options.get_facet_list_action() == "search-facetlist"

    def test_copy_is_independent(self) -> None:
        options = _options()
        clone = copy.copy(options)
        clone.spellcheck_enabled(False)
        clone.set_limit_options([1])
        assert options.spellcheck_enabled()
        assert options.get_limit_options() == [10, 20, 40, 60, 80, 100]
