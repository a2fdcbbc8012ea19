"""Unit tests for request-parameter readers."""

from __future__ import annotations

from discovery_search.application.search.request import QueryStringRequest, RequestParams, as_flag, as_list, first


class TestQueryStringRequest:
    def test_from_mapping(self) -> None:
        request = QueryStringRequest({"lookfor": "cats", "filter": ("a:b",)})
        assert request.get("lookfor") == "cats"
        assert request.get("filter") == ["a:b"]
        assert request.get("missing", "d") == "d"

    def test_from_query_string_lists(self) -> None:
        request = QueryStringRequest.from_query_string("?lookfor=cats&filter[]=format%3ABook&filter[]=x%3Ay")
        assert request.get("lookfor") == "cats"
        assert request.get("filter") == ["format:Book", "x:y"]

    def test_repeated_plain_key_keeps_last(self) -> None:
        assert QueryStringRequest.from_query_string("page=2&page=3").get("page") == "3"

    def test_blank_values_kept(self) -> None:
        assert QueryStringRequest.from_query_string("lookfor=").get("lookfor") == ""

    def test_contains_and_to_dict(self) -> None:
        request = QueryStringRequest({"a": "1"})
        assert "a" in request
        assert request.to_dict() == {"a": "1"}

    def test_is_request_params(self) -> None:
        assert isinstance(QueryStringRequest(), RequestParams)


class TestHelpers:
    def test_as_list(self) -> None:
        assert as_list(None) == []
        assert as_list("x") == ["x"]
        assert as_list(("a", "b")) == ["a", "b"]

    def test_first(self) -> None:
        assert first(["a", "b"]) == "a"
        assert first([]) is None
        assert first("x") == "x"

    def test_as_flag(self) -> None:
        assert as_flag("1")
        assert as_flag(["true"])
        assert as_flag("yes")
        assert not as_flag("0")
        assert not as_flag(" False ")
        assert not as_flag("")
        assert not as_flag(None)
        assert not as_flag([])
