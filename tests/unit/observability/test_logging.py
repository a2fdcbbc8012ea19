"""Unit tests for observability logging."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from discovery_search.config.settings import SearchSettings
from discovery_search.observability.logging import JsonLoggerFactory, SearchContextProcessor, get_logger


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()


class TestSearchContextProcessor:
    def test_copies_search_class_id(self) -> None:
        event = SearchContextProcessor()(None, "info", {"event": "x", "search_class_id": "Solr"})
        assert event["backend"] == "Solr"

    def test_leaves_events_without_family(self) -> None:
        event = SearchContextProcessor()(None, "info", {"event": "x"})
        assert "backend" not in event

    def test_does_not_override_backend(self) -> None:
        event = SearchContextProcessor()(None, "info", {"event": "x", "search_class_id": "Solr", "backend": "b"})
        assert event["backend"] == "b"


class TestGetLogger:
    def test_returns_logger_with_bound_values(self) -> None:
        with structlog.testing.capture_logs() as logs:
            get_logger("tests", search_class_id="EDS").info("hello", extra=1)
        assert logs == [{"event": "hello", "extra": 1, "search_class_id": "EDS", "log_level": "info"}]


class TestJsonLoggerFactory:
    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        JsonLoggerFactory.configure(logging.INFO)
        get_logger("tests.json").info("search_performed", search_class_id="Solr", total=3)
        line = capsys.readouterr().err.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["event"] == "search_performed"
        assert payload["backend"] == "Solr"
        assert payload["total"] == 3
        assert payload["level"] == "info"

    def test_level_filters_debug(self, capsys: pytest.CaptureFixture[str]) -> None:
        JsonLoggerFactory.configure(logging.INFO)
        get_logger("tests.level").debug("hidden")
        assert "hidden" not in capsys.readouterr().err

    def test_configure_from_settings(self) -> None:
        JsonLoggerFactory.configure_from_settings(SearchSettings(log_level="WARNING", log_json=False))
        assert logging.getLogger().level == logging.WARNING
