"""Testing fakes – in-memory doubles for the engine's ports."""
from discovery_search.testing.fakes.backend import FakeSearchBackend
from discovery_search.testing.fakes.config import solr_config
from discovery_search.testing.fakes.request import FakeRequest
from discovery_search.testing.fakes.translator import FakeTranslator

__all__ = ["FakeRequest", "FakeSearchBackend", "FakeTranslator", "solr_config"]
