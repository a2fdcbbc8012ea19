"""Testing support – fakes and generators for code that builds on the search engine.

Typical use in a consumer's test::

    from discovery_search.testing import FakeSearchBackend, solr_config

    loader = DictConfigLoader(solr_config())
"""

from discovery_search.testing.fakes import (
    FakeRequest,
    FakeSearchBackend,
    FakeTranslator,
    solr_config,
)
from discovery_search.testing.generators import (
    filter_strategy,
    filter_value_strategy,
    handler_strategy,
    range_bound_strategy,
    search_text_strategy,
    year_strategy,
)

__all__ = [
    "FakeRequest",
    "FakeSearchBackend",
    "FakeTranslator",
    "filter_strategy",
    "filter_value_strategy",
    "handler_strategy",
    "range_bound_strategy",
    "search_text_strategy",
    "solr_config",
    "year_strategy",
]
