"""Testing generators – Hypothesis strategies for search values."""
from discovery_search.testing.generators.strategies import (
    filter_strategy,
    filter_value_strategy,
    handler_strategy,
    range_bound_strategy,
    search_text_strategy,
    year_strategy,
)

__all__ = [
    "filter_strategy",
    "filter_value_strategy",
    "handler_strategy",
    "range_bound_strategy",
    "search_text_strategy",
    "year_strategy",
]
