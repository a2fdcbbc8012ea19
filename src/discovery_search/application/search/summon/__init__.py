"""Summon search family."""
from discovery_search.application.search.summon.options import SummonOptions
from discovery_search.application.search.summon.params import SummonParams

__all__ = ["SummonOptions", "SummonParams"]
