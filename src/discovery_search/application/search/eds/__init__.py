"""EDS search family."""
from discovery_search.application.search.eds.options import EDSOptions
from discovery_search.application.search.eds.params import EDSParams

__all__ = ["EDSOptions", "EDSParams"]
