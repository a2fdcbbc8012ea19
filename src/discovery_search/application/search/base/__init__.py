"""Family-independent Options, Params and Results."""
from discovery_search.application.search.base.options import Options, explode_list_setting
from discovery_search.application.search.base.params import Params
from discovery_search.application.search.base.results import BackendResponse, Results, SearchBackend

__all__ = ["BackendResponse", "Options", "Params", "Results", "SearchBackend", "explode_list_setting"]
