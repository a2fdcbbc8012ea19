"""Solr search family."""
from discovery_search.application.search.solr.options import SolrOptions
from discovery_search.application.search.solr.params import SolrParams

__all__ = ["SolrOptions", "SolrParams"]
