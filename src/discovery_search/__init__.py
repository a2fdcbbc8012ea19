"""
discovery_search – search parameter and facet/filter engine.

Import path convention::

    from discovery_search.kernel.errors import UnsupportedSearchUrlError
    from discovery_search.application.search.solr import SolrOptions, SolrParams
    from discovery_search.application.search.url_query import UrlQueryHelperFactory
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
