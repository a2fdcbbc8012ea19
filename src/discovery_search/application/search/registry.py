"""Application search – backend family registry.

Families are selected by their ``search_class_id`` tag::

    registry = default_registry()
    params = registry.create_params("Solr", loader)
    params.init_from_request(request)
"""
from __future__ import annotations

import dataclasses
from typing import Any, Callable

from discovery_search.application.search.base.options import Options
from discovery_search.application.search.base.params import Params
from discovery_search.application.search.base.results import Results, SearchBackend
from discovery_search.application.search.eds import EDSOptions, EDSParams
from discovery_search.application.search.solr import SolrOptions, SolrParams
from discovery_search.application.search.summon import SummonOptions, SummonParams
from discovery_search.config.loaders import ConfigLoader, JsonConfigLoader
from discovery_search.config.settings import SearchSettings
from discovery_search.i18n import Translator
from discovery_search.kernel.errors import NotFoundError
from discovery_search.observability.logging import get_logger

log = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class SearchFamily:
    options_class: Callable[..., Options]
    params_class: Callable[[Options], Params]
    results_class: Callable[..., Results] = Results


class SearchFamilyRegistry:
    """Maps a backend id tag to its Options/Params/Results classes."""

    def __init__(self) -> None:
        self._families: dict[str, SearchFamily] = {}

    def register(
        self,
        search_class_id: str,
        options_class: Callable[..., Options],
        params_class: Callable[[Options], Params],
        results_class: Callable[..., Results] = Results,
    ) -> None:
        self._families[search_class_id] = SearchFamily(options_class, params_class, results_class)
        log.debug("search_family_registered", search_class_id=search_class_id)

    def get(self, search_class_id: str) -> SearchFamily:
        try:
            return self._families[search_class_id]
        except KeyError:
            raise NotFoundError("search family", search_class_id, known=self.ids()) from None

    def ids(self) -> list[str]:
        return list(self._families)

    def __contains__(self, search_class_id: object) -> bool:
        return search_class_id in self._families

    def create_options(
        self,
        search_class_id: str,
        config_loader: ConfigLoader,
        translator: Translator | None = None,
        **kwargs: Any,
    ) -> Options:
        return self.get(search_class_id).options_class(config_loader, translator, **kwargs)

    def create_params(
        self,
        search_class_id: str,
        config_loader: ConfigLoader,
        translator: Translator | None = None,
        **kwargs: Any,
    ) -> Params:
        options = self.create_options(search_class_id, config_loader, translator, **kwargs)
        return self.get(search_class_id).params_class(options)

    def create_results(self, params: Params, backend: SearchBackend | None = None) -> Results:
        return self.get(params.get_search_class_id()).results_class(params, backend)


def default_registry() -> SearchFamilyRegistry:
    registry = SearchFamilyRegistry()
    registry.register("Solr", SolrOptions, SolrParams)
    registry.register("Summon", SummonOptions, SummonParams)
    registry.register("EDS", EDSOptions, EDSParams)
    return registry


def create_params_from_settings(
    settings: SearchSettings,
    translator: Translator | None = None,
    registry: SearchFamilyRegistry | None = None,
) -> Params:
    """Params for the configured default backend, reading JSON trees from ``config_dir``."""
    registry = registry or default_registry()
    return registry.create_params(settings.default_backend, JsonConfigLoader(settings.config_dir), translator)


__all__ = ["SearchFamily", "SearchFamilyRegistry", "create_params_from_settings", "default_registry"]
