"""Config – ConfigLoader port and concrete loaders for named option trees."""
from __future__ import annotations

import abc
import json
from pathlib import Path
from typing import Any, Mapping

from discovery_search.config.tree import ConfigTree
from discovery_search.config.validation import ConfigError
from discovery_search.observability.logging import get_logger

log = get_logger(__name__)


class ConfigLoader(abc.ABC):
    """Port: return the named configuration (``searches``, ``facets``, ...)."""

    @abc.abstractmethod
    def get(self, name: str) -> ConfigTree: ...


class DictConfigLoader(ConfigLoader):
    """In-memory loader; unknown names resolve to an empty tree."""

    def __init__(self, configs: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        self._configs: dict[str, ConfigTree] = {
            name: ConfigTree(data) for name, data in (configs or {}).items()
        }

    def get(self, name: str) -> ConfigTree:
        return self._configs.get(name, ConfigTree())

    def set(self, name: str, data: Mapping[str, Any]) -> "DictConfigLoader":
        self._configs[name] = ConfigTree(data)
        return self


class JsonConfigLoader(ConfigLoader):
    """Load ``<directory>/<name>.json`` once and cache the parsed tree.

    A missing file yields an empty tree; a file that is not a JSON object is
    a :class:`ConfigError`.
    """

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)
        self._cache: dict[str, ConfigTree] = {}

    def get(self, name: str) -> ConfigTree:
        if name not in self._cache:
            self._cache[name] = self._load(name)
        return self._cache[name]

    def _load(self, name: str) -> ConfigTree:
        path = self._directory / f"{name}.json"
        if not path.is_file():
            log.debug("config_missing", name=name, path=str(path))
            return ConfigTree()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise ConfigError(f"Failed to load configuration '{name}': {exc}", cause=exc) from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration '{name}' must be a JSON object")
        log.debug("config_loaded", name=name, sections=len(data))
        return ConfigTree(data)


__all__ = ["ConfigLoader", "DictConfigLoader", "JsonConfigLoader"]
