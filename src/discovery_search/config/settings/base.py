"""Config settings – Settings base class and SearchSettings."""
from __future__ import annotations

import dataclasses
import logging
from typing import ClassVar

from discovery_search.config.validation import InvalidSettingValueError


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class SearchSettings(Settings):
    """Process-level settings for the search engine.

    ``config_dir`` points at a directory of ``<name>.json`` configuration
    trees (``searches.json``, ``facets.json``, ...) read by
    :class:`~discovery_search.config.loaders.JsonConfigLoader`.
    """

    _prefix: ClassVar[str] = "DISCOVERY"

    config_dir: str = "config"
    default_backend: str = "Solr"
    log_level: str = "INFO"
    log_json: bool = True

    def _validate(self) -> None:
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise InvalidSettingValueError("log_level", self.log_level, "unknown logging level")

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level.upper())


__all__ = ["SearchSettings", "Settings"]
