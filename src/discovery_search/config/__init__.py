"""Config – settings, option trees and their loaders."""

from discovery_search.config.loaders import ConfigLoader, DictConfigLoader, JsonConfigLoader
from discovery_search.config.settings import EnvSettingsLoader, SearchSettings, Settings
from discovery_search.config.tree import ConfigTree
from discovery_search.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
    UnexpectedClassShapeError,
)

__all__ = [
    "ConfigError",
    "ConfigLoader",
    "ConfigTree",
    "DictConfigLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "JsonConfigLoader",
    "MissingRequiredSettingError",
    "SearchSettings",
    "Settings",
    "UnexpectedClassShapeError",
]
