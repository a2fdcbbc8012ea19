"""Config settings – 12-factor env-based configuration."""
from discovery_search.config.settings.base import SearchSettings, Settings
from discovery_search.config.settings.loaders import EnvSettingsLoader, env_key

__all__ = ["EnvSettingsLoader", "SearchSettings", "Settings", "env_key"]
