"""Unit tests for config settings."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import ClassVar

import pytest

from discovery_search.config.settings import EnvSettingsLoader, SearchSettings, Settings, env_key
from discovery_search.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)


@dataclass
class RequiredSettings(Settings):
    _prefix: ClassVar[str] = "REQ"

    endpoint: str
    retries: int = 3
    shards: list[str] | None = None


class TestSearchSettingsDefaults:
    def test_defaults(self) -> None:
        settings = SearchSettings()
        assert settings.config_dir == "config"
        assert settings.default_backend == "Solr"
        assert settings.log_level == "INFO"
        assert settings.log_json is True

    def test_log_level_number(self) -> None:
        assert SearchSettings(log_level="debug").log_level_number == logging.DEBUG

    def test_unknown_log_level_rejected(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            SearchSettings(log_level="CHATTY")


class TestEnvSettingsLoader:
    def test_loads_prefixed_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DISCOVERY_CONFIG_DIR", "/etc/discovery")
        monkeypatch.setenv("DISCOVERY_DEFAULT_BACKEND", "Summon")
        monkeypatch.setenv("DISCOVERY_LOG_JSON", "false")
        settings = EnvSettingsLoader().load(SearchSettings)
        assert settings.config_dir == "/etc/discovery"
        assert settings.default_backend == "Summon"
        assert settings.log_json is False

    def test_missing_values_keep_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DISCOVERY_CONFIG_DIR", raising=False)
        assert EnvSettingsLoader().load(SearchSettings).config_dir == "config"

    def test_missing_required_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("REQ_ENDPOINT", raising=False)
        with pytest.raises(MissingRequiredSettingError) as exc_info:
            EnvSettingsLoader().load(RequiredSettings)
        assert exc_info.value.setting_name == "REQ_ENDPOINT"

    def test_coerces_int(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REQ_ENDPOINT", "http://solr")
        monkeypatch.setenv("REQ_RETRIES", "5")
        assert EnvSettingsLoader().load(RequiredSettings).retries == 5

    def test_invalid_value_is_config_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DISCOVERY_LOG_LEVEL", "CHATTY")
        with pytest.raises(ConfigError):
            EnvSettingsLoader().load(SearchSettings)


class TestEnvSettingsLoaderMapping:
    def test_reads_given_mapping(self) -> None:
        environ = {"REQ_ENDPOINT": "http://solr", "REQ_SHARDS": "main, local,"}
        settings = EnvSettingsLoader(environ).load(RequiredSettings)
        assert settings.endpoint == "http://solr"
        assert settings.shards == ["main", "local"]
        assert settings.retries == 3

    def test_env_key_uses_prefix(self) -> None:
        assert env_key(SearchSettings, "log_json") == "DISCOVERY_LOG_JSON"

    def test_bad_boolean_names_the_variable(self) -> None:
        with pytest.raises(InvalidSettingValueError) as exc_info:
            EnvSettingsLoader({"DISCOVERY_LOG_JSON": "maybe"}).load(SearchSettings)
        assert exc_info.value.setting_name == "DISCOVERY_LOG_JSON"

    def test_bad_integer_names_the_variable(self) -> None:
        environ = {"REQ_ENDPOINT": "http://solr", "REQ_RETRIES": "lots"}
        with pytest.raises(InvalidSettingValueError) as exc_info:
            EnvSettingsLoader(environ).load(RequiredSettings)
        assert exc_info.value.setting_name == "REQ_RETRIES"
        assert exc_info.value.to_dict()["setting"] == "REQ_RETRIES"
