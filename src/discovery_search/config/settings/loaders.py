"""Config settings – EnvSettingsLoader.

Each dataclass field ``name`` of a settings class with ``_prefix = "DISCOVERY"``
is read from ``DISCOVERY_NAME``; values are coerced from the field's type
annotation with the same boolean spellings the option trees accept.
"""
from __future__ import annotations

import dataclasses
import os
import typing
from typing import Any, Mapping, TypeVar

from discovery_search.config.settings.base import Settings
from discovery_search.config.tree import FALSE_STRINGS, TRUE_STRINGS
from discovery_search.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)
from discovery_search.observability.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T", bound=Settings)


def env_key(settings_class: type[Settings], field_name: str) -> str:
    prefix = getattr(settings_class, "_prefix", "")
    return f"{prefix}_{field_name}".upper().lstrip("_")


class EnvSettingsLoader:
    """Build a settings dataclass from environment variables.

    *environ* defaults to :data:`os.environ`; pass a mapping to load from
    anything else.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = os.environ if environ is None else environ

    def load(self, settings_class: type[T]) -> T:
        hints = typing.get_type_hints(settings_class)
        kwargs: dict[str, Any] = {}
        for field in dataclasses.fields(settings_class):
            key = env_key(settings_class, field.name)
            raw = self._environ.get(key)
            if raw is None:
                if field.default is dataclasses.MISSING and field.default_factory is dataclasses.MISSING:
                    raise MissingRequiredSettingError(key)
                continue
            kwargs[field.name] = self._coerce(key, raw, hints.get(field.name, str))

        try:
            settings = settings_class(**kwargs)
        except ConfigError:
            raise
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Failed to load settings: {exc}", cause=exc) from exc
        log.debug("settings_loaded", settings=settings_class.__name__, overridden=sorted(kwargs))
        return settings

    @staticmethod
    def _coerce(key: str, value: str, type_hint: Any) -> Any:
        args = [a for a in typing.get_args(type_hint) if a is not type(None)]
        if typing.get_origin(type_hint) is not list and len(args) == 1:
            type_hint = args[0]

        if type_hint is bool:
            text = value.strip().lower()
            if text in TRUE_STRINGS:
                return True
            if text in FALSE_STRINGS:
                return False
            raise InvalidSettingValueError(key, value, "expected a boolean")
        if type_hint is int:
            try:
                return int(value)
            except ValueError:
                raise InvalidSettingValueError(key, value, "expected an integer") from None
        if typing.get_origin(type_hint) is list:
            return [v.strip() for v in value.split(",") if v.strip()]
        return value


__all__ = ["EnvSettingsLoader", "env_key"]
