"""Config – ConfigTree, an explicit nested key/value option tree.

Configuration sections are plain nested mappings (``section -> key -> value``)
where a value is a scalar, a list of scalars or another mapping.  ``ConfigTree``
wraps such a mapping with typed, optional lookups so callers never have to ask
whether a section exists before reading from it.
"""
from __future__ import annotations

from typing import Any, Iterator, Mapping

TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})
FALSE_STRINGS = frozenset({"0", "false", "no", "off", ""})


class ConfigTree(Mapping[str, Any]):
    """Read-only view over a nested configuration mapping."""

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(data or {})

    # ------------------------------------------------------------------
    # Mapping protocol
    # ------------------------------------------------------------------

    def __getitem__(self, key: str) -> Any:
        return self._wrap(self._data[key])

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"ConfigTree({self._data!r})"

    # ------------------------------------------------------------------
    # Typed accessors
    # ------------------------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._data or self._data[key] is None:
            return default
        return self._wrap(self._data[key])

    def has(self, key: str) -> bool:
        """True when *key* is present with a non-empty value."""
        value = self._data.get(key)
        return value is not None and value != "" and value != [] and value != {}

    def section(self, key: str) -> "ConfigTree":
        """Return the nested section *key*, or an empty tree."""
        value = self._data.get(key)
        if isinstance(value, ConfigTree):
            return value
        if isinstance(value, Mapping):
            return ConfigTree(value)
        return ConfigTree()

    def path(self, *keys: str, default: Any = None) -> Any:
        """Walk nested sections, e.g. ``tree.path("General", "default_sort")``."""
        node: ConfigTree = self
        for key in keys[:-1]:
            node = node.section(key)
        return node.get(keys[-1], default) if keys else default

    def get_str(self, key: str, default: str | None = None) -> str | None:
        value = self._data.get(key)
        if value is None or isinstance(value, (list, Mapping)):
            return default
        return str(value)

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self._data.get(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return bool(value)
        text = str(value).strip().lower()
        if text in TRUE_STRINGS:
            return True
        if text in FALSE_STRINGS:
            return False
        return default

    def get_int(self, key: str, default: int | None = None) -> int | None:
        value = self._data.get(key)
        if value is None or isinstance(value, bool):
            return default
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def get_list(self, key: str) -> list[Any]:
        """Return *key* as a list: scalars are wrapped, mappings give their values."""
        value = self._data.get(key)
        if value is None or value == "":
            return []
        if isinstance(value, Mapping):
            return list(value.values())
        if isinstance(value, (list, tuple)):
            return list(value)
        return [value]

    def to_dict(self) -> dict[str, Any]:
        return {
            k: (v.to_dict() if isinstance(v, ConfigTree) else v)
            for k, v in self._data.items()
        }

    @staticmethod
    def _wrap(value: Any) -> Any:
        if isinstance(value, Mapping) and not isinstance(value, ConfigTree):
            return ConfigTree(value)
        return value


__all__ = ["FALSE_STRINGS", "TRUE_STRINGS", "ConfigTree"]
