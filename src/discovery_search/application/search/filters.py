"""Application search – filter store.

Filters arrive as ``field:value`` strings.  A leading ``-`` on the field marks
a NOT filter, a leading ``~`` an OR filter.  Advanced filters (anything
starting with ``(`` or ``-(``) cannot be split into field and value and are
collected verbatim under the synthetic field ``#``.
"""
from __future__ import annotations

import copy
import dataclasses
from typing import Iterator, Mapping

from discovery_search.application.search.query import Operator

__all__ = [
    "ADVANCED_FILTER_FIELD",
    "CheckboxFacet",
    "FilterEntry",
    "FilterStore",
    "field_aliases",
    "is_advanced_filter",
    "operator_prefix",
    "parse_filter",
    "parse_operator_and_field",
]

ADVANCED_FILTER_FIELD = "#"

_PREFIXES = {"-": Operator.NOT, "~": Operator.OR}


def is_advanced_filter(raw: str) -> bool:
    return raw.startswith("(") or raw.startswith("-(")


def parse_filter(raw: str) -> tuple[str, str]:
    """Split ``field:value`` on the first colon.

    One layer of surrounding double quotes is stripped from the value and the
    result is trimmed.  Advanced filters come back as ``("#", raw)``.
    """
    if is_advanced_filter(raw):
        return ADVANCED_FILTER_FIELD, raw
    field, _, value = raw.partition(":")
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return field, value.strip()


def field_aliases(field: str, aliases: Mapping[str, str]) -> list[str]:
    """Return *field* plus every alias of it, with its boolean prefix re-applied."""
    prefix = field[:1] if field[:1] in _PREFIXES else ""
    raw_field = field[len(prefix):]
    result = [field]
    for alias, canonical in aliases.items():
        if canonical == raw_field:
            result.append(prefix + alias)
    return result


def parse_operator_and_field(field: str) -> tuple[Operator, str]:
    """Strip a boolean prefix from a stored field key."""
    operator = _PREFIXES.get(field[:1])
    if operator is None:
        return Operator.AND, field
    return operator, field[1:]


def operator_prefix(operator: Operator | str) -> str:
    op = Operator.parse(operator)
    if op is Operator.NOT:
        return "-"
    if op is Operator.OR:
        return "~"
    return ""


@dataclasses.dataclass(frozen=True)
class FilterEntry:
    """One applied filter value."""

    field: str
    value: str
    operator: Operator = Operator.AND
    advanced: bool = False

    @classmethod
    def from_stored(cls, key: str, value: str) -> "FilterEntry":
        if key == ADVANCED_FILTER_FIELD:
            return cls(ADVANCED_FILTER_FIELD, value, Operator.AND, True)
        operator, field = parse_operator_and_field(key)
        return cls(field, value, operator)

    @property
    def key(self) -> str:
        """Stored field key, boolean prefix included."""
        if self.advanced:
            return ADVANCED_FILTER_FIELD
        return operator_prefix(self.operator) + self.field

    def to_query_param(self) -> str:
        if self.advanced:
            return self.value
        return f'{self.key}:"{self.value}"'


@dataclasses.dataclass(frozen=True)
class CheckboxFacet:
    """A single filter toggled on or off as a boolean."""

    field: str
    filter: str
    description: str
    dynamic: bool = False
    always_visible: bool = False

    @classmethod
    def from_filter(cls, filter_string: str, description: str, dynamic: bool = False) -> "CheckboxFacet":
        field, _ = parse_filter(filter_string)
        return cls(field=field, filter=filter_string, description=description, dynamic=dynamic)

    @property
    def value(self) -> str:
        return parse_filter(self.filter)[1]


class FilterStore:
    """Ordered mapping of stored field key → list of values.

    *aliases* maps legacy field names to their canonical field; lookups made
    through :meth:`has` treat a filter on any alias as a filter on the field.
    A store built with ``check_duplicates=False`` (hidden filters) appends
    blindly.
    """

    def __init__(
        self,
        aliases: Mapping[str, str] | None = None,
        *,
        check_duplicates: bool = True,
    ) -> None:
        self._filters: dict[str, list[str]] = {}
        self._aliases: dict[str, str] = dict(aliases or {})
        self._check_duplicates = check_duplicates

    # ------------------------------------------------------------------
    # Aliases
    # ------------------------------------------------------------------

    def set_aliases(self, aliases: Mapping[str, str]) -> None:
        self._aliases = dict(aliases)

    @property
    def aliases(self) -> dict[str, str]:
        return dict(self._aliases)

    def aliases_for(self, field: str) -> list[str]:
        return field_aliases(field, self._aliases)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def has(self, raw: str) -> bool:
        field, value = parse_filter(raw)
        return any(value in self._filters.get(current, ()) for current in self.aliases_for(field))

    def add(self, raw: str) -> bool:
        """Add *raw*; returns False when it was already present."""
        if self._check_duplicates and self.has(raw):
            return False
        field, value = parse_filter(raw)
        self._filters.setdefault(field, []).append(value)
        return True

    def add_for_field(self, field: str, value: str) -> bool:
        """Add a value to an explicit field key without parsing a filter string."""
        if self._check_duplicates and value in self._filters.get(field, ()):
            return False
        self._filters.setdefault(field, []).append(value)
        return True

    def remove(self, raw: str) -> bool:
        field, value = parse_filter(raw)
        values = self._filters.get(field)
        if not values or value not in values:
            return False
        remaining = [v for v in values if v != value]
        if remaining:
            self._filters[field] = remaining
        else:
            del self._filters[field]
        return True

    def remove_all(self, field: str | None = None) -> None:
        if field is None:
            self._filters.clear()
            return
        for key in (field, f"-{field}", f"~{field}"):
            self._filters.pop(key, None)

    def replace(self, filters: Mapping[str, list[str]]) -> None:
        self._filters = {k: list(v) for k, v in filters.items() if v}

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def raw(self) -> dict[str, list[str]]:
        return {k: list(v) for k, v in self._filters.items()}

    def get(self, field: str) -> list[str]:
        return list(self._filters.get(field, ()))

    def entries(self) -> Iterator[FilterEntry]:
        for key, values in self._filters.items():
            for value in values:
                yield FilterEntry.from_stored(key, value)

    def as_query_params(self) -> list[str]:
        """Filters as ``field:"value"`` strings in insertion order."""
        return [entry.to_query_param() for entry in self.entries()]

    def __len__(self) -> int:
        return sum(len(v) for v in self._filters.values())

    def __bool__(self) -> bool:
        return bool(self._filters)

    def __contains__(self, field: object) -> bool:
        return field in self._filters

    def __copy__(self) -> "FilterStore":
        clone = FilterStore(self._aliases, check_duplicates=self._check_duplicates)
        clone._filters = self.raw()
        return clone

    def __deepcopy__(self, memo: dict) -> "FilterStore":
        return copy.copy(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FilterStore):
            return NotImplemented
        return self._filters == other._filters

    def __repr__(self) -> str:
        return f"FilterStore({self._filters!r})"
