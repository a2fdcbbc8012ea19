"""Application search – range filter construction.

Four request parameters name range fields: ``daterange`` (years),
``fulldaterange``, ``genericrange`` and ``numericrange``.  For every field
``f`` listed in one of them the bounds are read from ``<f>from`` / ``<f>to``,
normalised, and turned into a ``f:[from TO to]`` filter.  ``*`` is the
unbounded wildcard; a range with both bounds open is dropped.
"""
from __future__ import annotations

import dataclasses
import math
import re
from typing import Any, Callable

from discovery_search.application.search.dates import parse_solr_date, sanitize_date
from discovery_search.application.search.request import RequestParams, as_list, first
from discovery_search.application.search.syntax import capitalize_ranges

__all__ = [
    "FULL_DATE_RANGE",
    "GENERIC_RANGE",
    "NUMERIC_RANGE",
    "RANGE_KINDS",
    "WILDCARD",
    "YEAR_RANGE",
    "FilterGenerator",
    "RangeKind",
    "RangeSpec",
    "ValueFilter",
    "build_date_range_filter",
    "build_full_date_range_filter",
    "build_generic_range_filter",
    "build_numeric_range_filter",
    "format_date_for_full_date_range",
    "format_range_display",
    "format_value_for_numeric_range",
    "format_year_for_date_range",
    "init_generic_range_filters",
]

WILDCARD = "*"

ValueFilter = Callable[[Any], str]
FilterGenerator = Callable[[str, str, str], str]


@dataclasses.dataclass(frozen=True)
class RangeSpec:
    field: str
    start: str = WILDCARD
    end: str = WILDCARD
    case_sensitive: bool = True

    @property
    def is_open(self) -> bool:
        return self.start == WILDCARD and self.end == WILDCARD


# ---------------------------------------------------------------------------
# Value normalisers
# ---------------------------------------------------------------------------


def format_year_for_date_range(year: Any) -> str:
    """``"05"`` → ``"1905"``, ``"905"`` → ``"0905"``, anything without 2–4 digits → ``*``."""
    text = "" if year is None else str(year)
    if not re.search(r"\d{2,4}", text):
        return WILDCARD
    if len(text) == 2:
        return "19" + text
    if len(text) == 3:
        return "0" + text
    return text


def format_date_for_full_date_range(date: Any) -> str:
    sanitized = sanitize_date(date)
    return WILDCARD if sanitized is None else sanitized


def format_value_for_numeric_range(num: Any) -> str:
    text = "" if num is None else str(num).strip()
    if text in ("", WILDCARD):
        return WILDCARD
    try:
        return str(int(text))
    except ValueError:
        pass
    try:
        value = float(text)
    except ValueError:
        return WILDCARD
    if math.isnan(value) or math.isinf(value):
        return WILDCARD
    return str(int(value)) if value.is_integer() else str(value)


# ---------------------------------------------------------------------------
# Filter generators
# ---------------------------------------------------------------------------


def build_generic_range_filter(field: str, start: str, end: str, case_sensitive: bool = True) -> str:
    """Build ``field:[start TO end]``.

    In case-insensitive mode the bounds are swapped when they compare out of
    order as lowercased strings, and the range is expanded to cover both
    letter cases.  No numeric interpretation happens here.
    """
    if case_sensitive:
        return f"{field}:[{start} TO {end}]"
    if start.lower() > end.lower():
        start, end = end, start
    return capitalize_ranges(f"{field}:[{start} TO {end}]")


def _numeric_less(a: str, b: str) -> bool:
    try:
        return float(a) < float(b)
    except ValueError:
        return a < b


def build_date_range_filter(field: str, start: str, end: str) -> str:
    if start != WILDCARD and end != WILDCARD and _numeric_less(end, start):
        start, end = end, start
    return build_generic_range_filter(field, start, end)


def build_numeric_range_filter(field: str, start: str, end: str) -> str:
    """Numeric range; swapped only when both bounds are concrete and reversed."""
    if start != WILDCARD and end != WILDCARD and _numeric_less(end, start):
        start, end = end, start
    return build_generic_range_filter(field, start, end)


def build_full_date_range_filter(field: str, start: str, end: str) -> str:
    if start != WILDCARD and end != WILDCARD:
        start_dt, end_dt = parse_solr_date(start), parse_solr_date(end)
        if start_dt is not None and end_dt is not None and end_dt < start_dt:
            start, end = end, start
    return build_generic_range_filter(field, start, end)


def _case_insensitive_generic(field: str, start: str, end: str) -> str:
    return build_generic_range_filter(field, start, end, case_sensitive=False)


# ---------------------------------------------------------------------------
# Range kinds and the shared driver
# ---------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True)
class RangeKind:
    """Strategy pair for one range request parameter."""

    request_param: str
    value_filter: ValueFilter | None = None
    filter_generator: FilterGenerator | None = None

    def replace(self, **changes: Any) -> "RangeKind":
        return dataclasses.replace(self, **changes)


YEAR_RANGE = RangeKind("daterange", format_year_for_date_range, build_date_range_filter)
FULL_DATE_RANGE = RangeKind("fulldaterange", format_date_for_full_date_range, build_full_date_range_filter)
GENERIC_RANGE = RangeKind("genericrange", None, _case_insensitive_generic)
NUMERIC_RANGE = RangeKind("numericrange", format_value_for_numeric_range, build_numeric_range_filter)

RANGE_KINDS: tuple[RangeKind, ...] = (YEAR_RANGE, FULL_DATE_RANGE, GENERIC_RANGE, NUMERIC_RANGE)


def _bound(request: RequestParams, name: str) -> Any:
    value = first(request.get(name))
    return WILDCARD if value is None or value == "" else value


def init_generic_range_filters(
    request: RequestParams,
    add_filter: Callable[[str], Any],
    request_param: str = "genericrange",
    value_filter: ValueFilter | None = None,
    filter_generator: FilterGenerator | None = None,
) -> list[str]:
    """Read every range named by *request_param* and add its filter.

    Returns the filter strings that were generated, in request order.
    """
    generator = filter_generator or _case_insensitive_generic
    added: list[str] = []
    for field in as_list(request.get(request_param)):
        if not field:
            continue
        start = _bound(request, f"{field}from")
        end = _bound(request, f"{field}to")
        if value_filter is not None:
            start, end = value_filter(start), value_filter(end)
        bounds = RangeSpec(field, str(start), str(end))
        if bounds.is_open:
            continue
        range_filter = generator(bounds.field, bounds.start, bounds.end)
        add_filter(range_filter)
        added.append(range_filter)
    return added


_SIMPLE_RANGE = re.compile(r"^\[(.*) TO (.*)\]$")
_CASE_INSENSITIVE_RANGE = re.compile(r"^\(\[(.*) TO (.*)\] OR \[(.*) TO (.*)\]\)$")


def format_range_display(value: str, separator: str = " - ") -> str | None:
    """``[X TO Y]`` → ``X - Y``; ``None`` when *value* is not a range.

    The case-insensitive form ``([x TO y] OR [X TO Y])`` is only converted
    when both halves name the same bounds.
    """
    match = _SIMPLE_RANGE.match(value)
    if match:
        return match.group(1) + separator + match.group(2)
    match = _CASE_INSENSITIVE_RANGE.match(value)
    if match:
        low_start, low_end, high_start, high_end = match.groups()
        if low_start.lower() == high_start.lower() and low_end.lower() == high_end.lower():
            return low_start + separator + low_end
    return None
