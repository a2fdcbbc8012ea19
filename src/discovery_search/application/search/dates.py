"""Application search – date sanitising for full-date range filters."""
from __future__ import annotations

import calendar
import re
from datetime import datetime

__all__ = ["parse_solr_date", "sanitize_date"]

_ISO_FULL = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z$")
_NO_DATE = re.compile(r"^n\.?\s*d\.?$", re.IGNORECASE)
_LOOSE_FORMATS = ("%m/%d/%Y", "%m-%d-%Y", "%m.%d.%Y", "%d %B %Y", "%B %d, %Y", "%B %Y")


def _parse_loose(text: str) -> datetime | None:
    for fmt in _LOOSE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def sanitize_date(date: object, range_end: bool = False) -> str | None:
    """Convert a free-form date into ``YYYY-MM-DDThh:mm:ssZ`` or ``None``.

    Bare years and year-months are widened to the start (or, with
    *range_end*, the end) of the period.  Strings that do not start with a
    four-digit year are parsed with a handful of common formats; ``n.d.``
    means "no date".
    """
    if date is None:
        return None
    text = str(date).replace("[", "").replace("]", "").strip()
    if not text:
        return None
    if _ISO_FULL.match(text):
        return text if parse_solr_date(text) is not None else None

    if not re.match(r"^\d{4}", text):
        if _NO_DATE.match(text):
            return None
        parsed = _parse_loose(text)
        if parsed is None:
            return None
        text = parsed.strftime("%Y-%m-%d")

    year = int(text[:4])
    if year < 1:
        return None
    rest = re.sub(r"[.\s?]", "", text[4:])
    rest = rest.split("&", 1)[0]
    month, day = (12, 31) if range_end else (1, 1)

    parts = [p for p in re.split(r"[-/]", rest) if p]
    if parts and parts[0].isdigit() and 1 <= int(parts[0]) <= 12:
        month = int(parts[0])
        last_day = calendar.monthrange(year, month)[1]
        day = last_day if range_end else 1
        if len(parts) > 1:
            digits = re.match(r"\d+", parts[1])
            if digits and 1 <= int(digits.group(0)) <= last_day:
                day = int(digits.group(0))
    elif range_end:
        day = calendar.monthrange(year, month)[1]

    clock = "23:59:59" if range_end else "00:00:00"
    return f"{year:04d}-{month:02d}-{day:02d}T{clock}Z"


def parse_solr_date(value: str) -> datetime | None:
    try:
        return datetime.strptime(value, "%Y-%m-%dT%H:%M:%SZ")
    except ValueError:
        return None
