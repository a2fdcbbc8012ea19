"""Application search – Lucene range syntax helper."""
from __future__ import annotations

import re

__all__ = ["capitalize_ranges"]

_RANGE = re.compile(r"(\[[^\]]+?\]|\{[^}]+?\})")
_TO = re.compile(r"\s+to\s+", re.IGNORECASE)


def _capitalize_range(match: re.Match[str], case_sensitive: bool) -> str:
    token = match.group(0)
    opener, body, closer = token[0], token[1:-1], token[-1]
    parts = _TO.split(body, maxsplit=1)
    if len(parts) != 2:
        return token
    start, end = parts[0].strip(), parts[1].strip()
    upper = f"{opener}{start.upper()} TO {end.upper()}{closer}"
    if case_sensitive:
        return f"{opener}{start} TO {end}{closer}"
    lower = f"{opener}{start.lower()} TO {end.lower()}{closer}"
    if lower == upper:
        return upper
    return f"({lower} OR {upper})"


def capitalize_ranges(query: str, case_sensitive: bool = False) -> str:
    """Normalise the ``TO`` keyword of every ``[a to b]`` / ``{a to b}`` range.

    With case-insensitive ranges a range whose bounds differ by case is
    expanded into ``([a TO b] OR [A TO B])`` so it matches either spelling.
    """
    return _RANGE.sub(lambda m: _capitalize_range(m, case_sensitive), query)
