"""Application search – compact persisted form of a search.

Saved and shared searches are stored as a small JSON document with
single-letter keys::

    {"t": [...], "f": {...}, "hf": {...}, "ty": "basic", "cl": "Solr"}

``t`` holds the query: a basic search is ``[{"l": text, "i": handler}]``, an
advanced search a list of ``{"g": [{"b": op, "f": handler, "l": text}], "j": join}``
entries, one per group.
"""
from __future__ import annotations

import dataclasses
import json
from typing import Any, Mapping

from discovery_search.application.search.query import Group, Operator, QueryNode, Term

__all__ = ["MinifiedSearch", "expand_query", "minify_query"]


def minify_query(node: QueryNode) -> list[dict[str, Any]]:
    if isinstance(node, Term):
        return [{"l": node.text, "i": node.handler}]
    terms: list[dict[str, Any]] = []
    for child in node.children:
        group = child if isinstance(child, Group) else Group(Operator.AND, [child])
        lines = [
            {"b": group.operator.value, "f": term.handler, "l": term.text}
            for term in group.children
            if isinstance(term, Term)
        ]
        terms.append({"g": lines, "j": node.operator.value})
    return terms


def expand_query(terms: list[Mapping[str, Any]], default_handler: str | None = None) -> tuple[str, QueryNode]:
    """Rebuild ``(search_type, query)`` from the ``t`` list."""
    if not any("g" in term for term in terms):
        first = terms[0] if terms else {}
        return "basic", Term(str(first.get("l", "")), first.get("i") or default_handler)

    grouped = [term for term in terms if "g" in term]
    join = Operator.parse(grouped[0].get("j"), Operator.AND)
    groups: list[QueryNode] = []
    for term in grouped:
        lines = term["g"]
        operator = Operator.parse(lines[0].get("b"), Operator.AND) if lines else Operator.AND
        groups.append(
            Group(
                operator,
                [Term(str(line.get("l", "")), line.get("f") or default_handler) for line in lines],
            )
        )
    return "advanced", Group(join, groups)


@dataclasses.dataclass
class MinifiedSearch:
    """Compact search state: query terms, filters, hidden filters and type."""

    terms: list[dict[str, Any]]
    filters: dict[str, list[str]] = dataclasses.field(default_factory=dict)
    hidden_filters: dict[str, list[str]] = dataclasses.field(default_factory=dict)
    search_type: str = "basic"
    search_class_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "t": self.terms,
            "f": self.filters,
            "hf": self.hidden_filters,
            "ty": self.search_type,
        }
        if self.search_class_id is not None:
            payload["cl"] = self.search_class_id
        return payload

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MinifiedSearch":
        return cls(
            terms=[dict(t) for t in data.get("t", [])],
            filters={k: list(v) for k, v in (data.get("f") or {}).items()},
            hidden_filters={k: list(v) for k, v in (data.get("hf") or {}).items()},
            search_type=str(data.get("ty", "basic")),
            search_class_id=data.get("cl"),
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))

    @classmethod
    def from_json(cls, text: str) -> "MinifiedSearch":
        return cls.from_dict(json.loads(text))
