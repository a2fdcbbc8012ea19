"""Application search – query model.

A query is either a single :class:`Term` (basic search) or a :class:`Group`
tree (advanced search).  Advanced searches are always two levels deep: the
root group joins inner groups, and each inner group combines terms.  An inner
group with the ``NOT`` operator is a negated group whose terms are ORed.
"""
from __future__ import annotations

import copy
import dataclasses
import re
from enum import Enum
from typing import Callable, Iterator, Union

__all__ = [
    "Group",
    "Operator",
    "QueryNode",
    "Term",
    "display_query",
    "iter_terms",
    "to_advanced",
]


class Operator(str, Enum):
    AND = "AND"
    OR = "OR"
    NOT = "NOT"

    @classmethod
    def parse(cls, value: object, default: Operator | None = None) -> Operator:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            return default if default is not None else cls.AND


def _term_pattern(old: str) -> re.Pattern[str]:
    # Word boundaries apply only to needles made of word characters
    escaped = re.escape(old)
    if re.fullmatch(r"\w+", old):
        return re.compile(rf"\b{escaped}\b", re.IGNORECASE)
    return re.compile(escaped, re.IGNORECASE)


@dataclasses.dataclass
class Term:
    """A search string bound to a handler (``None`` until resolved)."""

    text: str
    handler: str | None = None

    def replace_term(self, old: str, new: str) -> None:
        self.text = _term_pattern(old).sub(lambda _m: new, self.text)

    def contains_term(self, needle: str) -> bool:
        return re.search(rf"\b{re.escape(needle)}\b", self.text) is not None

    def is_empty(self) -> bool:
        return not self.text.strip()


@dataclasses.dataclass
class Group:
    """Boolean combination of child nodes."""

    operator: Operator
    children: list["QueryNode"] = dataclasses.field(default_factory=list)

    @property
    def negated(self) -> bool:
        return self.operator is Operator.NOT

    def replace_term(self, old: str, new: str) -> None:
        for child in self.children:
            child.replace_term(old, new)

    def contains_term(self, needle: str) -> bool:
        return any(child.contains_term(needle) for child in self.children)

    def is_empty(self) -> bool:
        return all(child.is_empty() for child in self.children)


QueryNode = Union[Term, Group]


def iter_terms(node: QueryNode) -> Iterator[Term]:
    """Yield every :class:`Term` in *node* depth-first, in order."""
    if isinstance(node, Term):
        yield node
        return
    for child in node.children:
        yield from iter_terms(child)


def to_advanced(term: Term) -> Group:
    """Wrap a basic term in the two-level AND structure of an advanced search."""
    return Group(Operator.AND, [Group(Operator.AND, [copy.deepcopy(term)])])


def display_query(
    node: QueryNode,
    *,
    translate: Callable[[str], str],
    field_label: Callable[[str], str],
    default_handler: str | None = None,
) -> str:
    """Human-readable rendering of a query.

    A basic search shows its bare text.  In an advanced search each term is
    shown as ``Label: "text"`` (just ``text`` for the default handler), groups
    are parenthesised and joined by the translated root operator, and negated
    groups are appended as ``NOT ((a) OR (b))``.
    """
    if isinstance(node, Term):
        return node.text

    def render(term: QueryNode) -> str | None:
        if isinstance(term, Group):
            inner = [r for r in (render(c) for c in term.children) if r]
            if not inner:
                return None
            return "(" + f" {translate(term.operator.value)} ".join(inner) + ")"
        if term.is_empty():
            return None
        if not term.handler or term.handler == default_handler:
            return term.text
        return f'{field_label(term.handler)}: "{term.text}"'

    groups: list[str] = []
    excludes: list[str] = []
    for child in node.children:
        inner_group = child if isinstance(child, Group) else Group(Operator.AND, [child])
        rendered = [r for r in (render(c) for c in inner_group.children) if r]
        if not rendered:
            continue
        if inner_group.negated:
            excludes.append(f" {translate('OR')} ".join(rendered))
        else:
            groups.append(f" {translate(inner_group.operator.value)} ".join(rendered))

    output = ""
    if groups:
        output = "(" + f") {translate(node.operator.value)} (".join(groups) + ")"
    if excludes:
        if output:
            output += " "
        output += (
            f"{translate('NOT')} (("
            + f") {translate('OR')} (".join(excludes)
            + "))"
        )
    return output
