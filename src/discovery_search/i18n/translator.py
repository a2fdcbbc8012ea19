"""I18n – Translator port and a dictionary-backed implementation.

Translation keys are either a plain string or a ``(text_domain, key)`` pair.
Tokens are substituted literally into the translated string, which is how
facet formats such as ``"%%translated%% (%%raw%%)"`` are expanded.
"""
from __future__ import annotations

from typing import Mapping, Protocol, Union, runtime_checkable

TranslationKey = Union[str, tuple[str, str]]

DEFAULT_DOMAIN = "default"


@runtime_checkable
class Translator(Protocol):
    def translate(
        self,
        key: TranslationKey,
        tokens: Mapping[str, str] | None = None,
        default: str | None = None,
    ) -> str: ...


def split_key(key: TranslationKey) -> tuple[str, str]:
    """Return ``(domain, key)``; bare strings may use ``domain::key`` notation."""
    if isinstance(key, tuple):
        return key[0] or DEFAULT_DOMAIN, key[1]
    if "::" in key:
        domain, _, rest = key.partition("::")
        return domain, rest
    return DEFAULT_DOMAIN, key


def substitute(text: str, tokens: Mapping[str, str] | None) -> str:
    for token, replacement in (tokens or {}).items():
        text = text.replace(token, str(replacement))
    return text


class DictTranslator:
    """Translator over ``{domain: {key: text}}`` string tables.

    Unknown keys fall back to *default* when given, else the key itself.
    """

    def __init__(self, tables: Mapping[str, Mapping[str, str]] | None = None) -> None:
        self._tables = {domain: dict(entries) for domain, entries in (tables or {}).items()}

    def translate(
        self,
        key: TranslationKey,
        tokens: Mapping[str, str] | None = None,
        default: str | None = None,
    ) -> str:
        domain, raw = split_key(key)
        text = self._tables.get(domain, {}).get(raw)
        if text is None:
            text = default if default is not None else raw
        return substitute(text, tokens)


class NullTranslator(DictTranslator):
    """Translator that returns every key untranslated."""

    def __init__(self) -> None:
        super().__init__({})


__all__ = [
    "DEFAULT_DOMAIN",
    "DictTranslator",
    "NullTranslator",
    "TranslationKey",
    "Translator",
    "split_key",
    "substitute",
]
