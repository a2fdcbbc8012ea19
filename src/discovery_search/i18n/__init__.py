"""I18n – translation port used for labels and display text."""
from discovery_search.i18n.translator import (
    DEFAULT_DOMAIN,
    DictTranslator,
    NullTranslator,
    TranslationKey,
    Translator,
)

__all__ = ["DEFAULT_DOMAIN", "DictTranslator", "NullTranslator", "TranslationKey", "Translator"]
