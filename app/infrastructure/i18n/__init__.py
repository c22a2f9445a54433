"""i18n system - message catalogs, template resolution and locale resolution.

Main components:
- models: Locale, TranslationKey, TranslationCatalog
- loader: TranslationLoader, YAMLTranslationLoader, DictTranslationLoader
- translator: Translator with soft-miss resolution and {name} substitution
- resolvers: LocaleResolver mapping stored codes to a supported Locale
- service: TranslationService facade
"""

from infrastructure.i18n.loader import (
    DictTranslationLoader,
    TranslationLoader,
    YAMLTranslationLoader,
)
from infrastructure.i18n.models import Locale, TranslationCatalog, TranslationKey
from infrastructure.i18n.resolvers import LocaleResolver, resolve_locale
from infrastructure.i18n.service import TranslationService
from infrastructure.i18n.translator import Translator

__all__ = [
    "Locale",
    "TranslationKey",
    "TranslationCatalog",
    "TranslationLoader",
    "YAMLTranslationLoader",
    "DictTranslationLoader",
    "Translator",
    "LocaleResolver",
    "resolve_locale",
    "TranslationService",
]
