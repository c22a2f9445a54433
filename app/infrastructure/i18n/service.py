"""Translation service for dependency injection.

Provides a class-based interface to the i18n system for easier DI and testing.
"""

from typing import Any, Dict, Mapping, Optional, Union

from infrastructure.i18n.factory import create_translator
from infrastructure.i18n.models import Locale
from infrastructure.i18n.resolvers import LocaleResolver
from infrastructure.i18n.translator import Translator


class TranslationService:
    """Class-based translation service.

    Thin facade over a Translator and a LocaleResolver sharing one default
    locale.

    Usage:
        service = TranslationService()
        locale = service.resolve_locale(record.settings_json.get("language_code"))
        text = service.t("screens.settings.choose_option", locale=locale)
    """

    def __init__(
        self,
        translator: Optional[Translator] = None,
        locale_resolver: Optional[LocaleResolver] = None,
    ):
        """Initialize translation service.

        Args:
            translator: Optional pre-configured Translator instance.
                       If not provided, creates default via factory.
            locale_resolver: Optional LocaleResolver. Defaults to one using
                       the translator's default locale.
        """
        self._translator = translator or create_translator()
        self._locale_resolver = locale_resolver or LocaleResolver(
            default_locale=self._translator.default_locale
        )

    @property
    def default_locale(self) -> Locale:
        return self._translator.default_locale

    def t(
        self,
        key: str,
        params: Optional[Dict[str, Any]] = None,
        locale: Optional[Union[Locale, str]] = None,
    ) -> str:
        """Resolve ``key`` in ``locale`` and substitute ``params``.

        Returns ``key`` unchanged when no template is found.
        """
        return self._translator.translate_message(key, locale, params)

    def resolve_locale(self, raw_code: Optional[str]) -> Locale:
        """Map a stored language code to a supported locale."""
        return self._locale_resolver.resolve_from_code(raw_code)

    def resolve_locale_from_settings(
        self, settings_json: Optional[Mapping[str, Any]]
    ) -> Locale:
        """Resolve the locale held in a preference bag."""
        return self._locale_resolver.resolve_from_settings(settings_json)

    def has_message(self, key: str, locale: Locale) -> bool:
        return self._translator.has_message(key, locale)

    def get_available_locales(self) -> list[Locale]:
        return self._translator.get_available_locales()

    @property
    def locale_resolver(self) -> LocaleResolver:
        return self._locale_resolver

    @property
    def translator(self) -> Translator:
        """Access underlying Translator instance."""
        return self._translator
