"""Translation service for resolving and interpolating message templates.

Resolution never raises: a key path that cannot be resolved to a leaf
template is returned unchanged, so callers can pass literal text through
the same code path as template keys.
"""

from typing import Any, Dict, Optional, Union

from infrastructure.logging import get_module_logger
from infrastructure.i18n.loader import TranslationLoader
from infrastructure.i18n.models import Locale, TranslationCatalog, TranslationKey

logger = get_module_logger()


class Translator:
    """Service for translating messages with parameter substitution.

    Attributes:
        loader: TranslationLoader for loading catalogs.
        catalogs: Loaded TranslationCatalogs by locale.
        default_locale: Locale used when the caller does not name one.
    """

    def __init__(
        self,
        loader: TranslationLoader,
        default_locale: Locale = Locale.EN,
    ):
        self.loader = loader
        self.default_locale = default_locale
        self.catalogs: Dict[Locale, TranslationCatalog] = {}
        logger.info("initialized_translator", default_locale=default_locale.value)

    def load_all(self) -> None:
        """Load all available locales from loader."""
        self.catalogs = self.loader.load_all()
        logger.info("loaded_all_translations", locale_count=len(self.catalogs))

    def load_locale(self, locale: Locale) -> None:
        """Load specific locale from loader.

        Raises:
            FileNotFoundError: If translation files not found.
        """
        self.catalogs[locale] = self.loader.load(locale)
        logger.info("loaded_locale_translations", locale=locale.value)

    def translate_message(
        self,
        key: Union[TranslationKey, str],
        locale: Optional[Union[Locale, str]] = None,
        variables: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Resolve a key path in ``locale`` and substitute ``{name}`` placeholders.

        Falls back to returning the key path itself, unchanged and without
        substitution, when the locale is not loaded, any segment is missing,
        or the path stops on a subtree. No fallback to another locale.

        Args:
            key: Dotted key path or TranslationKey identifying the template.
            locale: Locale to translate to (default: ``default_locale``).
            variables: Optional mapping of placeholder name to value.

        Returns:
            Rendered text, or the key path on a miss.
        """
        if not isinstance(key, TranslationKey):
            key = TranslationKey.from_string(key)
        locale = locale or self.default_locale

        catalog = self._catalog_for(locale)
        message = catalog.get_message(key) if catalog else None
        if message is None:
            # locale may be a raw stored code rather than a Locale
            logger.debug(
                "translation_miss",
                key=str(key),
                locale=str(getattr(locale, "value", locale)),
            )
            return str(key)

        if variables:
            message = self._interpolate(message, variables)

        return message

    def _catalog_for(self, locale: Union[Locale, str]) -> Optional[TranslationCatalog]:
        if not isinstance(locale, Locale):
            try:
                locale = Locale(locale)
            except ValueError:
                return None
        return self.catalogs.get(locale)

    def has_message(
        self, key: Union[TranslationKey, str], locale: Union[Locale, str]
    ) -> bool:
        """Check if a template exists for key in locale."""
        if not isinstance(key, TranslationKey):
            key = TranslationKey.from_string(key)
        catalog = self._catalog_for(locale)
        return catalog.has_message(key) if catalog else False

    def get_available_locales(self) -> list:
        """Get list of loaded locales."""
        return list(self.catalogs.keys())

    def get_catalog(self, locale: Locale) -> Optional[TranslationCatalog]:
        """Get complete catalog for a locale, or None if not loaded."""
        return self.catalogs.get(locale)

    def reload(self) -> None:
        """Reload all translations from loader."""
        self.catalogs.clear()
        self.loader.clear_cache()
        self.load_all()
        logger.info("reloaded_all_translations")

    @staticmethod
    def _interpolate(message: str, variables: Dict[str, Any]) -> str:
        # Literal replacement: names are never treated as patterns, and a
        # placeholder without a matching variable is left as-is.
        for name, value in variables.items():
            message = message.replace(f"{{{name}}}", str(value))
        return message
