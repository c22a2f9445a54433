"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for core infrastructure services.
"""

from functools import lru_cache
from pathlib import Path

from infrastructure.configuration import Settings
from infrastructure.i18n import Locale, LocaleResolver, TranslationService
from infrastructure.i18n.factory import create_translator
from infrastructure.persistence import SettingsRecordStore, create_settings_record_store


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    The @lru_cache decorator ensures only ONE instance is created per process.

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_translation_service() -> TranslationService:
    """
    Get application-scoped translation service singleton.

    Catalogs are loaded once from ``TRANSLATIONS_DIR`` (default: bundled
    app/locales) and shared read-only by every interaction.

    Returns:
        TranslationService: Cached service with preloaded catalogs.
    """
    settings = get_settings()
    default_locale = Locale.from_string(settings.i18n.DEFAULT_LOCALE)
    translations_dir = (
        Path(settings.i18n.TRANSLATIONS_DIR) if settings.i18n.TRANSLATIONS_DIR else None
    )
    translator = create_translator(
        translations_dir=translations_dir, default_locale=default_locale
    )
    return TranslationService(
        translator=translator,
        locale_resolver=LocaleResolver(default_locale=default_locale),
    )


@lru_cache
def get_settings_record_store() -> SettingsRecordStore:
    """
    Get application-scoped settings record store singleton.

    Returns:
        SettingsRecordStore: Backend selected by USER_SETTINGS_STORE_BACKEND.
    """
    return create_settings_record_store(get_settings())
