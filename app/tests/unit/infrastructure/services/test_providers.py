"""
Unit tests for application-scoped providers.

Tests cover:
- get_settings() caching behavior
- get_translation_service() catalog loading
- get_settings_record_store() backend selection
"""

import pytest

from infrastructure.configuration import Settings
from infrastructure.i18n import Locale, TranslationService
from infrastructure.persistence import InMemorySettingsRecordStore
from infrastructure.services.providers import (
    get_settings,
    get_settings_record_store,
    get_translation_service,
)

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def clear_provider_caches():
    for provider in (get_settings, get_translation_service, get_settings_record_store):
        provider.cache_clear()
    yield
    for provider in (get_settings, get_translation_service, get_settings_record_store):
        provider.cache_clear()


class TestGetSettings:
    """Tests for get_settings() provider function."""

    def test_get_settings_returns_settings_instance(self):
        assert isinstance(get_settings(), Settings)

    def test_get_settings_returns_cached_instance(self):
        assert get_settings() is get_settings()

    def test_get_settings_cache_can_be_cleared(self):
        instance1 = get_settings()
        get_settings.cache_clear()
        assert get_settings() is not instance1


class TestGetTranslationService:
    """Tests for get_translation_service() provider function."""

    def test_loads_bundled_catalogs(self, monkeypatch):
        monkeypatch.delenv("TRANSLATIONS_DIR", raising=False)
        monkeypatch.setenv("DEFAULT_LOCALE", "en")

        service = get_translation_service()

        assert isinstance(service, TranslationService)
        assert set(service.get_available_locales()) == {Locale.EN, Locale.FA}
        assert service is get_translation_service()

    def test_uses_configured_default_locale(self, monkeypatch):
        monkeypatch.delenv("TRANSLATIONS_DIR", raising=False)
        monkeypatch.setenv("DEFAULT_LOCALE", "fa")

        service = get_translation_service()

        assert service.default_locale == Locale.FA
        assert service.resolve_locale(None) == Locale.FA


class TestGetSettingsRecordStore:
    """Tests for get_settings_record_store() provider function."""

    def test_memory_backend(self, monkeypatch):
        monkeypatch.setenv("USER_SETTINGS_STORE_BACKEND", "memory")
        monkeypatch.setenv("USER_SETTINGS_TABLE", "bot_user_settings")

        store = get_settings_record_store()

        assert isinstance(store, InMemorySettingsRecordStore)
        assert store.table_name == "bot_user_settings"
        assert store is get_settings_record_store()
