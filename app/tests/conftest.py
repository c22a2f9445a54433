"""Shared fixtures for the test suite."""

import pytest

from infrastructure.i18n import Locale, LocaleResolver, TranslationService
from infrastructure.persistence import InMemorySettingsRecordStore
from modules.preferences import UserSettingsService
from tests.factories.i18n import make_translator
from tests.factories.preferences import RecordingMessageSink


@pytest.fixture
def translator():
    """Translator preloaded with the en/fa test catalogs."""
    return make_translator()


@pytest.fixture
def translation_service(translator):
    """TranslationService over the test catalogs."""
    return TranslationService(
        translator=translator, locale_resolver=LocaleResolver(default_locale=Locale.EN)
    )


@pytest.fixture
def memory_store():
    """Empty in-memory settings record store."""
    return InMemorySettingsRecordStore(table_name="user_settings")


@pytest.fixture
def settings_service(memory_store):
    """UserSettingsService over the in-memory store."""
    return UserSettingsService(store=memory_store, timeout_seconds=1.0)


@pytest.fixture
def message_sink():
    """MessageSink recording replies and edits."""
    return RecordingMessageSink()
