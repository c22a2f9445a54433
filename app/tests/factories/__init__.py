"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    make_messages,
    make_translation_catalog,
    make_translation_key,
    make_translator,
)
from tests.factories.preferences import (
    RecordingMessageSink,
    make_interaction,
    make_settings_row,
)

__all__ = [
    "make_messages",
    "make_translation_catalog",
    "make_translation_key",
    "make_translator",
    "RecordingMessageSink",
    "make_interaction",
    "make_settings_row",
]
