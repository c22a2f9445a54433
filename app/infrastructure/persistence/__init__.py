"""Persistence layer for per-user settings records.

Exports the abstract async store, the in-memory and DynamoDB
implementations and the backend factory.
"""

from infrastructure.persistence.factory import create_settings_record_store
from infrastructure.persistence.memory import InMemorySettingsRecordStore
from infrastructure.persistence.store import Row, SettingsRecordStore

__all__ = [
    "Row",
    "SettingsRecordStore",
    "InMemorySettingsRecordStore",
    "create_settings_record_store",
]
