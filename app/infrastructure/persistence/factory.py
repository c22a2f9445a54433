"""Settings record store factory."""

from typing import TYPE_CHECKING

from infrastructure.logging import get_module_logger
from infrastructure.persistence.store import SettingsRecordStore

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

logger = get_module_logger()


def create_settings_record_store(settings: "Settings") -> SettingsRecordStore:
    """Build the store selected by ``USER_SETTINGS_STORE_BACKEND``.

    Args:
        settings: Application settings.

    Returns:
        InMemorySettingsRecordStore for "memory", DynamoDBSettingsRecordStore
        for "dynamodb".
    """
    backend = settings.preferences.STORE_BACKEND
    table_name = settings.preferences.USER_SETTINGS_TABLE

    if backend == "dynamodb":
        # Import here so the memory backend never needs AWS credentials
        from infrastructure.persistence.dynamodb import DynamoDBSettingsRecordStore

        store: SettingsRecordStore = DynamoDBSettingsRecordStore(
            table_name=table_name,
            region_name=settings.aws.AWS_REGION,
            endpoint_url=settings.aws.DYNAMODB_ENDPOINT_URL,
        )
    else:
        from infrastructure.persistence.memory import InMemorySettingsRecordStore

        store = InMemorySettingsRecordStore(table_name=table_name)

    logger.info("initialized_settings_record_store", backend=backend, table=table_name)
    return store
