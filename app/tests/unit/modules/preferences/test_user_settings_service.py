"""Unit tests for modules.preferences.service."""

import asyncio
from datetime import time
from unittest.mock import AsyncMock, MagicMock

import pytest

from infrastructure.i18n import Locale
from infrastructure.operations import OperationResult, OperationStatus
from infrastructure.persistence import SettingsRecordStore
from infrastructure.persistence.dynamodb import DynamoDBSettingsRecordStore
from modules.preferences import (
    StoreUnavailable,
    UserSettingsService,
    WriteRejected,
    merge_settings_json,
)
from tests.factories.preferences import make_settings_row

pytestmark = pytest.mark.unit


@pytest.fixture
def mock_store():
    store = AsyncMock(spec=SettingsRecordStore)
    store.table_name = "user_settings"
    return store


@pytest.fixture
def mock_service(mock_store):
    return UserSettingsService(store=mock_store, timeout_seconds=1.0)


class TestMergeSettingsJson:
    def test_absent_bag_counts_as_empty(self):
        assert merge_settings_json(None, {"a": 1}) == {"a": 1}

    def test_patch_keys_win(self):
        assert merge_settings_json({"a": 1, "b": 1}, {"b": 2}) == {"a": 1, "b": 2}

    def test_merge_is_shallow(self):
        merged = merge_settings_json({"nested": {"x": 1}}, {"nested": {"y": 2}})
        assert merged == {"nested": {"y": 2}}

    def test_inputs_not_mutated(self):
        existing = {"a": 1}
        merge_settings_json(existing, {"b": 2})
        assert existing == {"a": 1}


class TestGetOrCreate:
    async def test_creates_record_on_first_contact(self, settings_service, memory_store):
        record = await settings_service.get_or_create("42")

        assert record.user_id == "42"
        assert record.onboarded is False
        assert record.settings_json is None
        assert record.created_at is not None
        assert record.updated_at is not None
        assert len(memory_store) == 1

    async def test_repeated_calls_keep_one_record(self, settings_service, memory_store):
        first = await settings_service.get_or_create("42")
        second = await settings_service.get_or_create("42")

        assert first == second
        assert len(memory_store) == 1

    async def test_returns_existing_row(self, settings_service, memory_store):
        await memory_store.insert(
            make_settings_row(user_id="42", onboarded=True, settings_json={"language_code": "fa"})
        )

        record = await settings_service.get_or_create("42")

        assert record.onboarded is True
        assert record.settings_json == {"language_code": "fa"}

    async def test_relation_absent_read_goes_to_create(self, mock_service, mock_store):
        mock_store.select_by_user_id.return_value = OperationResult.relation_absent()
        mock_store.insert.side_effect = lambda row: OperationResult.success(data=dict(row))

        record = await mock_service.get_or_create("42")

        assert record.user_id == "42"
        assert record.onboarded is False
        mock_store.insert.assert_awaited_once()

    @pytest.mark.parametrize(
        "failure",
        [
            OperationResult.transient_error("connection refused", error_code="CONNECTION_ERROR"),
            OperationResult.permanent_error("permission denied for table user_settings"),
        ],
    )
    async def test_other_read_errors_are_fatal(self, mock_service, mock_store, failure):
        mock_store.select_by_user_id.return_value = failure

        with pytest.raises(StoreUnavailable) as exc_info:
            await mock_service.get_or_create("42")

        assert exc_info.value.user_id == "42"
        assert exc_info.value.cause is failure
        assert failure.message in str(exc_info.value)
        mock_store.insert.assert_not_awaited()

    async def test_insert_conflict_returns_existing_row(self, mock_service, mock_store):
        winner = make_settings_row(user_id="42", settings_json={"language_code": "fa"})
        mock_store.select_by_user_id.side_effect = [
            OperationResult.success(data=None),
            OperationResult.success(data=winner),
        ]
        mock_store.insert.return_value = OperationResult.conflict("duplicate key")

        record = await mock_service.get_or_create("42")

        assert record.settings_json == {"language_code": "fa"}
        assert mock_store.select_by_user_id.await_count == 2

    async def test_concurrent_first_contact_creates_one_row(
        self, settings_service, memory_store
    ):
        records = await asyncio.gather(
            *(settings_service.get_or_create("42") for _ in range(5))
        )

        assert len(memory_store) == 1
        assert all(record.user_id == "42" for record in records)

    async def test_rejected_insert_raises_write_rejected(self, mock_service, mock_store):
        mock_store.select_by_user_id.return_value = OperationResult.success(data=None)
        failure = OperationResult.permanent_error("null value in column user_id")
        mock_store.insert.return_value = failure

        with pytest.raises(WriteRejected) as exc_info:
            await mock_service.get_or_create("42")

        assert "null value in column user_id" in str(exc_info.value)
        assert exc_info.value.cause is failure

    async def test_transient_insert_failure_raises_store_unavailable(
        self, mock_service, mock_store
    ):
        mock_store.select_by_user_id.return_value = OperationResult.success(data=None)
        mock_store.insert.return_value = OperationResult.transient_error("reset by peer")

        with pytest.raises(StoreUnavailable):
            await mock_service.get_or_create("42")

    async def test_slow_store_times_out(self, mock_store):
        async def slow_select(user_id):
            await asyncio.sleep(1)
            return OperationResult.success(data=None)

        mock_store.select_by_user_id.side_effect = slow_select
        service = UserSettingsService(store=mock_store, timeout_seconds=0.01)

        with pytest.raises(StoreUnavailable) as exc_info:
            await service.get_or_create("42")

        assert isinstance(exc_info.value.cause, asyncio.TimeoutError)


class TestMergePatch:
    async def test_successive_patches_accumulate(self, settings_service):
        await settings_service.merge_patch("42", {"a": 1})
        record = await settings_service.merge_patch("42", {"b": 2})

        assert record.settings_json == {"a": 1, "b": 2}

    async def test_patch_creates_missing_record(self, settings_service, memory_store):
        record = await settings_service.merge_patch("42", {"language_code": "fa"})

        assert record.settings_json == {"language_code": "fa"}
        assert len(memory_store) == 1

    async def test_patch_keys_overwrite(self, settings_service):
        await settings_service.merge_patch("42", {"emoji_enabled": True})
        record = await settings_service.merge_patch("42", {"emoji_enabled": False})

        assert record.settings_json == {"emoji_enabled": False}

    async def test_patch_refreshes_updated_at(self, settings_service):
        created = await settings_service.get_or_create("42")
        patched = await settings_service.merge_patch("42", {"a": 1})

        assert patched.updated_at >= created.updated_at
        assert patched.created_at == created.created_at

    async def test_patch_is_persisted(self, settings_service):
        await settings_service.merge_patch("42", {"a": 1})

        record = await settings_service.get_or_create("42")

        assert record.settings_json == {"a": 1}

    async def test_write_failure_raises_write_rejected(self, mock_service, mock_store):
        mock_store.select_by_user_id.return_value = OperationResult.success(
            data=make_settings_row()
        )
        mock_store.update.return_value = OperationResult.permanent_error(
            "value too long"
        )

        with pytest.raises(WriteRejected, match="value too long"):
            await mock_service.merge_patch("42", {"a": 1})

    async def test_update_matching_no_row_raises_write_rejected(
        self, mock_service, mock_store
    ):
        mock_store.select_by_user_id.return_value = OperationResult.success(
            data=make_settings_row()
        )
        mock_store.update.return_value = OperationResult.success(data=None)

        with pytest.raises(WriteRejected):
            await mock_service.merge_patch("42", {"a": 1})

    async def test_transport_failure_raises_store_unavailable(
        self, mock_service, mock_store
    ):
        mock_store.select_by_user_id.return_value = OperationResult.success(
            data=make_settings_row()
        )
        mock_store.update.return_value = OperationResult.transient_error("timeout")

        with pytest.raises(StoreUnavailable):
            await mock_service.merge_patch("42", {"a": 1})

    async def test_unserializable_value_raises_write_rejected(
        self, settings_service, memory_store
    ):
        await settings_service.merge_patch("42", {"language_code": "fa"})

        with pytest.raises(WriteRejected) as exc_info:
            await settings_service.merge_patch("42", {"reminder_at": time(9, 0)})

        assert isinstance(exc_info.value.__cause__, TypeError)
        stored = (await memory_store.select_by_user_id("42")).data
        assert stored["settings_json"] == {"language_code": "fa"}

    async def test_unserializable_value_rejected_before_dynamodb_write(self):
        client = MagicMock()
        client.get_item.return_value = {
            "Item": {
                "user_id": {"S": "42"},
                "onboarded": {"BOOL": True},
                "settings_json": {"NULL": True},
                "created_at": {"S": "2024-01-01T00:00:00+00:00"},
                "updated_at": {"S": "2024-01-01T00:00:00+00:00"},
            }
        }
        service = UserSettingsService(
            store=DynamoDBSettingsRecordStore(table_name="user_settings", client=client),
            timeout_seconds=1.0,
        )

        with pytest.raises(WriteRejected):
            await service.merge_patch("42", {"reminder_at": time(9, 0)})

        client.update_item.assert_not_called()


class TestSetOnboarded:
    async def test_sets_flag(self, settings_service):
        await settings_service.get_or_create("42")

        await settings_service.set_onboarded("42")

        assert (await settings_service.get_or_create("42")).onboarded is True

    async def test_is_idempotent(self, settings_service):
        await settings_service.get_or_create("42")

        await settings_service.set_onboarded("42")
        await settings_service.set_onboarded("42")

        record = await settings_service.get_or_create("42")
        assert record.onboarded is True
        assert record.settings_json is None

    async def test_missing_row_is_not_an_error(self, settings_service, memory_store):
        await settings_service.set_onboarded("42")

        assert len(memory_store) == 0

    async def test_rejected_update_raises(self, mock_service, mock_store):
        mock_store.update.return_value = OperationResult.error(
            OperationStatus.PERMANENT_ERROR, "read-only transaction"
        )

        with pytest.raises(WriteRejected):
            await mock_service.set_onboarded("42")


class TestLanguage:
    async def test_default_language(self, settings_service):
        record = await settings_service.get_or_create("42")

        assert settings_service.get_language(record) == Locale.EN

    async def test_set_language_code(self, settings_service):
        record = await settings_service.set_language_code("42", Locale.FA)

        assert record.settings_json == {"language_code": "fa"}
        assert settings_service.get_language(record) == Locale.FA

    async def test_unsupported_stored_code_falls_back(self, settings_service):
        record = await settings_service.merge_patch("42", {"language_code": "xx-unsupported"})

        assert settings_service.get_language(record) == Locale.EN
