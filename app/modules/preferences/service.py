"""User settings service: get-or-create, merge-patch and onboarding.

Concurrency notes:
    get_or_create relies on the store rejecting a second insert for the same
    user_id (CONFLICT); the loser re-reads and returns the winner's row.
    merge_patch is read-then-write without a version check, so two
    concurrent patches for one user are last-write-wins on the whole
    settings_json mapping.
"""

import asyncio
import json
from datetime import datetime, timezone
from typing import Any, Awaitable, Dict, Mapping, Optional

from infrastructure.i18n import Locale, LocaleResolver
from infrastructure.logging import get_module_logger
from infrastructure.operations import OperationResult, OperationStatus
from infrastructure.persistence import SettingsRecordStore
from modules.preferences.errors import StoreUnavailable, WriteRejected
from modules.preferences.models import SettingsRecord

logger = get_module_logger()

DEFAULT_STORE_TIMEOUT_SECONDS = 10.0


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def merge_settings_json(
    existing: Optional[Mapping[str, Any]], patch: Mapping[str, Any]
) -> Dict[str, Any]:
    """Shallow merge; ``patch`` keys win and an absent bag counts as empty."""
    return {**(existing or {}), **patch}


class UserSettingsService:
    """Class-based service over a SettingsRecordStore.

    Usage:
        service = UserSettingsService(store=InMemorySettingsRecordStore())
        record = await service.get_or_create("42")
        record = await service.merge_patch("42", {"emoji_enabled": False})
        locale = service.get_language(record)
    """

    def __init__(
        self,
        store: SettingsRecordStore,
        locale_resolver: Optional[LocaleResolver] = None,
        timeout_seconds: float = DEFAULT_STORE_TIMEOUT_SECONDS,
    ):
        """Initialize user settings service.

        Args:
            store: Backing settings record store.
            locale_resolver: Resolver for the stored language code.
            timeout_seconds: Upper bound for any single store call.
        """
        self._store = store
        self._locale_resolver = locale_resolver or LocaleResolver()
        self._timeout_seconds = timeout_seconds

    async def _call(
        self, operation: str, user_id: str, call: Awaitable[OperationResult]
    ) -> OperationResult:
        try:
            return await asyncio.wait_for(call, timeout=self._timeout_seconds)
        except asyncio.TimeoutError as e:
            logger.error(
                "user_settings_store_timeout",
                operation=operation,
                user_id=user_id,
                timeout_seconds=self._timeout_seconds,
            )
            raise StoreUnavailable(
                f"Settings store did not answer {operation} within {self._timeout_seconds}s",
                user_id=user_id,
                cause=e,
            ) from e

    def _write_error(
        self, action: str, user_id: str, result: OperationResult
    ) -> Exception:
        message = f"Failed to {action} user settings: {result.message}"
        if result.status == OperationStatus.TRANSIENT_ERROR:
            return StoreUnavailable(message, user_id=user_id, cause=result)
        return WriteRejected(message, user_id=user_id, cause=result)

    async def _select(self, user_id: str) -> Optional[SettingsRecord]:
        result = await self._call(
            "select", user_id, self._store.select_by_user_id(user_id)
        )
        if result.is_relation_absent:
            logger.warning(
                "user_settings_relation_absent",
                user_id=user_id,
                table=self._store.table_name,
            )
            return None
        if not result.is_success:
            logger.error(
                "user_settings_fetch_error",
                user_id=user_id,
                status=result.status.value,
                error_code=result.error_code,
                error=result.message,
            )
            raise StoreUnavailable(
                f"Failed to load user settings: {result.message}",
                user_id=user_id,
                cause=result,
            )
        if result.data is None:
            return None
        return SettingsRecord.model_validate(result.data)

    async def get_or_create(self, user_id: str) -> SettingsRecord:
        """Return the user's settings record, inserting a fresh one if absent.

        Raises:
            StoreUnavailable: The read failed, or a write hit a transport failure.
            WriteRejected: The store refused the insert.
        """
        existing = await self._select(user_id)
        if existing is not None:
            return existing

        now = _utcnow()
        row = {
            "user_id": user_id,
            "onboarded": False,
            "settings_json": None,
            "created_at": now,
            "updated_at": now,
        }
        result = await self._call("insert", user_id, self._store.insert(row))

        if result.is_success:
            logger.info("user_settings_created", user_id=user_id)
            return SettingsRecord.model_validate(result.data)

        if result.is_conflict:
            # Another interaction created the row between our read and insert
            logger.info("user_settings_insert_conflict", user_id=user_id)
            winner = await self._select(user_id)
            if winner is not None:
                return winner

        logger.error(
            "user_settings_insert_error",
            user_id=user_id,
            status=result.status.value,
            error_code=result.error_code,
            error=result.message,
        )
        raise self._write_error("create", user_id, result)

    async def merge_patch(
        self, user_id: str, patch: Mapping[str, Any]
    ) -> SettingsRecord:
        """Shallow-merge ``patch`` into the user's ``settings_json``.

        Raises:
            StoreUnavailable: Transport failure or timeout.
            WriteRejected: The update was refused or matched no row.
        """
        current = await self.get_or_create(user_id)
        merged = merge_settings_json(current.settings_json, patch)
        try:
            # settings_json is stored as a JSON document by every backend
            json.dumps(merged)
        except (TypeError, ValueError) as e:
            logger.error(
                "user_settings_patch_not_serializable",
                user_id=user_id,
                patch_keys=sorted(patch),
                error=str(e),
            )
            raise WriteRejected(
                f"Failed to update user settings: {e}", user_id=user_id, cause=e
            ) from e

        result = await self._call(
            "update",
            user_id,
            self._store.update(
                user_id, {"settings_json": merged, "updated_at": _utcnow()}
            ),
        )
        if not result.is_success:
            logger.error(
                "user_settings_update_json_error",
                user_id=user_id,
                patch_keys=sorted(patch),
                status=result.status.value,
                error=result.message,
            )
            raise self._write_error("update", user_id, result)

        if result.data is None:
            logger.error("user_settings_update_missing_row", user_id=user_id)
            raise WriteRejected(
                "Failed to update user settings: no row returned",
                user_id=user_id,
                cause=result,
            )

        logger.info("user_settings_patched", user_id=user_id, patch_keys=sorted(patch))
        return SettingsRecord.model_validate(result.data)

    async def set_onboarded(self, user_id: str) -> None:
        """Mark the user as onboarded. Calling it again is harmless.

        Raises:
            StoreUnavailable: Transport failure or timeout.
            WriteRejected: The update was refused.
        """
        result = await self._call(
            "update",
            user_id,
            self._store.update(user_id, {"onboarded": True, "updated_at": _utcnow()}),
        )
        if not result.is_success:
            logger.error(
                "user_settings_set_onboarded_error",
                user_id=user_id,
                status=result.status.value,
                error=result.message,
            )
            raise self._write_error("update onboarding state for", user_id, result)

        if result.data is None:
            logger.warning("user_settings_set_onboarded_no_row", user_id=user_id)

    def get_language(self, record: SettingsRecord) -> Locale:
        """Locale stored in the record's ``language_code``, or the default."""
        return self._locale_resolver.resolve_from_settings(record.settings_json)

    async def set_language_code(self, user_id: str, locale: Locale) -> SettingsRecord:
        """Persist ``locale`` as the user's ``language_code``."""
        return await self.merge_patch(user_id, {"language_code": locale.value})
