"""In-memory settings record store for local runs and tests."""

import copy
from typing import Dict

import structlog
from infrastructure.operations import OperationResult
from infrastructure.persistence.store import Row, SettingsRecordStore

logger = structlog.get_logger()


class InMemorySettingsRecordStore(SettingsRecordStore):
    """Dict-backed store enforcing uniqueness on ``user_id``.

    Rows are copied on the way in and out so callers never share mutable
    state with the store.

    Attributes:
        table_name: Logical table name, for logs.
        relation_exists: When False every call reports the relation as absent.
    """

    def __init__(self, table_name: str = "user_settings", relation_exists: bool = True):
        self.table_name = table_name
        self.relation_exists = relation_exists
        self._rows: Dict[str, Row] = {}

    async def select_by_user_id(self, user_id: str) -> OperationResult:
        if not self.relation_exists:
            return OperationResult.relation_absent(
                f'relation "{self.table_name}" does not exist'
            )
        row = self._rows.get(user_id)
        return OperationResult.success(data=copy.deepcopy(row))

    async def insert(self, row: Row) -> OperationResult:
        if not self.relation_exists:
            return OperationResult.relation_absent(
                f'relation "{self.table_name}" does not exist'
            )
        user_id = row["user_id"]
        if user_id in self._rows:
            return OperationResult.conflict(
                f"duplicate key value violates unique constraint on user_id={user_id}"
            )
        self._rows[user_id] = copy.deepcopy(row)
        logger.debug("memory_store_row_inserted", table=self.table_name, user_id=user_id)
        return OperationResult.success(data=copy.deepcopy(row))

    async def update(self, user_id: str, changes: Row) -> OperationResult:
        if not self.relation_exists:
            return OperationResult.relation_absent(
                f'relation "{self.table_name}" does not exist'
            )
        row = self._rows.get(user_id)
        if row is None:
            return OperationResult.success(data=None, message="no row matched")
        row.update(copy.deepcopy(changes))
        return OperationResult.success(data=copy.deepcopy(row))

    def clear(self) -> None:
        """Drop all rows (for testing)."""
        self._rows.clear()

    def __len__(self) -> int:
        return len(self._rows)
