"""Abstract settings record store.

Every operation is a coroutine returning an OperationResult so callers
distinguish "relation absent", "conflict", transport failures and
rejected writes by status instead of by message text.

Row shape (plain dict):
    user_id: str
    onboarded: bool
    settings_json: dict | None
    created_at: datetime
    updated_at: datetime
"""

from abc import ABC, abstractmethod
from typing import Any, Dict

from infrastructure.operations import OperationResult

Row = Dict[str, Any]


class SettingsRecordStore(ABC):
    """Abstract base for settings record stores.

    Implementations MUST remain stateless per request; any state they hold
    is the shared backing data, not interaction state.
    """

    table_name: str

    @abstractmethod
    async def select_by_user_id(self, user_id: str) -> OperationResult:
        """Read one row by user id.

        Returns:
            SUCCESS with ``data`` set to the row, or ``None`` when absent.
            NOT_FOUND when the backing relation itself does not exist.
        """
        raise NotImplementedError()

    @abstractmethod
    async def insert(self, row: Row) -> OperationResult:
        """Insert a new row.

        Returns:
            SUCCESS with the stored row. CONFLICT when a row for the same
            ``user_id`` already exists.
        """
        raise NotImplementedError()

    @abstractmethod
    async def update(self, user_id: str, changes: Row) -> OperationResult:
        """Apply ``changes`` to the row for ``user_id``.

        Returns:
            SUCCESS with the updated row, or ``None`` when no row matched.
        """
        raise NotImplementedError()
