"""Operation result dataclass.

Uniform result type returned by every settings record store call,
carrying either a row payload or a structured error kind.
"""

from typing import Optional, Any
from dataclasses import dataclass

from infrastructure.operations.status import OperationStatus


@dataclass
class OperationResult:
    """Uniform result returned from store operations.

    Attributes:
        status: OperationStatus -- high-level outcome
        message: str -- human-friendly message for logs/troubleshooting
        data: Optional[Any] -- row payload, or None when the row is absent
        error_code: Optional[str] -- optional machine error code from the backend
    """

    status: OperationStatus
    message: str
    data: Optional[Any] = None
    error_code: Optional[str] = None

    @property
    def is_success(self) -> bool:
        """True if status is SUCCESS."""
        return self.status == OperationStatus.SUCCESS

    @property
    def is_relation_absent(self) -> bool:
        """True when the backing table itself is missing."""
        return self.status == OperationStatus.NOT_FOUND

    @property
    def is_conflict(self) -> bool:
        return self.status == OperationStatus.CONFLICT

    @classmethod
    def success(
        cls, data: Optional[Any] = None, message: str = "ok"
    ) -> "OperationResult":
        """Create a SUCCESS OperationResult with optional data.

        Args:
            data: Optional payload to include with the result
            message: Human-friendly success message

        Returns:
            OperationResult with SUCCESS status
        """
        return cls(status=OperationStatus.SUCCESS, message=message, data=data)

    @classmethod
    def error(
        cls,
        status: OperationStatus,
        message: str,
        error_code: Optional[str] = None,
    ) -> "OperationResult":
        """Create an error OperationResult.

        Args:
            status: OperationStatus indicating error type
            message: Human-friendly error message
            error_code: Optional machine error code

        Returns:
            OperationResult with specified error status
        """
        return cls(status=status, message=message, error_code=error_code)

    @classmethod
    def transient_error(
        cls, message: str, error_code: Optional[str] = None
    ) -> "OperationResult":
        """Create a transient error result (connection lost, timeout, throttled)."""
        return cls.error(OperationStatus.TRANSIENT_ERROR, message, error_code)

    @classmethod
    def permanent_error(
        cls, message: str, error_code: Optional[str] = None
    ) -> "OperationResult":
        """Create a permanent error result (constraint or validation failure)."""
        return cls.error(OperationStatus.PERMANENT_ERROR, message, error_code)

    @classmethod
    def relation_absent(cls, message: str = "relation does not exist") -> "OperationResult":
        """Create a NOT_FOUND result signalling the backing table is missing."""
        return cls.error(OperationStatus.NOT_FOUND, message, "RELATION_ABSENT")

    @classmethod
    def conflict(
        cls, message: str, error_code: Optional[str] = "UNIQUE_VIOLATION"
    ) -> "OperationResult":
        """Create a CONFLICT result for a uniqueness violation on insert."""
        return cls.error(OperationStatus.CONFLICT, message, error_code)
