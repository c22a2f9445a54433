"""Operation result types and status enums.

Standardized result types returned by the settings record store, so
callers check a structured error kind instead of matching message text.
"""

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
]
