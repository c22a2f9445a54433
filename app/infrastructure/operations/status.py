"""Operation status enumeration.

Status codes returned by settings record store calls, used by the
preferences module to decide between recovery and surfacing an error.
"""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for operation results.

    Attributes:
        SUCCESS: Operation completed successfully
        TRANSIENT_ERROR: Transport failure (connection, timeout, throttling)
        PERMANENT_ERROR: Rejected by the store (validation, constraint)
        NOT_FOUND: The backing relation/table does not exist
        CONFLICT: Uniqueness constraint violated on insert
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
