"""Errors for the preferences module.

Template misses are not errors: resolution degrades to returning the key.
"""

from typing import Any, Optional


class PreferencesError(Exception):
    """Base exception for the preferences module."""

    pass


class UserSettingsError(PreferencesError):
    """Raised when a settings record operation cannot complete.

    Attributes:
        message: human-friendly description
        user_id: the user the operation was for
        cause: the underlying OperationResult or exception, for diagnostics
    """

    def __init__(
        self, message: str, user_id: Optional[str] = None, cause: Any = None
    ):
        super().__init__(message)
        self.user_id = user_id
        self.cause = cause


class StoreUnavailable(UserSettingsError):
    """The record store could not be reached or did not answer in time."""

    pass


class WriteRejected(UserSettingsError):
    """The record store refused an insert or update."""

    pass


class MissingOriginator(PreferencesError):
    """The interaction carries no originator, so no user can be attributed."""

    pass
