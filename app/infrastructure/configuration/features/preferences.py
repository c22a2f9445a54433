"""User preferences feature settings."""

from typing import Literal

from pydantic import Field

from infrastructure.configuration.base import FeatureSettings


class PreferencesSettings(FeatureSettings):
    """Configuration for the per-user settings record store.

    Environment Variables:
        USER_SETTINGS_TABLE: Name of the settings record table
        USER_SETTINGS_STORE_BACKEND: Store backend (memory, dynamodb)
        USER_SETTINGS_STORE_TIMEOUT_SECONDS: Upper bound for a single store call

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        if settings.preferences.STORE_BACKEND == "dynamodb":
            table = settings.preferences.USER_SETTINGS_TABLE
        ```
    """

    USER_SETTINGS_TABLE: str = Field(
        default="user_settings", alias="USER_SETTINGS_TABLE"
    )
    STORE_BACKEND: Literal["memory", "dynamodb"] = Field(
        default="memory", alias="USER_SETTINGS_STORE_BACKEND"
    )
    STORE_TIMEOUT_SECONDS: float = Field(
        default=10.0, gt=0, alias="USER_SETTINGS_STORE_TIMEOUT_SECONDS"
    )
