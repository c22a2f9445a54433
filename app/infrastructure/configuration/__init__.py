"""Infrastructure configuration module - public API.

Centralized configuration management using Pydantic BaseSettings with
domain-based organization.

Exports:
    Settings: Main settings class (for testing/overrides)
    I18nSettings: Message catalog settings
    PreferencesSettings: Settings record store settings

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()
    timeout = settings.preferences.STORE_TIMEOUT_SECONDS
    ```
"""

from infrastructure.configuration.settings import Settings
from infrastructure.configuration.features import I18nSettings, PreferencesSettings

__all__ = ["Settings", "I18nSettings", "PreferencesSettings"]
