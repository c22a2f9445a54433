"""Internationalization feature settings."""

from typing import Optional

from pydantic import Field

from infrastructure.configuration.base import FeatureSettings


class I18nSettings(FeatureSettings):
    """Configuration for message catalogs and locale resolution.

    Environment Variables:
        DEFAULT_LOCALE: Locale used when a user has no supported language code
        TRANSLATIONS_DIR: Directory holding <namespace>.<locale>.yml catalogs
            (default: the bundled app/locales directory)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        default_locale = settings.i18n.DEFAULT_LOCALE
        ```
    """

    DEFAULT_LOCALE: str = Field(default="en", alias="DEFAULT_LOCALE")
    TRANSLATIONS_DIR: Optional[str] = Field(default=None, alias="TRANSLATIONS_DIR")
