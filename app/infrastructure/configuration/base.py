"""Shared base classes for settings sections."""

from pydantic_settings import BaseSettings, SettingsConfigDict

# Every section reads the same .env; field aliases are the env var names,
# and populate_by_name lets code and tests pass overrides by field name.
SECTION_CONFIG = SettingsConfigDict(
    env_file=".env",
    case_sensitive=True,
    extra="ignore",
    populate_by_name=True,
)


class IntegrationSettings(BaseSettings):
    """Settings for a record store backend (AWS)."""

    model_config = SECTION_CONFIG


class FeatureSettings(BaseSettings):
    """Settings for a feature (i18n catalogs, user preferences)."""

    model_config = SECTION_CONFIG
