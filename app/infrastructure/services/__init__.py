"""
Dependency injection services.

Provides application-scoped provider functions for shared infrastructure.
"""

from infrastructure.services.providers import (
    get_settings,
    get_settings_record_store,
    get_translation_service,
)

__all__ = [
    "get_settings",
    "get_settings_record_store",
    "get_translation_service",
]
