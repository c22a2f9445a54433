"""Data models for the preferences module.

- SettingsRecord: one user's persisted preferences row (Pydantic, validated
  on the way out of the store).
- UserIdentity: who the interaction is attributed to.
- RenderContext: the per-interaction (user, settings, locale) bundle.
  Plain mutable dataclass; never persisted.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from infrastructure.i18n import Locale


class SettingsRecord(BaseModel):
    """Persisted preferences for one user.

    ``user_id`` is unique and immutable; ``onboarded`` only ever moves from
    False to True; ``settings_json`` is an open preference bag that stays
    None until the first merge-patch.
    """

    user_id: str = Field(..., description="Stable user identifier")
    onboarded: bool = Field(default=False, description="Onboarding completed")
    settings_json: Optional[Dict[str, Any]] = Field(
        default=None, description="Open preference bag (language_code, ...)"
    )
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserIdentity(BaseModel):
    """Identity derived from an interaction's originator."""

    user_id: str = Field(..., description="Canonical user identifier")
    display_name: Optional[str] = Field(default=None, description="Username, if known")


@dataclass
class RenderContext:
    """Resolved (user, settings, locale) bundle for one interaction.

    Attributes:
        user: Identity the interaction is attributed to.
        settings: The user's settings record as of the last load or patch.
        locale: Locale templates are rendered in.
    """

    user: UserIdentity
    settings: SettingsRecord
    locale: Locale
