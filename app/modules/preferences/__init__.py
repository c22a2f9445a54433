"""User preferences module.

Per-user settings records, locale resolution per interaction, and
rendering of localized screens.

Features:
- Idempotent get-or-create of the settings record on first contact
- Merge-patch writes to the open preference bag
- Interaction-scoped cache of the (user, settings, locale) bundle
- Screen rendering that edits callback messages in place
"""

from modules.preferences.context import (
    InteractionContext,
    RenderContextCache,
    open_interaction,
    resolve_identity,
)
from modules.preferences.errors import (
    MissingOriginator,
    PreferencesError,
    StoreUnavailable,
    UserSettingsError,
    WriteRejected,
)
from modules.preferences.interactions import (
    Controls,
    InlineButton,
    Interaction,
    MessageRef,
    MessageSink,
    Originator,
)
from modules.preferences.models import RenderContext, SettingsRecord, UserIdentity
from modules.preferences.render import render_screen
from modules.preferences.service import UserSettingsService, merge_settings_json

__all__ = [
    "InteractionContext",
    "RenderContextCache",
    "open_interaction",
    "resolve_identity",
    "MissingOriginator",
    "PreferencesError",
    "StoreUnavailable",
    "UserSettingsError",
    "WriteRejected",
    "Controls",
    "InlineButton",
    "Interaction",
    "MessageRef",
    "MessageSink",
    "Originator",
    "RenderContext",
    "SettingsRecord",
    "UserIdentity",
    "render_screen",
    "UserSettingsService",
    "merge_settings_json",
]
