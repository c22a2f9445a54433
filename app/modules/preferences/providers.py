"""Application-scoped providers for the preferences module."""

from functools import lru_cache
from typing import AsyncContextManager

from infrastructure.services import (
    get_settings,
    get_settings_record_store,
    get_translation_service,
)
from modules.preferences.context import InteractionContext, open_interaction
from modules.preferences.interactions import Interaction, MessageSink
from modules.preferences.service import UserSettingsService


@lru_cache
def get_user_settings_service() -> UserSettingsService:
    """
    Get application-scoped user settings service singleton.

    Returns:
        UserSettingsService: Service over the configured record store.
    """
    settings = get_settings()
    return UserSettingsService(
        store=get_settings_record_store(),
        locale_resolver=get_translation_service().locale_resolver,
        timeout_seconds=settings.preferences.STORE_TIMEOUT_SECONDS,
    )


def accept_interaction(
    interaction: Interaction, sink: MessageSink
) -> AsyncContextManager[InteractionContext]:
    """Open an interaction wired to the application-scoped services.

    Usage:
        async with accept_interaction(interaction, sink) as ctx:
            await render_screen(ctx, "screens.settings.title", ["screens.settings.choose_option"])
    """
    return open_interaction(
        interaction,
        sink,
        settings_service=get_user_settings_service(),
        translations=get_translation_service(),
    )
