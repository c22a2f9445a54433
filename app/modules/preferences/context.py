"""Interaction-scoped render context.

One InteractionContext (and so one RenderContextCache) is created per
inbound interaction and dropped when it has been handled. Nothing here is
process-wide.
"""

import asyncio
import dataclasses
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, Mapping, Optional

from infrastructure.i18n import Locale, TranslationService
from infrastructure.logging import bind_request_context, get_module_logger
from modules.preferences.errors import MissingOriginator
from modules.preferences.interactions import Interaction, MessageSink
from modules.preferences.models import RenderContext, SettingsRecord, UserIdentity
from modules.preferences.service import UserSettingsService

logger = get_module_logger()

RenderContextLoader = Callable[[], Awaitable[RenderContext]]

_BUNDLE_FIELDS = frozenset(f.name for f in dataclasses.fields(RenderContext))


class RenderContextCache:
    """Memoizes the RenderContext for exactly one interaction.

    ``ensure`` runs its loader at most once per cache, also when several
    coroutines of the same interaction ask for the context concurrently.
    A failed load is not cached, so a later ``ensure`` tries again.
    """

    def __init__(self):
        self._bundle: Optional[RenderContext] = None
        self._lock = asyncio.Lock()

    def get(self) -> Optional[RenderContext]:
        """Return the cached bundle, or None before the first load."""
        return self._bundle

    async def ensure(self, loader: RenderContextLoader) -> RenderContext:
        """Return the cached bundle, loading it with ``loader`` on first use."""
        if self._bundle is not None:
            return self._bundle

        async with self._lock:
            if self._bundle is None:
                self._bundle = await loader()
        return self._bundle

    def patch(self, **fields: Any) -> None:
        """Replace the named fields of the cached bundle, keeping the rest.

        No-op when nothing is cached yet.

        Raises:
            ValueError: A field name is not part of RenderContext.
        """
        if self._bundle is None:
            return

        unknown = set(fields) - _BUNDLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown render context fields: {sorted(unknown)}")

        for name, value in fields.items():
            setattr(self._bundle, name, value)


def resolve_identity(interaction: Interaction) -> UserIdentity:
    """Derive the user identity from the interaction's originator.

    Raises:
        MissingOriginator: The interaction has no originator.
    """
    originator = interaction.originator
    if originator is None or originator.id in (None, ""):
        raise MissingOriginator(
            f"Interaction {interaction.correlation_id} has no originator"
        )
    return UserIdentity(user_id=str(originator.id), display_name=originator.username)


class InteractionContext:
    """Everything one interaction needs to read settings and render text.

    Attributes:
        interaction: The inbound event being handled.
        sink: Where rendered text is sent.
        render_cache: This interaction's RenderContextCache.
    """

    def __init__(
        self,
        interaction: Interaction,
        sink: MessageSink,
        settings_service: UserSettingsService,
        translations: TranslationService,
    ):
        self.interaction = interaction
        self.sink = sink
        self.settings_service = settings_service
        self.translations = translations
        self.render_cache = RenderContextCache()

    async def load_render_context(self) -> RenderContext:
        """Identity, then settings get-or-create, then locale."""
        user = resolve_identity(self.interaction)
        settings = await self.settings_service.get_or_create(user.user_id)
        locale = self.translations.resolve_locale_from_settings(settings.settings_json)
        logger.debug("render_context_loaded", user_id=user.user_id, locale=locale.value)
        return RenderContext(user=user, settings=settings, locale=locale)

    async def render_context(self) -> RenderContext:
        return await self.render_cache.ensure(self.load_render_context)

    async def t(self, key: str, **params: Any) -> str:
        """Render ``key`` in this interaction's locale."""
        ctx = await self.render_context()
        return self.translations.t(key, params, ctx.locale)

    async def update_settings(self, patch: Mapping[str, Any]) -> SettingsRecord:
        """Merge-patch the user's settings and keep the cached bundle in step."""
        ctx = await self.render_context()
        record = await self.settings_service.merge_patch(ctx.user.user_id, patch)
        self.render_cache.patch(
            settings=record,
            locale=self.translations.resolve_locale_from_settings(record.settings_json),
        )
        return record

    async def set_language(self, locale: Locale) -> SettingsRecord:
        return await self.update_settings({"language_code": locale.value})

    async def mark_onboarded(self) -> None:
        ctx = await self.render_context()
        await self.settings_service.set_onboarded(ctx.user.user_id)
        # re-read so the cached row carries the stored updated_at
        settings = await self.settings_service.get_or_create(ctx.user.user_id)
        self.render_cache.patch(settings=settings)


@asynccontextmanager
async def open_interaction(
    interaction: Interaction,
    sink: MessageSink,
    settings_service: UserSettingsService,
    translations: TranslationService,
) -> AsyncIterator[InteractionContext]:
    """Accept an interaction and yield its context.

    Rejects interactions without an originator before any handler runs and
    binds correlation/user ids to every log line emitted while handling it.

    Raises:
        MissingOriginator: The interaction cannot be attributed to a user.
    """
    user = resolve_identity(interaction)
    log_context: Dict[str, Any] = {
        "correlation_id": interaction.correlation_id,
        "user_id": user.user_id,
    }
    if interaction.chat_id is not None:
        log_context["chat_id"] = str(interaction.chat_id)

    with bind_request_context(**log_context):
        yield InteractionContext(interaction, sink, settings_service, translations)
