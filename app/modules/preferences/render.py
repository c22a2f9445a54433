"""Screen rendering: translate a screen and hand it to the message sink."""

from typing import Any, Dict, Optional, Sequence

from infrastructure.logging import get_module_logger
from modules.preferences.context import InteractionContext
from modules.preferences.interactions import Controls

logger = get_module_logger()


async def render_screen(
    ctx: InteractionContext,
    title_key: str,
    body_lines: Sequence[str],
    controls: Optional[Controls] = None,
    params: Optional[Dict[str, Any]] = None,
) -> str:
    """Render a titled screen in the user's locale and deliver it.

    Title and body entries are template keys; entries that do not resolve
    are used verbatim. A callback on an existing message edits that message
    in place, anything else is sent as a new reply.

    Args:
        ctx: The interaction being handled.
        title_key: Template key for the first line.
        body_lines: Template keys or literal lines, in order.
        controls: Optional rows of inline buttons.
        params: Placeholder values shared by title and body.

    Returns:
        The text that was sent.
    """
    render_ctx = await ctx.render_context()
    params = params or {}

    title = ctx.translations.t(title_key, params, render_ctx.locale)
    body = [ctx.translations.t(line, params, render_ctx.locale) for line in body_lines]
    text = "\n".join([title, "", *body])

    if ctx.interaction.is_callback:
        ref = ctx.interaction.callback_message
        await ctx.sink.edit_message(ref, text, controls)
        logger.debug("screen_edited", title_key=title_key, message_id=str(ref.message_id))
    else:
        await ctx.sink.reply(text, controls)
        logger.debug("screen_sent", title_key=title_key)

    return text
