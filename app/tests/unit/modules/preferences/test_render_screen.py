"""Unit tests for modules.preferences.render."""

import pytest

from infrastructure.i18n import Locale
from modules.preferences import InlineButton, InteractionContext, MessageRef, render_screen
from tests.factories.preferences import make_interaction

pytestmark = pytest.mark.unit


@pytest.fixture
def make_context(settings_service, translation_service, message_sink):
    def _make(**interaction_kwargs):
        return InteractionContext(
            make_interaction(**interaction_kwargs),
            message_sink,
            settings_service,
            translation_service,
        )

    return _make


async def test_fresh_interaction_sends_reply(make_context, message_sink):
    ctx = make_context()

    text = await render_screen(
        ctx, "screens.settings.title", ["screens.settings.choose_option"]
    )

    assert text == "Settings\n\nChoose an option:"
    assert message_sink.replies == [(text, None)]
    assert message_sink.edits == []


async def test_callback_edits_message_in_place(make_context, message_sink):
    ctx = make_context(chat_id=42, callback_message_id=7)
    controls = [[InlineButton(text="Back", callback_data="settings:back")]]

    text = await render_screen(
        ctx, "screens.settings.title", ["screens.settings.choose_option"], controls
    )

    assert message_sink.replies == []
    assert message_sink.edits == [(MessageRef(chat_id=42, message_id=7), text, controls)]


async def test_literal_lines_pass_through(make_context, message_sink):
    ctx = make_context()

    text = await render_screen(ctx, "screens.settings.title", ["Plain line", ""])

    assert text == "Settings\n\nPlain line\n"


async def test_renders_in_user_locale(make_context, message_sink):
    ctx = make_context()
    await ctx.set_language(Locale.FA)

    text = await render_screen(ctx, "screens.settings.title", ["common.back"])

    assert text == "تنظیمات\n\nبازگشت"


async def test_params_apply_to_title_and_body(make_context):
    ctx = make_context()

    text = await render_screen(
        ctx,
        "screens.greeting",
        ["screens.summary"],
        params={"name": "Ana", "n": 3},
    )

    assert text == "Hello Ana\n\nHello Ana, you have 3 items, Ana!"
