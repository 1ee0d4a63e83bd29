"""Tests for the Telegram handlers, driven with mocked updates."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from telegram import Update
from telegram.error import BadRequest

from bot.application import build_application, error_handler
from database.manager import DatabaseWriteError
from handlers.callbacks.blocks import export_callback, rename_callback, sub_item_callback, toggle_callback
from handlers.callbacks.calendar import day_callback, month_callback
from handlers.callbacks.history import clear_yes_callback
from handlers.commands.planner import date_command, starthour_command
from handlers.messages import text_message
from handlers.utils import (
    PLANNER_KEY, STATE_IDLE, STATE_RENAME, get_state, parse_month_token, safe_edit
)
from models.block import ValidationError
from utils.decorators import OWNER_KEY

OWNER_ID = 42


def make_context(planner, owner_id=None, args=None):
    context = MagicMock()
    context.bot_data = {PLANNER_KEY: planner, OWNER_KEY: owner_id}
    context.user_data = {}
    context.args = args or []
    return context


def make_callback_update(data, user_id=OWNER_ID):
    update = MagicMock()
    update.effective_user.id = user_id
    query = update.callback_query
    query.data = data
    query.answer = AsyncMock()
    query.edit_message_text = AsyncMock()
    query.message.reply_html = AsyncMock()
    query.message.reply_document = AsyncMock()
    return update


def make_message_update(text="", user_id=OWNER_ID):
    update = MagicMock()
    update.effective_user.id = user_id
    update.callback_query = None
    update.message.text = text
    update.message.reply_text = AsyncMock()
    update.message.reply_html = AsyncMock()
    update.effective_message = update.message
    return update


async def test_toggle_callback_marks_block(planner):
    update = make_callback_update("toggle:t1")
    await toggle_callback(update, make_context(planner))

    assert planner.get_block("t1").done is True
    update.callback_query.answer.assert_awaited()
    update.callback_query.edit_message_text.assert_awaited_once()


async def test_owner_guard_rejects_other_users(planner, store):
    update = make_callback_update("toggle:t1", user_id=7)
    await toggle_callback(update, make_context(planner, owner_id=OWNER_ID))

    assert planner.get_block("t1").done is False
    assert len(store) == 0
    update.callback_query.answer.assert_awaited_once()
    assert update.callback_query.answer.await_args.kwargs["show_alert"] is True


async def test_owner_guard_allows_owner(planner):
    update = make_callback_update("toggle:t1", user_id=OWNER_ID)
    await toggle_callback(update, make_context(planner, owner_id=OWNER_ID))
    assert planner.get_block("t1").done is True


async def test_rename_flow(planner):
    context = make_context(planner)
    await rename_callback(make_callback_update("rename:t2"), context)
    assert get_state(context) == STATE_RENAME

    update = make_message_update("Apply for 5 jobs")
    await text_message(update, context)

    assert planner.get_block("t2").title == "Apply for 5 jobs"
    assert get_state(context) == STATE_IDLE
    update.message.reply_html.assert_awaited_once()


async def test_rename_rejects_blank_title(planner):
    context = make_context(planner)
    await rename_callback(make_callback_update("rename:t2"), context)

    await text_message(make_message_update("   "), context)

    assert planner.get_block("t2").title == "Apply for jobs"
    assert get_state(context) == STATE_RENAME


async def test_rename_applies_to_day_where_it_started(planner):
    context = make_context(planner)
    await rename_callback(make_callback_update("rename:t1"), context)
    planner.select_date("2025-10-20")

    await text_message(make_message_update("Earlier day"), context)

    assert planner.date_key == "2025-10-18"
    assert planner.get_block("t1").title == "Earlier day"


async def test_sub_item_flow(planner):
    context = make_context(planner)
    await sub_item_callback(make_callback_update("sub:t3:1"), context)
    await text_message(make_message_update("Physics"), context)
    assert planner.get_block("t3").sub_items == ["Subject 1", "Physics", "Subject 3"]

    await sub_item_callback(make_callback_update("sub:t3:0"), context)
    await text_message(make_message_update("-"), context)
    assert planner.get_block("t3").sub_items[0] == ""


async def test_sub_item_out_of_range_sets_no_state(planner):
    context = make_context(planner)
    await sub_item_callback(make_callback_update("sub:t3:9"), context)
    assert get_state(context) == STATE_IDLE


async def test_text_without_state_gets_hint(planner, store):
    update = make_message_update("hello")
    await text_message(update, make_context(planner))

    update.message.reply_text.assert_awaited_once()
    assert len(store) == 0


async def test_date_command_rejects_bad_key(planner):
    update = make_message_update()
    await date_command(update, make_context(planner, args=["18.10.2025"]))

    assert planner.date_key == "2025-10-18"
    assert "❌" in update.message.reply_text.await_args.args[0]


async def test_date_command_switches_day(planner, store):
    update = make_message_update()
    await date_command(update, make_context(planner, args=["2025-11-02"]))

    assert planner.date_key == "2025-11-02"
    assert len(store) == 0


async def test_starthour_command_clamps(planner):
    await starthour_command(make_message_update(), make_context(planner, args=["30"]))
    assert planner.start_hour == 23


async def test_day_callback_selects_date(planner):
    await day_callback(make_callback_update("day:2025-10-01"), make_context(planner))
    assert planner.date_key == "2025-10-01"


async def test_month_callback_renders_calendar(planner, store):
    update = make_callback_update("cal:2025-02")
    await month_callback(update, make_context(planner))

    text = update.callback_query.edit_message_text.await_args.args[0]
    assert "2025" in text
    assert len(store) == 0


async def test_clear_yes_callback_clears_history(planner, store):
    planner.toggle_done("t1")
    await clear_yes_callback(make_callback_update("clear_yes"), make_context(planner))
    assert len(store) == 0


async def test_export_callback_sends_file(planner):
    update = make_callback_update("export")
    await export_callback(update, make_context(planner))

    kwargs = update.callback_query.message.reply_document.await_args.kwargs
    assert kwargs["filename"] == "plan-2025-10-18.txt"
    assert kwargs["document"].getvalue().decode("utf-8").startswith("08:00 - 09:30 | Internship hunt")


async def test_safe_edit_ignores_unchanged_message():
    update = make_callback_update("noop")
    update.callback_query.edit_message_text.side_effect = BadRequest("Message is not modified")
    await safe_edit(update, "same text")


async def test_safe_edit_raises_other_errors():
    update = make_callback_update("noop")
    update.callback_query.edit_message_text.side_effect = BadRequest("Chat not found")
    with pytest.raises(BadRequest):
        await safe_edit(update, "text")


def test_parse_month_token():
    assert parse_month_token("2025-10") == (2025, 10)
    with pytest.raises(ValidationError):
        parse_month_token("2025-13")
    with pytest.raises(ValidationError):
        parse_month_token("october")


def test_build_application_wires_planner(planner):
    application = build_application("123456:TEST-TOKEN", planner, owner_id=OWNER_ID)

    assert application.bot_data[PLANNER_KEY] is planner
    assert application.bot_data[OWNER_KEY] == OWNER_ID
    assert sum(len(h) for h in application.handlers.values()) > 10


async def test_error_handler_reports_write_failure():
    update = MagicMock(spec=Update)
    update.callback_query = MagicMock()
    update.callback_query.answer = AsyncMock()
    context = MagicMock()
    context.error = DatabaseWriteError("disk full")

    await error_handler(update, context)

    text = update.callback_query.answer.await_args.args[0]
    assert "сохранить" in text
