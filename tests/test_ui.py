"""Tests for ui/ - message texts and inline keyboards."""

from datetime import date

from core.calendar_index import month_cells, month_progress
from core.template import clone_template
from ui.keyboards import calendar_keyboard, clear_confirm_keyboard, day_keyboard
from ui.messages import calendar_message, day_message, help_message
from ui.progress import progress_bar


def _callback_data(markup):
    return [button.callback_data for row in markup.inline_keyboard for button in row]


def test_progress_bar():
    assert progress_bar(0).endswith(" 0%")
    assert progress_bar(50, length=10).count("🟩") == 5
    assert progress_bar(150).count("⬜️") == 0


def test_day_message_lists_schedule(planner):
    planner.toggle_done("t1")
    text = day_message(planner)

    assert "08:00-09:30" in text
    assert "✅" in text
    assert "Subject 1, Subject 2, Subject 3" in text
    assert "17%" in text
    assert "(1/6)" in text
    assert "Всего: 11 ч 10 мин" in text


def test_day_message_escapes_titles(planner):
    planner.rename("t1", "<b>bold</b>")
    assert "&lt;b&gt;bold&lt;/b&gt;" in day_message(planner)


def test_day_keyboard_callbacks():
    data = _callback_data(day_keyboard(clone_template(), date(2025, 10, 18)))

    assert "toggle:t1" in data
    assert "toggle:b1" not in data
    assert "rename:b1" in data and "remove:t1" in data
    assert not [d for d in data if d in {"remove:b1", "remove:b2", "remove:b3", "remove:b4", "remove:l"}]
    assert ["sub:t3:0", "sub:t3:1", "sub:t3:2"] == [d for d in data if d.startswith("sub:")]
    assert {"add", "unmark", "reset", "export", "clear_ask", "cal_today"} <= set(data)
    assert "day:2025-10-17" in data and "day:2025-10-19" in data
    assert "cal:2025-10" in data


def test_callback_data_fits_telegram_limit():
    markup = day_keyboard(clone_template(), date(2025, 10, 18))
    assert all(len(d.encode("utf-8")) <= 64 for d in _callback_data(markup))


def test_calendar_keyboard_grid(planner):
    cells = planner.calendar(2025, 10, pad_weeks=True)
    markup = calendar_keyboard(2025, 10, cells)
    rows = markup.inline_keyboard

    assert _callback_data(markup)[0] == "cal:2025-09"
    assert _callback_data(markup)[2] == "cal:2025-11"
    grid = rows[2:-1]
    assert all(len(row) == 7 for row in grid)
    assert grid[0][3].callback_data == "day:2025-10-01"


def test_calendar_message_lists_tracked_days(planner):
    planner.toggle_done("t1")
    text = calendar_message(2025, 10, planner.calendar(2025, 10))

    assert "Октябрь 2025" in text
    assert "2025-10-18: 17%" in text


def test_calendar_message_empty_month(memory_store):
    text = calendar_message(2025, 2, month_progress(memory_store, 2025, 2))
    assert "ещё нет сохранённых дней" in text
    assert len(month_cells(2025, 2)) == 34


def test_clear_confirm_keyboard():
    assert _callback_data(clear_confirm_keyboard()) == ["clear_yes", "clear_no"]


def test_help_lists_commands():
    text = help_message()
    for command in ("/today", "/date", "/starthour", "/add", "/reset", "/unmark",
                    "/export", "/calendar", "/clear", "/cancel"):
        assert command in text
