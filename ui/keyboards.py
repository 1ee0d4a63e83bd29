from datetime import date
from typing import List, Optional

from telegram import InlineKeyboardButton, InlineKeyboardMarkup

from core.calendar_index import CalendarCell, shift_month, weekday_labels
from models.block import Block
from models.enums import WeekStart
from ui.messages import MONTH_NAMES
from utils.datetime_utils import add_days, date_key
from utils.text_utils import truncate

NOOP = "noop"
SUB_SLOT_MARKERS = ["1️⃣", "2️⃣", "3️⃣", "4️⃣", "5️⃣"]

def month_token(year: int, month: int):
    return f"{year:04d}-{month:02d}"

# Клавиатура дня
def day_keyboard(blocks: List[Block], selected: date):
    keyboard = []
    for block in blocks:
        if block.is_break:
            head = InlineKeyboardButton(f"☕️ {truncate(block.title, 28)}", callback_data=NOOP)
        else:
            head = InlineKeyboardButton(
                f"{'✅' if block.done else '⬜️'} {truncate(block.title, 28)}",
                callback_data=f"toggle:{block.id}"
            )
        row = [head, InlineKeyboardButton("✏️", callback_data=f"rename:{block.id}")]
        if block.is_work:
            row.append(InlineKeyboardButton("🗑", callback_data=f"remove:{block.id}"))
        keyboard.append(row)
        if block.sub_items is not None:
            keyboard.append([
                InlineKeyboardButton(
                    f"{SUB_SLOT_MARKERS[i] if i < len(SUB_SLOT_MARKERS) else i + 1} {truncate(sub or '-', 12)}",
                    callback_data=f"sub:{block.id}:{i}"
                )
                for i, sub in enumerate(block.sub_items)
            ])

    keyboard.append([
        InlineKeyboardButton("➕ Блок", callback_data="add"),
        InlineKeyboardButton("↩️ Снять отметки", callback_data="unmark"),
        InlineKeyboardButton("🔄 Шаблон", callback_data="reset")
    ])
    keyboard.append([
        InlineKeyboardButton("◀️", callback_data=f"day:{date_key(add_days(selected, -1))}"),
        InlineKeyboardButton("📍 Сегодня", callback_data="cal_today"),
        InlineKeyboardButton("▶️", callback_data=f"day:{date_key(add_days(selected, 1))}")
    ])
    keyboard.append([
        InlineKeyboardButton("📤 Экспорт", callback_data="export"),
        InlineKeyboardButton("🗓 Календарь", callback_data=f"cal:{month_token(selected.year, selected.month)}"),
        InlineKeyboardButton("🗑 История", callback_data="clear_ask")
    ])
    return InlineKeyboardMarkup(keyboard)

# Календарь месяца: ячейки должны быть дополнены до полных недель
def calendar_keyboard(year: int, month: int, cells: List[Optional[CalendarCell]],
                      week_start: WeekStart = WeekStart.SUNDAY):
    prev_year, prev_month = shift_month(year, month, -1)
    next_year, next_month = shift_month(year, month, 1)

    keyboard = [[
        InlineKeyboardButton("◀️", callback_data=f"cal:{month_token(prev_year, prev_month)}"),
        InlineKeyboardButton(f"{MONTH_NAMES[month - 1]} {year}", callback_data=NOOP),
        InlineKeyboardButton("▶️", callback_data=f"cal:{month_token(next_year, next_month)}")
    ]]
    keyboard.append([InlineKeyboardButton(label, callback_data=NOOP) for label in weekday_labels(week_start)])

    for start in range(0, len(cells), 7):
        row = []
        for cell in cells[start:start + 7]:
            if cell is None:
                row.append(InlineKeyboardButton(" ", callback_data=NOOP))
            else:
                label = f"{cell.day}·{cell.progress}" if cell.stored else str(cell.day)
                row.append(InlineKeyboardButton(label, callback_data=f"day:{cell.date_key}"))
        keyboard.append(row)

    keyboard.append([InlineKeyboardButton("📍 Сегодня", callback_data="cal_today")])
    return InlineKeyboardMarkup(keyboard)

# Подтверждение очистки истории
def clear_confirm_keyboard():
    keyboard = [
        [InlineKeyboardButton("🗑 Да, удалить всё", callback_data="clear_yes")],
        [InlineKeyboardButton("🔙 Отмена", callback_data="clear_no")]
    ]
    return InlineKeyboardMarkup(keyboard)
