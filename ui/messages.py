# ui/messages.py

from typing import List, Optional

from core.calendar_index import CalendarCell, weekday_labels
from core.timeline import ScheduledBlock, format_clock, total_minutes
from models.enums import ClockFormat, WeekStart
from ui.progress import blocks_progress_bar, day_emoji
from utils.datetime_utils import format_date
from utils.text_utils import bold, escape_html

MONTH_NAMES = [
    "Январь", "Февраль", "Март", "Апрель", "Май", "Июнь",
    "Июль", "Август", "Сентябрь", "Октябрь", "Ноябрь", "Декабрь",
]

def welcome_message(user):
    return (
        f"Привет, {escape_html(user.first_name or 'друг')}! 👋\n"
        "Я твой планировщик дня: расписание из блоков, отметки и прогресс.\n"
        "Используй /today, чтобы открыть день, и /help для справки."
    )

def help_message():
    return (
        "<b>Команды планировщика:</b>\n"
        "/today - план на сегодня\n"
        "/date YYYY-MM-DD - открыть другой день\n"
        "/starthour N - час начала дня (0-23)\n"
        "/add - добавить блок перед последним\n"
        "/reset - вернуть день к шаблону\n"
        "/unmark - снять все отметки\n"
        "/export - выгрузить план в файл\n"
        "/calendar [YYYY-MM] - прогресс по дням месяца\n"
        "/clear - очистить всю историю\n"
        "/cancel - отменить ввод"
    )

def schedule_line(item: ScheduledBlock, clock_format: ClockFormat = ClockFormat.H24):
    block = item.block
    if block.is_break:
        status = "☕️"
    else:
        status = "✅" if block.done else "⬜️"
    line = (
        f"{status} <code>{format_clock(item.start_minutes, clock_format)}"
        f"-{format_clock(item.end_minutes, clock_format)}</code> {escape_html(block.title)}"
    )
    if block.sub_items:
        subs = ", ".join(escape_html(s) for s in block.sub_items if s)
        if subs:
            line += f"\n      <i>{subs}</i>"
    return line

def day_message(planner):
    """Полный текст дня: дата, расписание и прогресс"""
    done, total = planner.progress_counts()
    header = f"📅 {bold(format_date(planner.selected_date))}  ⏰ старт {planner.start_hour:02d}:00"
    lines = [schedule_line(item, planner.clock_format) for item in planner.schedule()]
    hours, minutes = divmod(total_minutes(planner.blocks), 60)
    footer = (
        f"Всего: {hours} ч {minutes:02d} мин\n"
        f"Прогресс: {blocks_progress_bar(done, total, planner.progress())}"
    )
    return "\n".join([header, ""] + lines + ["", footer])

def calendar_message(year: int, month: int, cells: List[Optional[CalendarCell]],
                     week_start: WeekStart = WeekStart.SUNDAY):
    """Текстовый календарь месяца с прогрессом по дням"""
    lines = [f"🗓 {bold(f'{MONTH_NAMES[month - 1]} {year}')}",
             "<code>" + " ".join(f"{label:>3}" for label in weekday_labels(week_start)) + "</code>"]
    week = []
    for cell in cells:
        week.append("   " if cell is None else f"{cell.day:>3}")
        if len(week) == 7:
            lines.append("<code>" + " ".join(week) + "</code>")
            week = []
    if week:
        lines.append("<code>" + " ".join(week) + "</code>")

    tracked = [c for c in cells if c is not None and c.stored]
    if tracked:
        lines.append("")
        for cell in tracked:
            lines.append(f"{day_emoji(cell.progress)} {cell.date_key}: {cell.progress}%")
    else:
        lines.append("\nВ этом месяце ещё нет сохранённых дней.")
    return "\n".join(lines)

def clear_confirm_message(stored_days: int):
    return (
        f"⚠️ <b>Удалить всю историю?</b>\n"
        f"Сохранённых дней: {stored_days}. Действие необратимо."
    )

def rename_prompt(title: str):
    return f"✏️ Новое название для «{escape_html(title)}»:\n/cancel - отмена"

def sub_item_prompt(title: str, index: int, current: str):
    return (
        f"✏️ Пункт {index + 1} блока «{escape_html(title)}»"
        f" (сейчас: {escape_html(current) or '-'}):\n/cancel - отмена"
    )
