# ===== handlers/utils.py =====
import io
import logging
from typing import Tuple

from telegram import Message, Update
from telegram.error import BadRequest
from telegram.ext import ContextTypes

from models.block import ValidationError
from services.planner_service import PlannerService
from ui.keyboards import calendar_keyboard, day_keyboard
from ui.messages import calendar_message, day_message

logger = logging.getLogger(__name__)

PLANNER_KEY = "planner"

# Состояния ввода текста
STATE_IDLE = "idle"
STATE_RENAME = "rename"
STATE_SUB_ITEM = "sub_item"

def get_planner(context: ContextTypes.DEFAULT_TYPE) -> PlannerService:
    return context.bot_data[PLANNER_KEY]

# --- user_state ---
def get_state(context):
    return context.user_data.get('user_state', STATE_IDLE)

def set_state(context, state, **pending):
    context.user_data['user_state'] = state
    context.user_data['pending'] = pending

def get_pending(context) -> dict:
    return context.user_data.get('pending') or {}

def clear_state(context):
    context.user_data['user_state'] = STATE_IDLE
    context.user_data.pop('pending', None)

def parse_month_token(token: str) -> Tuple[int, int]:
    """'2025-10' -> (2025, 10)"""
    try:
        year_str, month_str = token.strip().split("-")
        year, month = int(year_str), int(month_str)
    except (AttributeError, ValueError):
        raise ValidationError(f"Неверный месяц: {token!r} (ожидается YYYY-MM)")
    if not 1 <= month <= 12 or not 1 <= year <= 9999:
        raise ValidationError(f"Неверный месяц: {token!r}")
    return year, month

# --- Отрисовка ---
async def send_day(message: Message, planner: PlannerService):
    await message.reply_html(
        day_message(planner),
        reply_markup=day_keyboard(planner.blocks, planner.selected_date)
    )

async def edit_day(update: Update, planner: PlannerService):
    await safe_edit(
        update,
        day_message(planner),
        day_keyboard(planner.blocks, planner.selected_date)
    )

async def edit_calendar(update: Update, planner: PlannerService, year: int, month: int):
    cells = planner.calendar(year, month, pad_weeks=True)
    await safe_edit(
        update,
        calendar_message(year, month, cells, planner.week_start),
        calendar_keyboard(year, month, cells, planner.week_start)
    )

async def safe_edit(update: Update, text: str, reply_markup=None):
    """edit_message_text, не падающий на неизменённом сообщении"""
    try:
        await update.callback_query.edit_message_text(text, reply_markup=reply_markup, parse_mode="HTML")
    except BadRequest as e:
        if "not modified" not in str(e).lower():
            raise
        logger.debug("Сообщение не изменилось")

async def send_export(message: Message, planner: PlannerService):
    file_buffer = io.BytesIO(planner.export_text().encode('utf-8'))
    file_buffer.name = planner.export_filename()
    await message.reply_document(
        document=file_buffer,
        caption=f"📤 План на {planner.date_key}",
        filename=file_buffer.name
    )
    logger.info(f"📤 Экспорт плана {planner.date_key}")
