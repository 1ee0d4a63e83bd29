# handlers/messages.py

import logging

from telegram.ext import Application, MessageHandler, filters, ContextTypes, CommandHandler
from telegram import Update

from handlers.utils import (
    STATE_RENAME, STATE_SUB_ITEM, clear_state, get_pending, get_planner, get_state, send_day
)
from utils.decorators import owner_only
from utils.validators import MAX_TITLE_LENGTH, clean_title

logger = logging.getLogger(__name__)

CLEAR_MARKER = "-"

@owner_only
async def cancel(update: Update, context: ContextTypes.DEFAULT_TYPE):
    clear_state(context)
    await update.message.reply_text("Действие отменено.")

# --- Универсальный обработчик текста ---
@owner_only
async def text_message(update: Update, context: ContextTypes.DEFAULT_TYPE):
    user_text = update.message.text
    state = get_state(context)
    pending = get_pending(context)
    planner = get_planner(context)

    if state not in (STATE_RENAME, STATE_SUB_ITEM):
        await update.message.reply_text("Используйте кнопки или команды. /help - справка.")
        return

    # Ввод относится к дню, на котором его начали
    if pending.get('date_key') and pending['date_key'] != planner.date_key:
        planner.select_date(pending['date_key'])

    if state == STATE_RENAME:
        title = clean_title(user_text)
        if title is None:
            await update.message.reply_text(
                f"Название должно быть от 1 до {MAX_TITLE_LENGTH} символов. Попробуйте ещё раз или /cancel."
            )
            return
        planner.rename(pending['block_id'], title)

    elif state == STATE_SUB_ITEM:
        value = user_text.strip()
        if len(value) > MAX_TITLE_LENGTH:
            await update.message.reply_text(
                f"Не длиннее {MAX_TITLE_LENGTH} символов. Попробуйте ещё раз или /cancel."
            )
            return
        if value == CLEAR_MARKER:
            value = ""
        planner.edit_sub_item(pending['block_id'], pending['index'], value)

    clear_state(context)
    await send_day(update.message, planner)

def register_message_handlers(application: Application):
    """Регистрирует обработчики"""
    application.add_handler(CommandHandler("cancel", cancel))
    # Универсальный обработчик текста
    application.add_handler(MessageHandler(filters.TEXT & (~filters.COMMAND), text_message))
