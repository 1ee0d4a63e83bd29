# handlers/callbacks/history.py

import logging

from telegram.ext import Application, CallbackQueryHandler, ContextTypes
from telegram import Update

from handlers.utils import edit_day, get_planner, safe_edit
from ui.keyboards import clear_confirm_keyboard
from ui.messages import clear_confirm_message
from utils.decorators import owner_only

logger = logging.getLogger(__name__)

@owner_only
async def clear_ask_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    query = update.callback_query
    planner = get_planner(context)
    await query.answer()
    await safe_edit(update, clear_confirm_message(planner.stored_days_count()), clear_confirm_keyboard())

@owner_only
async def clear_yes_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    query = update.callback_query
    planner = get_planner(context)
    planner.clear_all_history()
    logger.info(f"🗑️ История очищена пользователем {update.effective_user.id}")
    await query.answer("🗑 История очищена", show_alert=True)
    await edit_day(update, planner)

@owner_only
async def clear_no_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    query = update.callback_query
    await query.answer("Отменено")
    await edit_day(update, get_planner(context))

def register_history_callbacks(application: Application):
    application.add_handler(CallbackQueryHandler(clear_ask_callback, pattern="^clear_ask$"))
    application.add_handler(CallbackQueryHandler(clear_yes_callback, pattern="^clear_yes$"))
    application.add_handler(CallbackQueryHandler(clear_no_callback, pattern="^clear_no$"))
