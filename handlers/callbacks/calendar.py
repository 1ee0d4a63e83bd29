# handlers/callbacks/calendar.py

from telegram.ext import Application, CallbackQueryHandler, ContextTypes
from telegram import Update

from handlers.utils import edit_calendar, edit_day, get_planner, parse_month_token
from models.block import ValidationError
from utils.decorators import owner_only

@owner_only
async def day_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    query = update.callback_query
    planner = get_planner(context)
    try:
        planner.select_date(query.data.split(":", 1)[1])
    except ValidationError as e:
        await query.answer(f"❌ {e}", show_alert=True)
        return
    await query.answer()
    await edit_day(update, planner)

@owner_only
async def month_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    query = update.callback_query
    try:
        year, month = parse_month_token(query.data.split(":", 1)[1])
    except ValidationError as e:
        await query.answer(f"❌ {e}", show_alert=True)
        return
    await query.answer()
    await edit_calendar(update, get_planner(context), year, month)

@owner_only
async def today_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    query = update.callback_query
    planner = get_planner(context)
    planner.go_today()
    await query.answer()
    await edit_day(update, planner)

def register_calendar_callbacks(application: Application):
    application.add_handler(CallbackQueryHandler(day_callback, pattern="^day:"))
    application.add_handler(CallbackQueryHandler(month_callback, pattern="^cal:"))
    application.add_handler(CallbackQueryHandler(today_callback, pattern="^cal_today$"))
