# handlers/commands/planner.py

import logging

from telegram.ext import Application, CommandHandler, ContextTypes
from telegram import Update

from handlers.utils import get_planner, send_day, send_export
from models.block import ValidationError
from utils.decorators import owner_only

logger = logging.getLogger(__name__)

@owner_only
async def today_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    planner = get_planner(context)
    planner.go_today()
    await send_day(update.message, planner)

@owner_only
async def date_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    planner = get_planner(context)
    if not context.args:
        await update.message.reply_text("Использование: /date YYYY-MM-DD")
        return
    try:
        planner.select_date(context.args[0])
    except ValidationError as e:
        await update.message.reply_text(f"❌ {e}")
        return
    await send_day(update.message, planner)

@owner_only
async def starthour_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    planner = get_planner(context)
    if not context.args:
        await update.message.reply_text(
            f"⏰ Сейчас день начинается в {planner.start_hour:02d}:00\n"
            "Использование: /starthour N (0-23)"
        )
        return
    hour = planner.set_start_hour(context.args[0])
    await update.message.reply_text(f"⏰ Начало дня: {hour:02d}:00")
    await send_day(update.message, planner)

@owner_only
async def add_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    planner = get_planner(context)
    planner.add_block()
    await send_day(update.message, planner)

@owner_only
async def reset_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    planner = get_planner(context)
    planner.reset_day()
    await update.message.reply_text("🔄 День возвращён к шаблону")
    await send_day(update.message, planner)

@owner_only
async def unmark_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    planner = get_planner(context)
    planner.unmark_all()
    await send_day(update.message, planner)

@owner_only
async def export_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await send_export(update.message, get_planner(context))

def register_planner_handlers(application: Application):
    application.add_handler(CommandHandler("today", today_command))
    application.add_handler(CommandHandler("date", date_command))
    application.add_handler(CommandHandler("starthour", starthour_command))
    application.add_handler(CommandHandler("add", add_command))
    application.add_handler(CommandHandler("reset", reset_command))
    application.add_handler(CommandHandler("unmark", unmark_command))
    application.add_handler(CommandHandler("export", export_command))
