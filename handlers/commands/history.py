# handlers/commands/history.py

from telegram.ext import Application, CommandHandler, ContextTypes
from telegram import Update

from handlers.utils import get_planner, parse_month_token
from models.block import ValidationError
from ui.keyboards import calendar_keyboard, clear_confirm_keyboard
from ui.messages import calendar_message, clear_confirm_message
from utils.decorators import owner_only

@owner_only
async def calendar_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    planner = get_planner(context)
    if context.args:
        try:
            year, month = parse_month_token(context.args[0])
        except ValidationError as e:
            await update.message.reply_text(f"❌ {e}")
            return
    else:
        year, month = planner.selected_date.year, planner.selected_date.month

    cells = planner.calendar(year, month, pad_weeks=True)
    await update.message.reply_html(
        calendar_message(year, month, cells, planner.week_start),
        reply_markup=calendar_keyboard(year, month, cells, planner.week_start)
    )

@owner_only
async def clear_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    planner = get_planner(context)
    await update.message.reply_html(
        clear_confirm_message(planner.stored_days_count()),
        reply_markup=clear_confirm_keyboard()
    )

def register_history_handlers(application: Application):
    application.add_handler(CommandHandler("calendar", calendar_command))
    application.add_handler(CommandHandler("clear", clear_command))
