# handlers/commands/basic.py

from telegram.ext import Application, CommandHandler, ContextTypes
from telegram import Update

from handlers.utils import get_planner, send_day
from ui.messages import help_message, welcome_message
from utils.decorators import owner_only

@owner_only
async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    planner = get_planner(context)
    await update.message.reply_html(welcome_message(update.effective_user))
    planner.go_today()
    await send_day(update.message, planner)

@owner_only
async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await update.message.reply_html(help_message())

async def myid_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    user = update.effective_user
    await update.message.reply_text(
        f"Ваш Telegram ID: <code>{user.id}</code>", parse_mode="HTML"
    )

def register_basic_handlers(application: Application):
    application.add_handler(CommandHandler("start", start_command))
    application.add_handler(CommandHandler("help", help_command))
    application.add_handler(CommandHandler("myid", myid_command))
