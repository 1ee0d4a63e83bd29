from telegram import Update
from telegram.error import NetworkError, TimedOut
from telegram.ext import Application, ApplicationBuilder, ContextTypes
from typing import Optional
import logging

from database.manager import DatabaseError
from handlers.router import register_handlers
from handlers.utils import PLANNER_KEY
from services.planner_service import PlannerService
from utils.decorators import OWNER_KEY

logger = logging.getLogger(__name__)

def build_application(token: str, planner: PlannerService, owner_id: Optional[int] = None) -> Application:
    # Обновления обрабатываются последовательно: одна сессия, один файл истории
    application = (
        ApplicationBuilder()
        .token(token)
        .concurrent_updates(False)
        .build()
    )

    application.bot_data[PLANNER_KEY] = planner
    application.bot_data[OWNER_KEY] = owner_id

    register_handlers(application)
    application.add_error_handler(error_handler)

    total_handlers = sum(len(handlers) for handlers in application.handlers.values())
    logger.info(f"✅ Зарегистрировано обработчиков: {total_handlers}")
    return application

async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE):
    """Обработчик ошибок"""
    error = context.error

    if isinstance(error, (TimedOut, NetworkError)):
        logger.warning(f"⚠️ Временная сетевая ошибка: {error}")
        return

    if isinstance(error, DatabaseError):
        logger.error(f"💾 Ошибка хранилища: {error}")
        text = "💾 Не удалось сохранить изменения. Последнее сохранённое состояние не тронуто."
    else:
        logger.error("❌ Неожиданная ошибка", exc_info=error)
        text = "⚠️ Произошла ошибка. Попробуйте ещё раз."

    if not isinstance(update, Update):
        return
    if update.callback_query:
        await update.callback_query.answer(text, show_alert=True)
    elif update.effective_message:
        await update.effective_message.reply_text(text)
