import functools
import logging

logger = logging.getLogger(__name__)

OWNER_KEY = "OWNER_USER_ID"


def owner_only(func):
    """Доступ к обработчику только у владельца планировщика (если он задан)"""
    @functools.wraps(func)
    async def wrapper(update, context, *args, **kwargs):
        owner_id = context.bot_data.get(OWNER_KEY)
        user = update.effective_user
        if owner_id is not None and (user is None or user.id != owner_id):
            logger.warning(f"⛔️ Отклонён запрос пользователя {user.id if user else None}")
            if update.callback_query:
                await update.callback_query.answer("⛔️ Это личный планировщик.", show_alert=True)
            elif update.effective_message:
                await update.effective_message.reply_text("⛔️ Это личный планировщик.")
            return None
        return await func(update, context, *args, **kwargs)
    return wrapper
