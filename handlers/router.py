# handlers/router.py

from telegram.ext import Application

from handlers.commands.basic import register_basic_handlers
from handlers.commands.planner import register_planner_handlers
from handlers.commands.history import register_history_handlers

from handlers.callbacks.blocks import register_blocks_callbacks
from handlers.callbacks.calendar import register_calendar_callbacks
from handlers.callbacks.history import register_history_callbacks

from handlers.messages import register_message_handlers

def register_handlers(application: Application):
    """Подключает все обработчики в Application"""
    register_basic_handlers(application)
    register_planner_handlers(application)
    register_history_handlers(application)

    register_blocks_callbacks(application)
    register_calendar_callbacks(application)
    register_history_callbacks(application)

    # Текст - последним
    register_message_handlers(application)
