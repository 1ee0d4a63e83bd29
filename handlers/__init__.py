"""
Powerhouse Planner v1.0 - Обработчики Telegram
Команды, callback-кнопки и текстовый ввод
"""

from .router import register_handlers

__all__ = ['register_handlers']
