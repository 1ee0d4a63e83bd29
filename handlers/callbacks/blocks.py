# handlers/callbacks/blocks.py

import logging

from telegram.ext import Application, CallbackQueryHandler, ContextTypes
from telegram import Update

from core.template import SUB_ITEM_SLOTS
from handlers.utils import (
    STATE_RENAME, STATE_SUB_ITEM, edit_day, get_planner, send_export, set_state
)
from ui.messages import rename_prompt, sub_item_prompt
from utils.decorators import owner_only

logger = logging.getLogger(__name__)

def _payload(query) -> str:
    return query.data.split(":", 1)[1]

@owner_only
async def toggle_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    query = update.callback_query
    planner = get_planner(context)
    planner.toggle_done(_payload(query))
    await query.answer()
    await edit_day(update, planner)

@owner_only
async def rename_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    query = update.callback_query
    planner = get_planner(context)
    block = planner.get_block(_payload(query))
    if block is None:
        await query.answer("Блок не найден", show_alert=True)
        return
    set_state(context, STATE_RENAME, block_id=block.id, date_key=planner.date_key)
    await query.answer()
    await query.message.reply_html(rename_prompt(block.title))

@owner_only
async def sub_item_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    query = update.callback_query
    planner = get_planner(context)
    try:
        block_id, index_str = _payload(query).rsplit(":", 1)
        index = int(index_str)
    except ValueError:
        await query.answer()
        return

    block = planner.get_block(block_id)
    if block is None:
        await query.answer("Блок не найден", show_alert=True)
        return

    slots = len(block.sub_items) if block.sub_items is not None else SUB_ITEM_SLOTS
    if not 0 <= index < slots:
        await query.answer()
        return

    current = block.sub_items[index] if block.sub_items is not None else ""
    set_state(context, STATE_SUB_ITEM, block_id=block.id, index=index, date_key=planner.date_key)
    await query.answer()
    await query.message.reply_html(sub_item_prompt(block.title, index, current))

@owner_only
async def remove_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    query = update.callback_query
    planner = get_planner(context)
    removed = planner.remove_block(_payload(query))
    await query.answer("🗑 Блок удалён" if removed else None)
    await edit_day(update, planner)

@owner_only
async def add_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    query = update.callback_query
    planner = get_planner(context)
    planner.add_block()
    await query.answer("➕ Блок добавлен")
    await edit_day(update, planner)

@owner_only
async def reset_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    query = update.callback_query
    planner = get_planner(context)
    planner.reset_day()
    await query.answer("🔄 День возвращён к шаблону")
    await edit_day(update, planner)

@owner_only
async def unmark_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    query = update.callback_query
    planner = get_planner(context)
    planner.unmark_all()
    await query.answer()
    await edit_day(update, planner)

@owner_only
async def export_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    query = update.callback_query
    await query.answer()
    await send_export(query.message, get_planner(context))

async def noop_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await update.callback_query.answer()

def register_blocks_callbacks(application: Application):
    application.add_handler(CallbackQueryHandler(toggle_callback, pattern="^toggle:"))
    application.add_handler(CallbackQueryHandler(rename_callback, pattern="^rename:"))
    application.add_handler(CallbackQueryHandler(sub_item_callback, pattern="^sub:"))
    application.add_handler(CallbackQueryHandler(remove_callback, pattern="^remove:"))
    application.add_handler(CallbackQueryHandler(add_callback, pattern="^add$"))
    application.add_handler(CallbackQueryHandler(reset_callback, pattern="^reset$"))
    application.add_handler(CallbackQueryHandler(unmark_callback, pattern="^unmark$"))
    application.add_handler(CallbackQueryHandler(export_callback, pattern="^export$"))
    application.add_handler(CallbackQueryHandler(noop_callback, pattern="^noop$"))
