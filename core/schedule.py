#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Powerhouse Planner v1.0 - Schedule Operations
Операции над списком блоков одного дня

Все функции чистые: принимают список блоков и возвращают новый список
новых объектов Block. Исходный список и его блоки не изменяются.
Неизвестный id - не ошибка, а no-op.
"""

import uuid
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional, Tuple

from models.block import Block, copy_blocks
from core.template import SUB_ITEM_SLOTS, clone_template, new_block_template


def new_block_id(taken: Iterable[str] = ()) -> str:
    """Свежий id блока, не совпадающий ни с одним из taken"""
    taken = set(taken)
    while True:
        candidate = "x" + uuid.uuid4().hex[:10]
        if candidate not in taken:
            return candidate


def find_block(blocks: List[Block], block_id: str) -> Optional[Block]:
    for block in blocks:
        if block.id == block_id:
            return block
    return None


def _map_block(blocks: List[Block], block_id: str, fn) -> List[Block]:
    return [fn(b) if b.id == block_id else b.copy() for b in blocks]


def toggle_done(blocks: List[Block], block_id: str) -> List[Block]:
    """Переключить выполнение. Перерывы не отмечаются"""
    def _toggle(block: Block) -> Block:
        if block.is_break:
            return block.copy()
        return replace(block.copy(), done=not block.done)

    return _map_block(blocks, block_id, _toggle)


def rename_block(blocks: List[Block], block_id: str, new_title: str) -> List[Block]:
    return _map_block(blocks, block_id, lambda b: replace(b.copy(), title=new_title))


def edit_sub_item(blocks: List[Block], block_id: str, index: int, value: str) -> List[Block]:
    """
    Заменить sub_items[index].
    Если подпунктов нет - сначала создаются SUB_ITEM_SLOTS пустых строк.
    Индекс вне [0, len(sub_items)) - no-op, список не растёт.
    """
    def _edit(block: Block) -> Block:
        sub_items = list(block.sub_items) if block.sub_items is not None else [""] * SUB_ITEM_SLOTS
        if not 0 <= index < len(sub_items):
            return block.copy()
        sub_items[index] = value
        return replace(block, sub_items=sub_items)

    return _map_block(blocks, block_id, _edit)


def add_block(
    blocks: List[Block],
    template: Optional[Dict[str, Any]] = None,
    existing_ids: Iterable[str] = (),
) -> Tuple[List[Block], str]:
    """
    Добавить рабочий блок перед последним блоком дня
    (последний блок - «финальная задача» и остаётся в конце).
    В пустой список блок просто добавляется.
    """
    params = dict(template or new_block_template())
    params.pop("id", None)
    params["is_break"] = False
    params["done"] = False

    block_id = new_block_id({b.id for b in blocks} | set(existing_ids))
    new_block = Block(id=block_id, **params)

    result = copy_blocks(blocks)
    if result:
        result.insert(len(result) - 1, new_block)
    else:
        result.append(new_block)

    return result, block_id


def remove_block(blocks: List[Block], block_id: str) -> List[Block]:
    return [b.copy() for b in blocks if b.id != block_id]


def reset_to_template() -> List[Block]:
    return clone_template()


def unmark_all(blocks: List[Block]) -> List[Block]:
    return [replace(b.copy(), done=False) for b in blocks]
