#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Powerhouse Planner v1.0 - Block Model
Блок расписания (задача или перерыв) и его сериализация
"""

import copy
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)

# ===== EXCEPTIONS =====

class ValidationError(Exception):
    """Ошибка валидации данных"""
    pass

# ===== MODEL =====

@dataclass
class Block:
    """Один блок дня: рабочая задача или перерыв"""
    id: str
    title: str
    duration_minutes: int
    is_break: bool = False
    done: bool = False
    sub_items: Optional[List[str]] = field(default=None)

    def __post_init__(self):
        """Валидация после создания объекта"""
        if not isinstance(self.id, str) or not self.id:
            raise ValidationError("id должен быть непустой строкой")

        if not isinstance(self.title, str):
            raise ValidationError("title должен быть строкой")

        # bool тоже int, отсекаем явно
        if isinstance(self.duration_minutes, bool) or not isinstance(self.duration_minutes, int):
            raise ValidationError("duration_minutes должен быть целым числом")
        if self.duration_minutes < 0:
            raise ValidationError("duration_minutes не может быть отрицательным")

        for name in ("is_break", "done"):
            if not isinstance(getattr(self, name), bool):
                raise ValidationError(f"{name} должен быть bool")

        if self.sub_items is not None:
            if not isinstance(self.sub_items, list) or not all(isinstance(s, str) for s in self.sub_items):
                raise ValidationError("sub_items должен быть списком строк")

    @property
    def is_work(self) -> bool:
        return not self.is_break

    def copy(self) -> "Block":
        """Глубокая копия блока (sub_items не разделяются)"""
        return replace(self, sub_items=copy.copy(self.sub_items))

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "title": self.title,
            "duration_minutes": self.duration_minutes,
            "is_break": self.is_break,
            "done": self.done,
        }
        if self.sub_items is not None:
            data["sub_items"] = list(self.sub_items)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Block":
        if not isinstance(data, dict):
            raise ValidationError(f"Запись блока должна быть объектом, получено: {type(data).__name__}")
        try:
            sub_items = data.get("sub_items")
            return cls(
                id=data["id"],
                title=data["title"],
                duration_minutes=data["duration_minutes"],
                is_break=data.get("is_break", False),
                done=data.get("done", False),
                sub_items=list(sub_items) if isinstance(sub_items, list) else sub_items,
            )
        except KeyError as e:
            raise ValidationError(f"В записи блока нет поля {e}")


def blocks_to_dicts(blocks: List[Block]) -> List[Dict[str, Any]]:
    return [b.to_dict() for b in blocks]


def blocks_from_dicts(records: List[Dict[str, Any]]) -> List[Block]:
    """Десериализация снимка дня; порядок записей сохраняется"""
    if not isinstance(records, list):
        raise ValidationError("Снимок дня должен быть списком блоков")

    blocks = [Block.from_dict(r) for r in records]

    ids = [b.id for b in blocks]
    if len(ids) != len(set(ids)):
        raise ValidationError("id блоков в пределах дня должны быть уникальны")

    return blocks


def copy_blocks(blocks: List[Block]) -> List[Block]:
    return [b.copy() for b in blocks]
