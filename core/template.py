# core/template.py

from typing import Any, Dict, List

from models.block import Block

# Количество слотов предметов у блока с подпунктами
SUB_ITEM_SLOTS = 3

NEW_BLOCK_TITLE = "New Task"
NEW_BLOCK_DURATION_MIN = 60

# Шаблон дня: 6 рабочих блоков по 90 минут + перерывы и обед.
# Хранится как сырые записи, объекты создаются только через clone_template().
DEFAULT_TEMPLATE: tuple = (
    {"id": "t1", "title": "Internship hunt", "duration_minutes": 90, "is_break": False},
    {"id": "b1", "title": "Break #1", "duration_minutes": 20, "is_break": True},
    {"id": "t2", "title": "Apply for jobs", "duration_minutes": 90, "is_break": False},
    {"id": "b2", "title": "Break #2", "duration_minutes": 20, "is_break": True},
    {"id": "t3", "title": "B.Tech Subjects", "duration_minutes": 90, "is_break": False,
     "sub_items": ["Subject 1", "Subject 2", "Subject 3"]},
    {"id": "l", "title": "Lunch + recharge", "duration_minutes": 50, "is_break": True},
    {"id": "t4", "title": "DSA + NxtWave revision", "duration_minutes": 90, "is_break": False},
    {"id": "b3", "title": "Break #3", "duration_minutes": 20, "is_break": True},
    {"id": "t5", "title": "Embedded Systems", "duration_minutes": 90, "is_break": False},
    {"id": "b4", "title": "Break #4", "duration_minutes": 20, "is_break": True},
    {"id": "t3c", "title": "B.Tech Practice", "duration_minutes": 90, "is_break": False},
)


def clone_template(template=DEFAULT_TEMPLATE) -> List[Block]:
    """
    Новая копия шаблона дня.
    Каждый вызов возвращает новые объекты Block и новые списки sub_items,
    done у всех блоков False.
    """
    blocks = []
    for record in template:
        data: Dict[str, Any] = dict(record)
        data["done"] = False
        blocks.append(Block.from_dict(data))
    return blocks


def new_block_template() -> Dict[str, Any]:
    """Параметры блока, добавляемого кнопкой «+ Task»"""
    return {
        "title": NEW_BLOCK_TITLE,
        "duration_minutes": NEW_BLOCK_DURATION_MIN,
        "is_break": False,
    }
