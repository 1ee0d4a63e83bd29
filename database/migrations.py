# database/migrations.py
"""
Приведение истории к каноническому виду.

Старые версии планировщика хранили историю в localStorage браузера:
ключи дня в формате toDateString() ("Sat Oct 18 2025") или
toLocaleDateString() ("10/18/2025"), поля в camelCase (durationMin, isBreak,
subtasks), числовые id. normalize_history() переводит такие данные
в формат {YYYY-MM-DD: [block record, ...]}.
"""

import json
import logging
import math
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from core.template import NEW_BLOCK_DURATION_MIN
from utils.datetime_utils import DATE_KEY_RE, date_key

logger = logging.getLogger(__name__)

# Форматы ключей, которые встречались в старых версиях (порядок важен)
LEGACY_KEY_FORMATS = (
    "%a %b %d %Y",   # Date.toDateString()
    "%m/%d/%Y",      # toLocaleDateString() en-US
    "%d/%m/%Y",      # toLocaleDateString() en-GB
    "%d.%m.%Y",      # toLocaleDateString() ru-RU / de-DE
    "%Y/%m/%d",
)

LEGACY_FIELD_NAMES = {
    "durationMin": "duration_minutes",
    "isBreak": "is_break",
    "subtasks": "sub_items",
    "subItems": "sub_items",
}


def normalize_key(key: str) -> Optional[str]:
    """Ключ дня -> YYYY-MM-DD, либо None если формат не распознан"""
    if not isinstance(key, str):
        return None

    key = key.strip()
    if DATE_KEY_RE.match(key):
        try:
            return date_key(datetime.strptime(key, "%Y-%m-%d").date())
        except ValueError:
            return None

    for fmt in LEGACY_KEY_FORMATS:
        try:
            return date_key(datetime.strptime(key, fmt).date())
        except ValueError:
            continue

    return None


def normalize_block_record(record: Dict[str, Any]) -> Dict[str, Any]:
    """camelCase-поля и числовые id -> текущий формат записи блока"""
    if not isinstance(record, dict):
        return record

    result = {}
    for name, value in record.items():
        result[LEGACY_FIELD_NAMES.get(name, name)] = value

    # NaN и Infinity оставляем как есть: Block отклонит такой id
    block_id = result.get("id")
    if isinstance(block_id, int) and not isinstance(block_id, bool):
        result["id"] = str(block_id)
    elif isinstance(block_id, float) and math.isfinite(block_id):
        result["id"] = str(int(block_id))

    # В самой ранней версии длительностей не было
    result.setdefault("duration_minutes", NEW_BLOCK_DURATION_MIN)

    return result


def normalize_history(raw: Dict[str, Any]) -> Tuple[Dict[str, List[Dict[str, Any]]], int]:
    """
    Нормализовать сырую историю.
    Возвращает (история, количество изменённых/отброшенных ключей).
    При совпадении нормализованных ключей приоритет у канонического ключа.
    """
    history: Dict[str, List[Dict[str, Any]]] = {}
    changes = 0

    # Канонические ключи первыми, чтобы при конфликте победили они
    items = sorted(raw.items(), key=lambda kv: not (isinstance(kv[0], str) and DATE_KEY_RE.match(kv[0])))

    for key, records in items:
        canonical = normalize_key(key)
        if canonical is None:
            logger.warning(f"⚠️ Нераспознанный ключ дня отброшен: {key!r}")
            changes += 1
            continue

        if canonical != key:
            changes += 1

        if canonical in history:
            logger.warning(f"⚠️ Ключ {key!r} совпал с уже загруженным днём {canonical}, пропущен")
            changes += 1
            continue

        if isinstance(records, list):
            try:
                normalized = [normalize_block_record(r) for r in records]
            except (TypeError, ValueError, OverflowError) as e:
                logger.warning(f"⚠️ День {key!r} отброшен при нормализации: {e}")
                changes += 1
                continue
            if normalized != records:
                changes += 1
            history[canonical] = normalized
        else:
            history[canonical] = records

    return history, changes


def import_legacy_file(source: Path) -> Dict[str, List[Dict[str, Any]]]:
    """
    Прочитать экспорт localStorage ('plannerHistory') из файла.
    Поддерживается как сама история, так и дамп {"plannerHistory": "<json>"}.
    """
    with open(source, "r", encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict) and "plannerHistory" in data:
        data = data["plannerHistory"]
        if isinstance(data, str):
            data = json.loads(data)

    if not isinstance(data, dict):
        raise ValueError("Ожидался JSON-объект с историей по дням")

    history, changes = normalize_history(data)
    logger.info(f"📥 Импортировано дней: {len(history)}, нормализовано записей: {changes}")
    return history
