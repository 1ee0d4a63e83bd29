#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Powerhouse Planner v1.0 - Calendar Index
Сетка месяца и прогресс по каждому дню
"""

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

from models.block import Block
from models.enums import WeekStart
from core.progress import progress
from utils.datetime_utils import date_key

DAYS_IN_WEEK = 7


@dataclass(frozen=True)
class CalendarCell:
    """Ячейка календаря с прогрессом дня"""
    day: int
    date_key: str
    progress: int
    stored: bool


def days_in_month(year: int, month: int) -> int:
    """Количество дней месяца (григорианский календарь, с учётом високосных лет)"""
    return calendar.monthrange(year, month)[1]


def leading_blanks(year: int, month: int, week_start: WeekStart = WeekStart.SUNDAY) -> int:
    first_weekday = date(year, month, 1).weekday()
    return (first_weekday - week_start.value) % DAYS_IN_WEEK


def month_cells(
    year: int,
    month: int,
    week_start: WeekStart = WeekStart.SUNDAY,
    pad_weeks: bool = False,
) -> List[Optional[int]]:
    """
    None для дней недели перед 1-м числом, затем 1..N.
    Хвост не дополняется, если не указан pad_weeks (нужно для сетки из полных недель).
    """
    cells: List[Optional[int]] = [None] * leading_blanks(year, month, week_start)
    cells.extend(range(1, days_in_month(year, month) + 1))

    if pad_weeks and len(cells) % DAYS_IN_WEEK:
        cells.extend([None] * (DAYS_IN_WEEK - len(cells) % DAYS_IN_WEEK))

    return cells


def month_progress(
    store,
    year: int,
    month: int,
    week_start: WeekStart = WeekStart.SUNDAY,
    pad_weeks: bool = False,
    overrides: Optional[Dict[str, Sequence[Block]]] = None,
) -> List[Optional[CalendarCell]]:
    """
    Прогресс для каждого дня месяца.
    Только чтение: store.load() не создаёт и не сохраняет снимки для просмотренных дней.
    overrides - рабочие копии (например, активного дня), которые важнее сохранённых.
    """
    overrides = overrides or {}
    result: List[Optional[CalendarCell]] = []

    for day in month_cells(year, month, week_start, pad_weeks):
        if day is None:
            result.append(None)
            continue

        key = date_key(date(year, month, day))
        blocks = overrides.get(key)
        if blocks is None:
            blocks = store.load(key)

        result.append(CalendarCell(
            day=day,
            date_key=key,
            progress=progress(blocks),
            stored=store.has(key),
        ))

    return result


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """Сдвиг месяца: (2025, 12) + 1 -> (2026, 1)"""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def weekday_labels(week_start: WeekStart = WeekStart.SUNDAY) -> List[str]:
    labels = ["M", "T", "W", "T", "F", "S", "S"]
    start = week_start.value
    return labels[start:] + labels[:start]
