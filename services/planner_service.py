#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Powerhouse Planner v1.0 - Planner Service
Сессия планировщика: активный день, час начала и все действия пользователя

Хранилище передаётся в конструктор; сервис держит рабочую копию
активного дня и сохраняет её после каждого изменения. Просмотр дня
(выбор даты, календарь) ничего не сохраняет - снимок появляется
в истории только после первого изменения.
"""

import logging
from datetime import date
from typing import Callable, List, Optional, Set, Union

from models.block import Block, copy_blocks
from models.enums import ClockFormat, WeekStart
from core import schedule as ops
from core.calendar_index import CalendarCell, month_progress
from core.progress import progress, progress_counts
from core.timeline import ScheduledBlock, derive_times, start_hour_to_minutes
from database.manager import DayStore
from services.data_export import export_filename, export_text
from utils.datetime_utils import date_key, to_date
from utils.validators import clamp_start_hour

logger = logging.getLogger(__name__)


class PlannerService:
    """
    Активная сессия планировщика одного пользователя.

    Возможности:
    - Выбор даты и часа начала дня
    - Отметка, переименование, подпункты, добавление и удаление блоков
    - Сброс дня, снятие всех отметок, очистка истории
    - Расписание, прогресс, календарь месяца и экспорт
    """

    def __init__(
        self,
        store: DayStore,
        start_hour: int = 8,
        clock_format: ClockFormat = ClockFormat.H24,
        week_start: WeekStart = WeekStart.SUNDAY,
        today: Optional[Callable[[], date]] = None,
    ):
        self.store = store
        self.clock_format = clock_format
        self.week_start = week_start
        self._today = today or date.today
        self._start_hour = clamp_start_hour(start_hour)
        self._issued_ids: Set[str] = set()

        self.selected_date: date = self._today()
        self._blocks: List[Block] = self.store.load(self.date_key)

    # ===== СОСТОЯНИЕ =====

    @property
    def date_key(self) -> str:
        return date_key(self.selected_date)

    @property
    def start_hour(self) -> int:
        return self._start_hour

    @property
    def blocks(self) -> List[Block]:
        """Копия рабочего списка активного дня"""
        return copy_blocks(self._blocks)

    def get_block(self, block_id: str) -> Optional[Block]:
        block = ops.find_block(self._blocks, block_id)
        return block.copy() if block else None

    def set_start_hour(self, hour) -> int:
        self._start_hour = clamp_start_hour(hour)
        logger.debug(f"⏰ Час начала: {self._start_hour}")
        return self._start_hour

    def select_date(self, value: Union[date, str]) -> date:
        """Переключиться на день; только чтение, в историю ничего не пишется"""
        self.selected_date = to_date(value)
        self._blocks = self.store.load(self.date_key)
        logger.debug(f"📅 Выбран день {self.date_key}")
        return self.selected_date

    def go_today(self) -> date:
        return self.select_date(self._today())

    # ===== ИЗМЕНЕНИЯ =====

    def _commit(self, updated: List[Block]) -> bool:
        """Сохранить новый список, если он отличается от текущего"""
        if updated == self._blocks:
            return False
        self.store.save(self.date_key, updated)
        self._blocks = updated
        return True

    def toggle_done(self, block_id: str) -> bool:
        return self._commit(ops.toggle_done(self._blocks, block_id))

    def rename(self, block_id: str, title: str) -> bool:
        return self._commit(ops.rename_block(self._blocks, block_id, title))

    def edit_sub_item(self, block_id: str, index: int, value: str) -> bool:
        return self._commit(ops.edit_sub_item(self._blocks, block_id, index, value))

    def add_block(self) -> str:
        updated, block_id = ops.add_block(self._blocks, existing_ids=self._issued_ids)
        self._issued_ids.add(block_id)
        self._commit(updated)
        logger.info(f"➕ Добавлен блок {block_id} в день {self.date_key}")
        return block_id

    def remove_block(self, block_id: str) -> bool:
        removed = self._commit(ops.remove_block(self._blocks, block_id))
        if removed:
            logger.info(f"🗑️ Удалён блок {block_id} из дня {self.date_key}")
        return removed

    def reset_day(self) -> None:
        """Шаблон дня заново; сохраняется даже если день ещё не трогали"""
        fresh = ops.reset_to_template()
        self.store.save(self.date_key, fresh)
        self._blocks = fresh
        logger.info(f"🔄 День {self.date_key} сброшен к шаблону")

    def unmark_all(self) -> bool:
        return self._commit(ops.unmark_all(self._blocks))

    def clear_all_history(self) -> None:
        """Удалить всю историю. Подтверждение запрашивает интерфейс, не сервис"""
        self.store.clear_all()
        self._blocks = ops.reset_to_template()
        logger.warning("🗑️ Вся история планировщика очищена")

    # ===== ЧТЕНИЕ =====

    def schedule(self) -> List[ScheduledBlock]:
        return derive_times(start_hour_to_minutes(self._start_hour), self._blocks)

    def progress(self) -> int:
        return progress(self._blocks)

    def progress_counts(self):
        return progress_counts(self._blocks)

    def calendar(self, year: Optional[int] = None, month: Optional[int] = None,
                 pad_weeks: bool = False) -> List[Optional[CalendarCell]]:
        """Календарь месяца (по умолчанию - месяц выбранного дня)"""
        year = year or self.selected_date.year
        month = month or self.selected_date.month
        return month_progress(
            self.store,
            year,
            month,
            week_start=self.week_start,
            pad_weeks=pad_weeks,
            overrides={self.date_key: self._blocks},
        )

    def stored_days_count(self) -> int:
        return len(self.store)

    def export_text(self) -> str:
        return export_text(self.schedule(), self.clock_format)

    def export_filename(self) -> str:
        return export_filename(self.selected_date)
