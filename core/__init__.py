"""
Powerhouse Planner v1.0 - Core
Чистая логика: шаблон дня, расписание, прогресс, календарь
"""

from .template import SUB_ITEM_SLOTS, DEFAULT_TEMPLATE, clone_template
from .timeline import ScheduledBlock, derive_times, format_clock
from .progress import progress, progress_counts
from .calendar_index import CalendarCell, month_cells, month_progress, days_in_month

__all__ = [
    'SUB_ITEM_SLOTS',
    'DEFAULT_TEMPLATE',
    'clone_template',
    'ScheduledBlock',
    'derive_times',
    'format_clock',
    'progress',
    'progress_counts',
    'CalendarCell',
    'month_cells',
    'month_progress',
    'days_in_month',
]
