from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Dict, Any, Union

from core.calendar_index import CalendarCell
from core.timeline import ScheduledBlock, format_clock
from models.enums import ClockFormat
from utils.validators import MAX_TITLE_LENGTH

# Блоки дня
class BlockSchema(BaseModel):
    id: str
    title: str
    duration_minutes: int
    is_break: bool = False
    done: bool = False
    sub_items: Optional[List[str]] = None

class ScheduledBlockSchema(BlockSchema):
    start_minutes: int
    end_minutes: int
    start: str
    end: str

    @classmethod
    def from_scheduled(cls, item: ScheduledBlock, clock_format: ClockFormat = ClockFormat.H24):
        return cls(
            **item.block.to_dict(),
            start_minutes=item.start_minutes,
            end_minutes=item.end_minutes,
            start=format_clock(item.start_minutes, clock_format),
            end=format_clock(item.end_minutes, clock_format),
        )

class DayResponse(BaseModel):
    date_key: str
    start_hour: int
    progress: int
    done: int
    total: int
    stored: bool
    blocks: List[ScheduledBlockSchema]

    @classmethod
    def from_planner(cls, planner):
        done, total = planner.progress_counts()
        return cls(
            date_key=planner.date_key,
            start_hour=planner.start_hour,
            progress=planner.progress(),
            done=done,
            total=total,
            stored=planner.store.has(planner.date_key),
            blocks=[ScheduledBlockSchema.from_scheduled(item, planner.clock_format)
                    for item in planner.schedule()],
        )

class AddBlockResponse(BaseModel):
    id: str
    day: DayResponse

# Запросы изменения
class RenameRequest(BaseModel):
    title: str

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        v = v.strip()
        if not 1 <= len(v) <= MAX_TITLE_LENGTH:
            raise ValueError(f'Название должно быть от 1 до {MAX_TITLE_LENGTH} символов')
        return v

class SubItemRequest(BaseModel):
    value: str = Field("", max_length=MAX_TITLE_LENGTH)

class StartHourRequest(BaseModel):
    hour: Union[int, float, str]

class StartHourResponse(BaseModel):
    start_hour: int

# Календарь
class CalendarCellSchema(BaseModel):
    day: int
    date_key: str
    progress: int
    stored: bool

    @classmethod
    def from_cell(cls, cell: CalendarCell):
        return cls(day=cell.day, date_key=cell.date_key, progress=cell.progress, stored=cell.stored)

class CalendarResponse(BaseModel):
    year: int
    month: int
    week_start: str
    cells: List[Optional[CalendarCellSchema]]

# История
class ClearHistoryResponse(BaseModel):
    cleared: bool
    removed_days: int

# Служебные
class HealthCheck(BaseModel):
    status: str
    service: str
    version: str
    timestamp: float
    data: Optional[Dict[str, Any]] = None
