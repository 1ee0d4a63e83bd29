# core/timeline.py

from dataclasses import dataclass
from typing import List, Sequence

from models.block import Block
from models.enums import ClockFormat

MINUTES_PER_HOUR = 60
HOURS_PER_DAY = 24


@dataclass(frozen=True)
class ScheduledBlock:
    """Блок с вычисленными минутами начала и конца (от полуночи)"""
    block: Block
    start_minutes: int
    end_minutes: int

    @property
    def duration_minutes(self) -> int:
        return self.end_minutes - self.start_minutes


def start_hour_to_minutes(hour: int) -> int:
    return int(hour) * MINUTES_PER_HOUR


def derive_times(start_minutes: int, blocks: Sequence[Block]) -> List[ScheduledBlock]:
    """
    Накопительная сумма длительностей: конец блока i совпадает с началом блока i+1.
    Курсор не ограничен сутками, перенос через полночь только при форматировании.
    """
    schedule: List[ScheduledBlock] = []
    cursor = int(start_minutes)

    for block in blocks:
        end = cursor + block.duration_minutes
        schedule.append(ScheduledBlock(block=block, start_minutes=cursor, end_minutes=end))
        cursor = end

    return schedule


def format_clock(minutes: int, clock_format: ClockFormat = ClockFormat.H24) -> str:
    """Минуты от полуночи -> строка времени"""
    hour = (minutes // MINUTES_PER_HOUR) % HOURS_PER_DAY
    minute = minutes % MINUTES_PER_HOUR

    if clock_format == ClockFormat.H12:
        suffix = "AM" if hour < 12 else "PM"
        hour12 = hour % 12 or 12
        return f"{hour12:02d}:{minute:02d} {suffix}"

    return f"{hour:02d}:{minute:02d}"


def total_minutes(blocks: Sequence[Block]) -> int:
    return sum(b.duration_minutes for b in blocks)
