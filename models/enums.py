# models/enums.py

from enum import Enum


class ClockFormat(Enum):
    """Формат отображения времени"""
    H24 = "24h"
    H12 = "12h"


class WeekStart(Enum):
    """Первый день недели в календаре (значение = weekday() из datetime)"""
    MONDAY = 0
    SUNDAY = 6

    @classmethod
    def from_name(cls, name: str) -> "WeekStart":
        try:
            return cls[name.strip().upper()]
        except KeyError:
            valid = [e.name.lower() for e in cls]
            raise ValueError(f"WEEK_START должен быть одним из: {valid}")
