from datetime import date, datetime, timedelta
from typing import Union
import re

import pytz

from models.block import ValidationError

DATE_KEY_FORMAT = "%Y-%m-%d"
DATE_KEY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def resolve_tz(tz_name: str):
    try:
        return pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError:
        raise ValueError(f"Неизвестная временная зона: {tz_name}")


def now_in(tz_name: str = "UTC") -> datetime:
    return datetime.now(resolve_tz(tz_name))


def today_in(tz_name: str = "UTC") -> date:
    return now_in(tz_name).date()


def date_key(d: date) -> str:
    """Канонический ключ дня, не зависящий от локали: YYYY-MM-DD"""
    return d.isoformat()


def parse_date_key(key: str) -> date:
    if not isinstance(key, str) or not DATE_KEY_RE.match(key.strip()):
        raise ValidationError(f"Неверный формат даты: {key!r} (ожидается YYYY-MM-DD)")
    try:
        return datetime.strptime(key.strip(), DATE_KEY_FORMAT).date()
    except ValueError:
        raise ValidationError(f"Несуществующая дата: {key!r}")


def to_date(value: Union[date, str]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_date_key(value)


def format_date(d: date, fmt: str = "%a %d %b %Y") -> str:
    return d.strftime(fmt)


def add_days(d: date, days: int) -> date:
    return d + timedelta(days=days)
