from typing import Any, Optional

MIN_START_HOUR = 0
MAX_START_HOUR = 23
MAX_TITLE_LENGTH = 100


def clamp_start_hour(value: Any) -> int:
    """Час начала дня: нечисловое значение -> 0, затем ограничение 0..23"""
    try:
        hour = int(float(str(value).strip() or 0))
    except (TypeError, ValueError, OverflowError):
        hour = 0
    return max(MIN_START_HOUR, min(MAX_START_HOUR, hour))


def is_valid_block_title(title: str) -> bool:
    return isinstance(title, str) and 1 <= len(title.strip()) <= MAX_TITLE_LENGTH


def clean_title(title: str) -> Optional[str]:
    """Обрезанный заголовок или None, если он пустой или слишком длинный"""
    if not is_valid_block_title(title):
        return None
    return title.strip()
