# services/data_export.py

import json
from datetime import date
from pathlib import Path
from typing import List, Sequence

from core.timeline import ScheduledBlock, format_clock
from models.enums import ClockFormat


def export_line(item: ScheduledBlock, clock_format: ClockFormat = ClockFormat.H24) -> str:
    """"<начало> - <конец> | <название>" и " | п1, п2" при наличии подпунктов"""
    line = (
        f"{format_clock(item.start_minutes, clock_format)} - "
        f"{format_clock(item.end_minutes, clock_format)} | {item.block.title}"
    )
    if item.block.sub_items is not None:
        line += " | " + ", ".join(item.block.sub_items)
    return line


def export_lines(schedule: Sequence[ScheduledBlock],
                 clock_format: ClockFormat = ClockFormat.H24) -> List[str]:
    return [export_line(item, clock_format) for item in schedule]


def export_text(schedule: Sequence[ScheduledBlock],
                clock_format: ClockFormat = ClockFormat.H24) -> str:
    return "\n".join(export_lines(schedule, clock_format))


def export_filename(day: date) -> str:
    return f"plan-{day.isoformat()}.txt"


def export_history_json(store) -> str:
    return json.dumps(store.export_raw(), ensure_ascii=False, indent=2)


def export_to_json(store, export_dir: Path) -> Path:
    export_dir.mkdir(parents=True, exist_ok=True)
    filename = export_dir / "planner_history_export.json"
    with open(filename, "w", encoding="utf-8") as f:
        json.dump(store.export_raw(), f, ensure_ascii=False, indent=2)
    return filename
