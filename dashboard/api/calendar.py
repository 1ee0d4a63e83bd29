from fastapi import APIRouter, Depends, Path

from services.planner_service import PlannerService
from shared.models import CalendarCellSchema, CalendarResponse
from ..dependencies import get_planner

router = APIRouter(prefix="/api/calendar", tags=["calendar"])

@router.get("/{year}/{month}", response_model=CalendarResponse)
async def get_month(
    year: int = Path(..., ge=1, le=9999),
    month: int = Path(..., ge=1, le=12),
    planner: PlannerService = Depends(get_planner)
):
    """
    Прогресс по дням месяца; None - пустые ячейки перед первым числом
    """
    cells = planner.calendar(year, month)
    return CalendarResponse(
        year=year,
        month=month,
        week_start=planner.week_start.name.lower(),
        cells=[CalendarCellSchema.from_cell(c) if c is not None else None for c in cells]
    )
