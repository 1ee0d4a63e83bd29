from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from services.planner_service import PlannerService
from shared.models import (
    AddBlockResponse, DayResponse, RenameRequest, StartHourRequest, StartHourResponse, SubItemRequest
)
from ..dependencies import get_day_planner, get_planner, require_block

router = APIRouter(prefix="/api", tags=["days"])

@router.get("/days/{date_key}", response_model=DayResponse)
async def get_day(planner: PlannerService = Depends(get_day_planner)):
    """
    Расписание дня с прогрессом. Просмотр ничего не сохраняет
    """
    return DayResponse.from_planner(planner)

@router.post("/days/{date_key}/blocks", response_model=AddBlockResponse)
async def add_block(planner: PlannerService = Depends(get_day_planner)):
    block_id = planner.add_block()
    return AddBlockResponse(id=block_id, day=DayResponse.from_planner(planner))

@router.delete("/days/{date_key}/blocks/{block_id}", response_model=DayResponse)
async def remove_block(block_id: str, planner: PlannerService = Depends(require_block)):
    planner.remove_block(block_id)
    return DayResponse.from_planner(planner)

@router.post("/days/{date_key}/blocks/{block_id}/toggle", response_model=DayResponse)
async def toggle_block(block_id: str, planner: PlannerService = Depends(require_block)):
    planner.toggle_done(block_id)
    return DayResponse.from_planner(planner)

@router.patch("/days/{date_key}/blocks/{block_id}", response_model=DayResponse)
async def rename_block(block_id: str, body: RenameRequest,
                       planner: PlannerService = Depends(require_block)):
    planner.rename(block_id, body.title)
    return DayResponse.from_planner(planner)

@router.put("/days/{date_key}/blocks/{block_id}/sub-items/{index}", response_model=DayResponse)
async def edit_sub_item(block_id: str, index: int, body: SubItemRequest,
                        planner: PlannerService = Depends(require_block)):
    """
    Индекс вне диапазона подпунктов - без изменений
    """
    planner.edit_sub_item(block_id, index, body.value)
    return DayResponse.from_planner(planner)

@router.post("/days/{date_key}/reset", response_model=DayResponse)
async def reset_day(planner: PlannerService = Depends(get_day_planner)):
    planner.reset_day()
    return DayResponse.from_planner(planner)

@router.post("/days/{date_key}/unmark", response_model=DayResponse)
async def unmark_all(planner: PlannerService = Depends(get_day_planner)):
    planner.unmark_all()
    return DayResponse.from_planner(planner)

@router.get("/days/{date_key}/export", response_class=PlainTextResponse)
async def export_day(planner: PlannerService = Depends(get_day_planner)):
    return PlainTextResponse(
        planner.export_text(),
        headers={"Content-Disposition": f'attachment; filename="{planner.export_filename()}"'}
    )

@router.put("/settings/start-hour", response_model=StartHourResponse)
async def set_start_hour(body: StartHourRequest, planner: PlannerService = Depends(get_planner)):
    return StartHourResponse(start_hour=planner.set_start_hour(body.hour))
