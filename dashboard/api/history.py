import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from services.data_export import export_history_json
from services.planner_service import PlannerService
from shared.models import ClearHistoryResponse
from ..dependencies import get_planner

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/history", tags=["history"])

@router.get("/export")
async def export_history(planner: PlannerService = Depends(get_planner)):
    """Вся сохранённая история одним JSON-файлом"""
    return Response(
        content=export_history_json(planner.store),
        media_type="application/json",
        headers={"Content-Disposition": 'attachment; filename="planner_history_export.json"'},
    )

@router.delete("", response_model=ClearHistoryResponse)
async def clear_history(
    confirm: bool = Query(False),
    planner: PlannerService = Depends(get_planner)
):
    """
    Удалить всю историю. Без confirm=true запрос отклоняется
    """
    if not confirm:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Очистка истории требует confirm=true"
        )
    removed = planner.stored_days_count()
    planner.clear_all_history()
    logger.warning(f"🗑️ История очищена через дашборд ({removed} дней)")
    return ClearHistoryResponse(cleared=True, removed_days=removed)
