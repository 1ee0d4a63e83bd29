#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Powerhouse Planner - Dashboard Dependencies
Провайдеры зависимостей для FastAPI приложения
"""

import logging

from fastapi import Depends, HTTPException, Request, status

from models.block import ValidationError
from services.planner_service import PlannerService

logger = logging.getLogger(__name__)

def get_planner(request: Request) -> PlannerService:
    """Сессия планировщика, созданная при сборке приложения"""
    planner = getattr(request.app.state, "planner", None)
    if planner is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Планировщик не инициализирован"
        )
    return planner

def get_day_planner(date_key: str, planner: PlannerService = Depends(get_planner)) -> PlannerService:
    """Переключает сессию на день из пути; неверный ключ -> 400"""
    try:
        planner.select_date(date_key)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return planner

def require_block(block_id: str, planner: PlannerService = Depends(get_day_planner)) -> PlannerService:
    if planner.get_block(block_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Блок {block_id} не найден"
        )
    return planner
