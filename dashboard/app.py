#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Powerhouse Planner Dashboard - FastAPI Application
Локальный веб-доступ к планировщику: дни, календарь, экспорт
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dashboard.api import calendar, days, history
from database.manager import DatabaseError
from services.planner_service import PlannerService
from shared.models import HealthCheck

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def create_app(planner: Optional[PlannerService] = None, debug: bool = False) -> FastAPI:
    """Сборка FastAPI приложения вокруг готовой сессии планировщика"""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Управление жизненным циклом приложения"""
        logger.info("🚀 Запуск Powerhouse Planner Dashboard...")
        app.state.started_at = time.time()
        if app.state.planner is not None:
            logger.info(f"📊 Сохранённых дней: {app.state.planner.stored_days_count()}")
        yield
        logger.info("🛑 Остановка Dashboard...")

    app = FastAPI(
        title="Powerhouse Planner Dashboard",
        description="Расписание дня, прогресс и календарь",
        version=VERSION,
        docs_url="/api/docs" if debug else None,
        redoc_url=None,
        openapi_url="/api/openapi.json" if debug else None,
        lifespan=lifespan
    )
    app.state.planner = planner
    app.state.started_at = time.time()

    # ===== MIDDLEWARE =====

    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=r"^http://(localhost|127\.0\.0\.1)(:\d+)?$",
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Логирование запросов и время обработки"""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        logger.info(
            f"{request.method} {request.url.path} "
            f"- {response.status_code} "
            f"- {process_time:.3f}s"
        )
        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        return response

    # ===== ОБРАБОТЧИКИ ОШИБОК =====

    @app.exception_handler(DatabaseError)
    async def database_error_handler(request: Request, exc: DatabaseError):
        logger.error(f"💾 Ошибка хранилища: {exc}")
        return JSONResponse(
            status_code=503,
            content={"detail": "Не удалось сохранить изменения"}
        )

    # ===== РОУТЕРЫ =====

    app.include_router(days.router)
    app.include_router(calendar.router)
    app.include_router(history.router)

    @app.get("/health", response_model=HealthCheck)
    async def health_check():
        """Health check для мониторинга"""
        current = app.state.planner
        data = {"uptime_seconds": round(time.time() - app.state.started_at, 3)}
        if current is not None:
            data.update(current.store.get_stats())
            data["selected_date"] = current.date_key

        return HealthCheck(
            status="healthy" if current is not None else "error",
            service="dashboard",
            version=VERSION,
            timestamp=time.time(),
            data=data
        )

    return app
