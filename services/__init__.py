# services/__init__.py

"""
Модуль сервисов Powerhouse Planner v1.0

Сборка хранилища истории, менеджера бэкапов и сессии планировщика
из конфигурации.
"""

import logging
from datetime import date
from typing import Optional

from database.backup import BackupManager
from database.manager import DayStore
from utils.datetime_utils import today_in

from .planner_service import PlannerService

logger = logging.getLogger(__name__)


class ServiceManager:
    """
    Менеджер сервисов планировщика

    Обеспечивает:
    - Инициализацию хранилища и бэкапов в нужном порядке
    - Создание сессии планировщика с параметрами из конфигурации
    - Сводку состояния для health-check
    """

    def __init__(self, planner_config):
        self.config = planner_config
        self.store: Optional[DayStore] = None
        self.backup_manager: Optional[BackupManager] = None
        self.planner: Optional[PlannerService] = None
        self.initialized = False

    def initialize_services(self) -> PlannerService:
        logger.info("🔧 Инициализация сервисов планировщика...")

        if self.config.storage.auto_backup:
            self.backup_manager = BackupManager(
                self.config.storage.backup_dir,
                max_backups=self.config.storage.max_backups,
            )

        self.store = DayStore(
            self.config.storage.path,
            backup_manager=self.backup_manager,
            capacity_warn_bytes=self.config.storage.capacity_warn_bytes,
        )

        schedule = self.config.schedule
        self.planner = PlannerService(
            self.store,
            start_hour=schedule.default_start_hour,
            clock_format=schedule.clock_format,
            week_start=schedule.week_start,
            today=self._today_factory(schedule.timezone),
        )

        self.initialized = True
        logger.info("✅ Сервисы инициализированы")
        return self.planner

    @staticmethod
    def _today_factory(timezone: str):
        def today() -> date:
            return today_in(timezone)
        return today

    def health_check(self) -> dict:
        """Проверка состояния сервисов"""
        if not self.initialized:
            return {"status": "error", "services": {}}

        return {
            "status": "healthy",
            "services": {
                "store": {"status": "healthy", **self.store.get_stats()},
                "backups": {
                    "enabled": self.backup_manager is not None,
                    "count": len(self.backup_manager.list_backups()) if self.backup_manager else 0,
                },
                "planner": {
                    "status": "healthy",
                    "selected_date": self.planner.date_key,
                    "start_hour": self.planner.start_hour,
                },
            },
        }


__all__ = [
    'PlannerService',
    'ServiceManager',
]
