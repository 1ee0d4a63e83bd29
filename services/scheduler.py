# services/scheduler.py

import logging
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

logger = logging.getLogger(__name__)

BACKUP_JOB_ID = "planner_backup"


def create_scheduler() -> AsyncIOScheduler:
    return AsyncIOScheduler()


def schedule_periodic_backup(scheduler: AsyncIOScheduler, store, interval_hours: int) -> Optional[str]:
    """Периодическая gzip-копия истории; interval_hours <= 0 отключает задачу"""
    if interval_hours <= 0:
        logger.info("💾 Автобэкап по расписанию отключён")
        return None

    def run_backup():
        path = store.backup()
        if path:
            logger.info(f"💾 Плановый бэкап: {path.name}")

    scheduler.add_job(
        run_backup,
        IntervalTrigger(hours=interval_hours),
        id=BACKUP_JOB_ID,
        replace_existing=True,
    )
    logger.info(f"⏰ Автобэкап каждые {interval_hours} ч")
    return BACKUP_JOB_ID


def shutdown_scheduler(scheduler: AsyncIOScheduler) -> None:
    if scheduler.running:
        scheduler.shutdown(wait=False)
