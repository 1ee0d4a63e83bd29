#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Powerhouse Planner v1.0 - Telegram бот
Планировщик дня: блоки расписания, отметки, прогресс и календарь
"""

import argparse
import asyncio
import logging
import signal
import sys
from pathlib import Path
from typing import Optional

from config import PlannerConfig
from bot.application import build_application
from database.backup import BackupManager
from database.migrations import import_legacy_file
from services import ServiceManager
from services.data_export import export_to_json
from services.scheduler import create_scheduler, schedule_periodic_backup, shutdown_scheduler
from utils.logger import setup_logging
from utils.process_lock import ProcessLock

logger = logging.getLogger(__name__)

LOCK_FILE_NAME = "planner.lock"


class PlannerBot:
    """Основной класс Powerhouse Planner"""

    def __init__(self, planner_config: PlannerConfig):
        self.config = planner_config
        self.bot_token = planner_config.require_bot_token()

        logger.info(f"✅ BOT_TOKEN: {self.bot_token[:10]}...")
        logger.info(f"Python: {sys.version}")
        logger.info(f"Окружение: {planner_config.environment.value}")

        self.services = ServiceManager(planner_config)
        self.application = None
        self.scheduler = None
        self._stop_event = asyncio.Event()

    def setup_bot(self):
        """Сборка сервисов и Telegram приложения"""
        logger.info("📂 Загрузка истории планировщика...")
        planner = self.services.initialize_services()

        self.application = build_application(
            self.bot_token,
            planner,
            owner_id=self.config.telegram.owner_user_id,
        )

        if self.config.storage.auto_backup:
            self.scheduler = create_scheduler()
            schedule_periodic_backup(
                self.scheduler,
                self.services.store,
                self.config.storage.backup_interval_hours,
            )

        logger.info("✅ Бот настроен успешно")

    def request_stop(self):
        logger.info("📢 Получен сигнал остановки")
        self._stop_event.set()

    async def start_polling(self):
        """Запуск polling до сигнала остановки"""
        try:
            logger.info("🎯 Запуск polling...")

            await self.application.initialize()
            await self.application.bot.delete_webhook(drop_pending_updates=True)
            await self.application.start()
            await self.application.updater.start_polling(
                drop_pending_updates=True,
                allowed_updates=['message', 'callback_query'],
            )

            if self.scheduler:
                self.scheduler.start()

            logger.info("✅ Polling запущен успешно")
            logger.info("📱 Найдите бота в Telegram и отправьте /start")

            await self._stop_event.wait()
        finally:
            await self._stop()

    async def _stop(self):
        """Остановка бота"""
        if self.scheduler:
            shutdown_scheduler(self.scheduler)

        if self.application:
            if self.application.updater and self.application.updater.running:
                await self.application.updater.stop()
            if self.application.running:
                await self.application.stop()
            await self.application.shutdown()

        if self.services.store:
            self.services.store.backup()

        logger.info("🛑 Бот остановлен корректно")


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Powerhouse Planner - Telegram бот")
    parser.add_argument(
        "--import-legacy",
        metavar="FILE",
        type=Path,
        help="импортировать историю из старого JSON-файла и выйти",
    )
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="при импорте заменять уже сохранённые дни",
    )
    parser.add_argument(
        "--export-history",
        action="store_true",
        help="выгрузить всю историю в JSON (EXPORT_DIR) и выйти",
    )
    parser.add_argument(
        "--restore-backup",
        metavar="FILE",
        type=Path,
        help="восстановить файл истории из резервной копии и выйти",
    )
    return parser.parse_args(argv)


def import_history(planner_config: PlannerConfig, source: Path, overwrite: bool) -> int:
    """Импорт устаревшего файла истории в текущее хранилище"""
    services = ServiceManager(planner_config)
    services.initialize_services()
    history = import_legacy_file(source)
    imported = services.store.import_days(history, overwrite=overwrite)
    logger.info(f"📥 Импортировано дней: {imported} из {len(history)}")
    return imported


def export_history(planner_config: PlannerConfig) -> Path:
    services = ServiceManager(planner_config)
    services.initialize_services()
    path = export_to_json(services.store, planner_config.export_dir)
    logger.info(f"📤 История выгружена: {path} ({len(services.store)} дней)")
    return path


def restore_history(planner_config: PlannerConfig, backup_path: Path) -> int:
    """Замена файла истории резервной копией; возвращает число дней в ней"""
    manager = BackupManager(planner_config.storage.backup_dir)
    if planner_config.storage.path.exists():
        manager.create_backup(planner_config.storage.path, label="before_restore")
    manager.restore_backup(backup_path, planner_config.storage.path)

    services = ServiceManager(planner_config)
    services.initialize_services()
    return len(services.store)


async def run_bot(planner_config: PlannerConfig):
    bot = PlannerBot(planner_config)
    bot.setup_bot()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, bot.request_stop)

    await bot.start_polling()


def main(argv: Optional[list] = None) -> int:
    """Главная функция запуска бота"""
    planner_config = PlannerConfig()
    setup_logging(planner_config)
    planner_config.ensure_directories()
    args = parse_args(argv)
    logger.debug(f"Конфигурация: {planner_config.to_dict()}")

    lock = ProcessLock(planner_config.data_dir / LOCK_FILE_NAME)
    if not lock.acquire():
        logger.error("❌ История уже используется другим процессом (бот или дашборд)")
        return 1

    try:
        if args.import_legacy:
            try:
                import_history(planner_config, args.import_legacy, args.overwrite)
            except (OSError, ValueError) as e:
                logger.error(f"❌ Ошибка импорта {args.import_legacy}: {e}")
                return 1
            return 0

        if args.export_history:
            try:
                export_history(planner_config)
            except OSError as e:
                logger.error(f"❌ Ошибка выгрузки истории: {e}")
                return 1
            return 0

        if args.restore_backup:
            try:
                days = restore_history(planner_config, args.restore_backup)
            except OSError as e:
                logger.error(f"❌ Ошибка восстановления {args.restore_backup}: {e}")
                return 1
            logger.info(f"♻️ История восстановлена: {days} дней")
            return 0

        logger.info("🚀 Запуск Powerhouse Planner v1.0...")
        asyncio.run(run_bot(planner_config))
        return 0

    except KeyboardInterrupt:
        logger.info("👋 Бот остановлен пользователем")
        return 0
    except ValueError as e:
        logger.error(f"❌ Ошибка конфигурации: {e}")
        return 1
    finally:
        lock.release()


# ===== ТОЧКА ВХОДА =====

if __name__ == "__main__":
    sys.exit(main())
