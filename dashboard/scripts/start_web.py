#!/usr/bin/env python3
"""
Скрипт запуска веб-дашборда Powerhouse Planner
Дашборд и бот пишут в один файл истории, поэтому одновременно работает только один из них
"""

import argparse
import logging
import sys
from typing import Optional

import uvicorn

from config import PlannerConfig
from dashboard.app import create_app
from services import ServiceManager
from utils.logger import setup_logging
from utils.process_lock import ProcessLock

logger = logging.getLogger(__name__)

LOCK_FILE_NAME = "planner.lock"


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Powerhouse Planner Dashboard")
    parser.add_argument("--host", help="адрес (по умолчанию HOST из окружения)")
    parser.add_argument("--port", type=int, help="порт (по умолчанию PORT из окружения)")
    parser.add_argument("--debug", action="store_true", help="включить /api/docs")
    return parser.parse_args(argv)


def main(argv: Optional[list] = None) -> int:
    planner_config = PlannerConfig()
    setup_logging(planner_config)
    planner_config.ensure_directories()
    args = parse_args(argv)

    host = args.host or planner_config.server.host
    port = args.port or planner_config.server.port
    debug = args.debug or planner_config.server.debug_mode or planner_config.is_development()
    logger.debug(f"Конфигурация: {planner_config.to_dict()}")

    lock = ProcessLock(planner_config.data_dir / LOCK_FILE_NAME)
    if not lock.acquire():
        logger.error("❌ История уже используется другим процессом (бот или дашборд)")
        return 1

    try:
        planner = ServiceManager(planner_config).initialize_services()
        app = create_app(planner, debug=debug)

        logger.info(f"🌐 Dashboard доступен на: http://{host}:{port}")
        uvicorn.run(app, host=host, port=port, log_config=None)
        return 0
    finally:
        lock.release()


if __name__ == "__main__":
    sys.exit(main())
