#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Powerhouse Planner v1.0 - Configuration
Централизованная конфигурация с валидацией
"""

import os
import sys
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass
from enum import Enum

import pytz

from models.enums import ClockFormat, WeekStart


class Environment(Enum):
    """Среды выполнения"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"

class LogLevel(Enum):
    """Уровни логирования"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

@dataclass
class StorageConfig:
    """Конфигурация хранилища истории"""
    path: Path
    backup_dir: Path
    backup_interval_hours: int = 6
    max_backups: int = 10
    auto_backup: bool = True
    capacity_warn_bytes: int = 5 * 1024 * 1024

@dataclass
class TelegramConfig:
    """Конфигурация Telegram бота"""
    bot_token: Optional[str] = None
    owner_user_id: Optional[int] = None

@dataclass
class ServerConfig:
    """Конфигурация веб-дашборда"""
    host: str = "127.0.0.1"
    port: int = 8080
    debug_mode: bool = False

@dataclass
class ScheduleConfig:
    """Параметры расписания по умолчанию"""
    default_start_hour: int = 8
    timezone: str = "UTC"
    clock_format: ClockFormat = ClockFormat.H24
    week_start: WeekStart = WeekStart.SUNDAY


def _env_bool(key: str, default: str) -> bool:
    return os.getenv(key, default).lower() == 'true'


class PlannerConfig:
    """Главный класс конфигурации"""

    def __init__(self):
        self.environment = Environment(os.getenv('ENVIRONMENT', 'development'))
        self._load_config()
        self._validate_config()

    def _load_config(self):
        """Загрузка конфигурации из переменных окружения"""

        # Директории
        self.data_dir = Path(os.getenv('DATA_DIR', 'data'))
        self.export_dir = Path(os.getenv('EXPORT_DIR', 'exports'))
        self.backup_dir = Path(os.getenv('BACKUP_DIR', 'backups'))
        self.log_dir = Path(os.getenv('LOG_DIR', 'logs'))

        # Хранилище
        self.storage = StorageConfig(
            path=self.data_dir / os.getenv('HISTORY_FILE', 'planner_history.json'),
            backup_dir=self.backup_dir,
            backup_interval_hours=int(os.getenv('BACKUP_INTERVAL_HOURS', 6)),
            max_backups=int(os.getenv('MAX_BACKUPS', 10)),
            auto_backup=_env_bool('AUTO_BACKUP', 'true'),
            capacity_warn_bytes=int(os.getenv('HISTORY_WARN_BYTES', 5 * 1024 * 1024))
        )

        # Telegram
        owner = os.getenv('OWNER_USER_ID')
        self.telegram = TelegramConfig(
            bot_token=os.getenv('BOT_TOKEN'),
            owner_user_id=int(owner) if owner else None
        )

        # Дашборд
        self.server = ServerConfig(
            host=os.getenv('HOST', '127.0.0.1'),
            port=int(os.getenv('PORT', 8080)),
            debug_mode=_env_bool('DEBUG_MODE', 'false')
        )

        # Расписание
        self.schedule = ScheduleConfig(
            default_start_hour=int(os.getenv('DEFAULT_START_HOUR', 8)),
            timezone=os.getenv('TIMEZONE', 'UTC'),
            clock_format=ClockFormat(os.getenv('CLOCK_FORMAT', '24h')),
            week_start=WeekStart.from_name(os.getenv('WEEK_START', 'sunday'))
        )

        # Логирование
        self.log_level = LogLevel(os.getenv('LOG_LEVEL', 'INFO').upper())
        self.log_to_file = _env_bool('LOG_TO_FILE', 'true')
        self.log_format = os.getenv(
            'LOG_FORMAT',
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
        )

    def _get_required_env(self, key: str) -> str:
        """Получение обязательной переменной окружения"""
        value = os.getenv(key)
        if not value:
            raise ValueError(f"Обязательная переменная окружения {key} не найдена!")
        return value

    def _validate_config(self):
        """Валидация конфигурации"""
        errors = []

        if not 0 <= self.schedule.default_start_hour <= 23:
            errors.append(f"DEFAULT_START_HOUR={self.schedule.default_start_hour} вне диапазона 0-23")

        if self.schedule.timezone not in pytz.all_timezones_set:
            errors.append(f"TIMEZONE '{self.schedule.timezone}' неизвестна")

        if not 1 <= self.server.port <= 65535:
            errors.append(f"Порт {self.server.port} вне допустимого диапазона (1-65535)")

        if self.storage.max_backups < 1:
            errors.append("MAX_BACKUPS должен быть положительным числом")

        if self.telegram.owner_user_id is not None and self.telegram.owner_user_id <= 0:
            errors.append("OWNER_USER_ID должен быть положительным числом")

        if errors:
            raise ValueError("Ошибки конфигурации:\n" + "\n".join(f"• {error}" for error in errors))

    def require_bot_token(self) -> str:
        """Токен нужен только для запуска бота"""
        return self._get_required_env('BOT_TOKEN')

    def ensure_directories(self):
        """Создание необходимых директорий"""
        directories = [
            self.data_dir,
            self.export_dir,
            self.backup_dir,
        ]
        if self.log_to_file:
            directories.append(self.log_dir)

        for directory in directories:
            directory.mkdir(parents=True, exist_ok=True)

    def get_logging_config(self) -> Dict[str, Any]:
        """Получение конфигурации логирования"""
        handlers = ['console']
        if self.log_to_file:
            handlers.append('file')

        logging_config = {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'default': {
                    'format': self.log_format,
                    'datefmt': '%Y-%m-%d %H:%M:%S'
                }
            },
            'handlers': {
                'console': {
                    'class': 'logging.StreamHandler',
                    'level': self.log_level.value,
                    'formatter': 'default',
                    'stream': sys.stdout
                }
            },
            'loggers': {
                '': {
                    'level': self.log_level.value,
                    'handlers': handlers,
                    'propagate': False
                },
                'httpx': {
                    'level': 'WARNING',
                    'handlers': handlers,
                    'propagate': False
                },
                'telegram': {
                    'level': 'WARNING',
                    'handlers': handlers,
                    'propagate': False
                },
                'apscheduler': {
                    'level': 'WARNING',
                    'handlers': handlers,
                    'propagate': False
                }
            }
        }

        if self.log_to_file:
            logging_config['handlers']['file'] = {
                'class': 'logging.handlers.RotatingFileHandler',
                'level': self.log_level.value,
                'formatter': 'default',
                'filename': str(self.log_dir / f"planner_{self.environment.value}.log"),
                'maxBytes': 10485760,  # 10MB
                'backupCount': 5,
                'encoding': 'utf-8'
            }

        return logging_config

    def is_development(self) -> bool:
        return self.environment == Environment.DEVELOPMENT

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация конфигурации в словарь (без секретов)"""
        token = self.telegram.bot_token
        return {
            'environment': self.environment.value,
            'telegram': {
                'bot_token': token[:10] + "..." if token else None,
                'owner_user_id': self.telegram.owner_user_id
            },
            'server': {
                'host': self.server.host,
                'port': self.server.port,
                'debug_mode': self.server.debug_mode
            },
            'schedule': {
                'default_start_hour': self.schedule.default_start_hour,
                'timezone': self.schedule.timezone,
                'clock_format': self.schedule.clock_format.value,
                'week_start': self.schedule.week_start.name.lower()
            },
            'history_path': str(self.storage.path),
            'log_level': self.log_level.value
        }


__all__ = [
    'PlannerConfig',
    'Environment',
    'LogLevel',
    'StorageConfig',
    'TelegramConfig',
    'ServerConfig',
    'ScheduleConfig'
]
