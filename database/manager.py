#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Powerhouse Planner v1.0 - Day Store
Хранилище истории: дата (YYYY-MM-DD) -> снимок дня (список блоков)

Вся история - один JSON-объект в файле. Запись атомарная
(временный файл + replace), поэтому неудачное сохранение одного дня
не портит остальные дни.
"""

import os
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from models.block import Block, ValidationError, blocks_from_dicts, blocks_to_dicts, copy_blocks
from core.template import clone_template
from database.backup import BackupManager
from database.migrations import normalize_history

logger = logging.getLogger(__name__)

# Практический потолок: столько же даёт localStorage браузера
DEFAULT_CAPACITY_WARN_BYTES = 5 * 1024 * 1024

# ===== EXCEPTIONS =====

class DatabaseError(Exception):
    """Базовое исключение для ошибок хранилища"""
    pass

class DatabaseWriteError(DatabaseError):
    """Не удалось записать файл истории"""
    pass

# ===== STORE =====

class DayStore:
    """
    Персистентное отображение ключ дня -> снимок.

    load() всегда отдаёт копию (copy-on-read) и никогда ничего не сохраняет,
    save() хранит собственную копию снимка. data_file=None - только память.
    """

    def __init__(
        self,
        data_file: Optional[Path] = None,
        backup_manager: Optional[BackupManager] = None,
        capacity_warn_bytes: int = DEFAULT_CAPACITY_WARN_BYTES,
    ):
        self.data_file = Path(data_file) if data_file is not None else None
        self.backup_manager = backup_manager
        self.capacity_warn_bytes = capacity_warn_bytes
        self._history: Dict[str, List[Block]] = {}

        if self.data_file is not None:
            self.data_file.parent.mkdir(parents=True, exist_ok=True)
            self._load_all_days()

    # ===== ЗАГРУЗКА =====

    def _load_all_days(self) -> None:
        """Загрузка истории из файла. Повреждённые данные не роняют загрузку"""
        if not self.data_file.exists():
            logger.info("📂 Файл истории не найден, начинаем с пустой истории")
            return

        try:
            with open(self.data_file, 'r', encoding='utf-8') as f:
                raw = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.error(f"❌ Файл истории повреждён ({e}), начинаем с пустой истории")
            self._quarantine_corrupt_file()
            return

        if not isinstance(raw, dict):
            logger.error("❌ Неверный формат файла истории: ожидался объект")
            self._quarantine_corrupt_file()
            return

        raw, changes = normalize_history(raw)
        if changes:
            logger.info(f"🔄 Нормализовано устаревших записей истории: {changes}")

        for key, records in raw.items():
            try:
                self._history[key] = blocks_from_dicts(records)
            except ValidationError as e:
                logger.warning(f"⚠️ День {key} пропущен: {e}")

        logger.info(f"📂 Загружено дней: {len(self._history)}")

    def _quarantine_corrupt_file(self) -> None:
        """Отложить повреждённый файл рядом, чтобы следующее сохранение его не затёрло"""
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        target = self.data_file.with_name(f"{self.data_file.stem}.corrupt-{timestamp}.json")
        try:
            self.data_file.replace(target)
            logger.warning(f"⚠️ Повреждённый файл перемещён: {target}")
        except OSError as e:
            logger.error(f"❌ Не удалось переместить повреждённый файл: {e}")

    # ===== ЧТЕНИЕ =====

    def load(self, date_key: str) -> List[Block]:
        """Снимок дня или свежая копия шаблона; всегда новая копия"""
        stored = self._history.get(date_key)
        if stored is None:
            return clone_template()
        return copy_blocks(stored)

    def peek(self, date_key: str) -> Optional[List[Block]]:
        stored = self._history.get(date_key)
        return copy_blocks(stored) if stored is not None else None

    def has(self, date_key: str) -> bool:
        return date_key in self._history

    def keys(self) -> List[str]:
        return sorted(self._history)

    def __len__(self) -> int:
        return len(self._history)

    def export_raw(self) -> Dict[str, List[Dict[str, Any]]]:
        """История в JSON-совместимом виде"""
        return {key: blocks_to_dicts(blocks) for key, blocks in self._history.items()}

    # ===== ЗАПИСЬ =====

    def save(self, date_key: str, snapshot: List[Block]) -> None:
        """Upsert снимка дня. Память обновляется только после успешной записи"""
        updated = dict(self._history)
        updated[date_key] = copy_blocks(snapshot)
        self._write(updated)
        self._history = updated
        logger.debug(f"💾 День {date_key} сохранён ({len(snapshot)} блоков)")

    def import_days(self, history: Dict[str, List[Dict[str, Any]]], overwrite: bool = False) -> int:
        """Добавить дни из внешней истории; возвращает число записанных дней"""
        updated = dict(self._history)
        imported = 0

        for key, records in history.items():
            if key in updated and not overwrite:
                continue
            try:
                updated[key] = blocks_from_dicts(records)
                imported += 1
            except ValidationError as e:
                logger.warning(f"⚠️ День {key} не импортирован: {e}")

        if imported:
            self._write(updated)
            self._history = updated
        return imported

    def clear_all(self) -> None:
        """
        Очистить всю историю. Необратимо для пользователя;
        подтверждение - забота вызывающего кода.
        """
        if self.backup_manager and self.data_file is not None:
            self.backup_manager.create_backup(self.data_file, label="before_clear")

        self._write({})
        self._history = {}
        logger.info("🗑️ История очищена")

    def backup(self) -> Optional[Path]:
        if not self.backup_manager or self.data_file is None:
            return None
        return self.backup_manager.create_backup(self.data_file)

    def _write(self, history: Dict[str, List[Block]]) -> None:
        """Атомарная запись через временный файл"""
        if self.data_file is None:
            return

        data = {key: blocks_to_dicts(blocks) for key, blocks in history.items()}
        temp_file = self.data_file.with_suffix('.tmp')

        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            temp_file.replace(self.data_file)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"❌ Ошибка сохранения истории: {e}")
            if temp_file.exists():
                temp_file.unlink()
            raise DatabaseWriteError(f"Не удалось сохранить историю: {e}") from e

        self._check_capacity()

    def _check_capacity(self) -> None:
        try:
            size = self.data_file.stat().st_size
        except OSError:
            return
        if size > self.capacity_warn_bytes:
            logger.warning(
                f"⚠️ Файл истории {size / 1024:.0f} КБ превышает порог "
                f"{self.capacity_warn_bytes / 1024:.0f} КБ; старые дни не удаляются автоматически"
            )

    def get_stats(self) -> Dict[str, Any]:
        size = 0
        if self.data_file is not None and self.data_file.exists():
            size = self.data_file.stat().st_size
        return {
            'stored_days': len(self._history),
            'file': str(self.data_file) if self.data_file else None,
            'size_kb': round(size / 1024, 2),
            'capacity_warn_kb': round(self.capacity_warn_bytes / 1024, 2),
        }
