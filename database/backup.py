# database/backup.py

import gzip
import shutil
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class BackupManager:
    """Менеджер резервных копий файла истории"""

    def __init__(self, backup_dir: Path, max_backups: int = 10):
        self.backup_dir = Path(backup_dir)
        self.max_backups = max_backups
        self.backup_dir.mkdir(parents=True, exist_ok=True)

    def create_backup(self, source_file: Path, compressed: bool = True, label: str = "backup") -> Optional[Path]:
        """Создать резервную копию; None если исходного файла нет"""
        source_file = Path(source_file)
        if not source_file.exists():
            logger.debug(f"Нет файла для бэкапа: {source_file}")
            return None

        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S_%f')
        backup_name = f"{label}_{timestamp}.json"

        if compressed:
            backup_path = self.backup_dir / (backup_name + ".gz")
            with open(source_file, 'rb') as f_in:
                with gzip.open(backup_path, 'wb') as f_out:
                    shutil.copyfileobj(f_in, f_out)
        else:
            backup_path = self.backup_dir / backup_name
            shutil.copy2(source_file, backup_path)

        logger.info(f"💾 Бэкап создан: {backup_path}")
        self._cleanup_old_backups()
        return backup_path

    def restore_backup(self, backup_path: Path, target_file: Path) -> None:
        """Восстановить файл истории из резервной копии"""
        backup_path = Path(backup_path)
        if not backup_path.exists():
            raise FileNotFoundError(f"Бэкап не найден: {backup_path}")

        if backup_path.name.endswith('.gz'):
            with gzip.open(backup_path, 'rb') as f_in:
                with open(target_file, 'wb') as f_out:
                    shutil.copyfileobj(f_in, f_out)
        else:
            shutil.copy2(backup_path, target_file)

        logger.info(f"♻️ Бэкап восстановлен: {backup_path} -> {target_file}")

    def list_backups(self) -> List[Dict[str, Any]]:
        """Список резервных копий, новые первыми"""
        backups = []
        for backup_file in self.backup_dir.glob("*.json*"):
            stat = backup_file.stat()
            backups.append({
                'name': backup_file.name,
                'path': str(backup_file),
                'size_kb': round(stat.st_size / 1024, 2),
                'created': datetime.fromtimestamp(stat.st_mtime).isoformat(),
                'compressed': backup_file.name.endswith('.gz'),
            })
        return sorted(backups, key=lambda x: (x['created'], x['name']), reverse=True)

    def _cleanup_old_backups(self) -> None:
        """Удалить лишние резервные копии сверх max_backups"""
        backups = sorted(
            self.backup_dir.glob("*.json*"),
            key=lambda p: (p.stat().st_mtime_ns, p.name),
            reverse=True
        )
        for backup in backups[self.max_backups:]:
            try:
                backup.unlink()
                logger.info(f"🗑️ Удалён старый бэкап: {backup}")
            except OSError as e:
                logger.warning(f"⚠️ Не удалось удалить бэкап {backup}: {e}")
