import os
import sys
import logging
from pathlib import Path
from typing import IO, Optional

logger = logging.getLogger(__name__)


class ProcessLock:
    """
    Блокировка единственного писателя истории.
    Бот и дашборд пишут в один файл, поэтому одновременно может работать только один из них.
    """

    def __init__(self, lockfile: Path):
        self.lockfile = Path(lockfile)
        self.fp: Optional[IO[str]] = None
        self.pid: Optional[int] = None

        self.lockfile.parent.mkdir(exist_ok=True, parents=True)

    @property
    def is_held(self) -> bool:
        return self.fp is not None

    def acquire(self) -> bool:
        """Захватывает блокировку; False если её держит другой живой процесс"""
        if self.lockfile.exists() and not self._check_existing_lock():
            return False

        try:
            self.fp = open(self.lockfile, "w")
            if sys.platform != "win32":
                import fcntl
                fcntl.flock(self.fp, fcntl.LOCK_EX | fcntl.LOCK_NB)

            self.pid = os.getpid()
            self.fp.write(str(self.pid))
            self.fp.flush()

            logger.info(f"🔒 Блокировка захвачена (PID: {self.pid})")
            return True

        except OSError as e:
            logger.warning(f"⚠️ Не удалось захватить блокировку: {e}")
            if self.fp:
                self.fp.close()
                self.fp = None
            return False

    def _check_existing_lock(self) -> bool:
        """True если существующая блокировка устарела и удалена"""
        try:
            existing_pid = int(self.lockfile.read_text().strip())
        except (ValueError, FileNotFoundError):
            self.lockfile.unlink(missing_ok=True)
            return True

        if self._is_process_running(existing_pid):
            logger.warning(f"⚠️ Планировщик уже запущен (PID: {existing_pid})")
            return False

        logger.info(f"Удаляем устаревшую блокировку (PID: {existing_pid})")
        self.lockfile.unlink(missing_ok=True)
        return True

    @staticmethod
    def _is_process_running(pid: int) -> bool:
        if sys.platform == "win32":
            import subprocess
            result = subprocess.run(
                ["tasklist", "/FI", f"PID eq {pid}"],
                capture_output=True,
                text=True
            )
            return str(pid) in result.stdout
        try:
            os.kill(pid, 0)  # сигнал 0 - только проверка существования
            return True
        except ProcessLookupError:
            return False
        except PermissionError:
            return True

    def release(self):
        """Освобождает блокировку"""
        if not self.fp:
            return

        if sys.platform != "win32":
            import fcntl
            fcntl.flock(self.fp, fcntl.LOCK_UN)

        self.fp.close()
        self.fp = None
        self.lockfile.unlink(missing_ok=True)
        logger.info(f"🔓 Блокировка освобождена (PID: {self.pid})")

    def __enter__(self):
        if self.acquire():
            return self
        raise RuntimeError("Не удалось захватить блокировку")

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release()
