from .manager import DayStore, DatabaseError, DatabaseWriteError
from .backup import BackupManager

__all__ = ['DayStore', 'DatabaseError', 'DatabaseWriteError', 'BackupManager']
