"""Pytest configuration and fixtures."""

from datetime import date

import pytest

from database.backup import BackupManager
from database.manager import DayStore
from services.planner_service import PlannerService

FIXED_TODAY = date(2025, 10, 18)


@pytest.fixture
def history_file(tmp_path):
    """Path of the JSON history file inside a temporary data dir."""
    return tmp_path / "data" / "planner_history.json"


@pytest.fixture
def backup_manager(tmp_path):
    return BackupManager(tmp_path / "backups", max_backups=5)


@pytest.fixture
def store(history_file, backup_manager):
    """File-backed day store with backups enabled."""
    return DayStore(history_file, backup_manager=backup_manager)


@pytest.fixture
def memory_store():
    """Day store without a file, for pure in-memory checks."""
    return DayStore()


@pytest.fixture
def planner(store):
    """Planner session pinned to a fixed 'today'."""
    return PlannerService(store, start_hour=8, today=lambda: FIXED_TODAY)
