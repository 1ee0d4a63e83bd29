"""Tests for utils/process_lock.py - single writer of the history file."""

import os

import pytest

from utils.process_lock import ProcessLock


def test_acquire_and_release(tmp_path):
    lock = ProcessLock(tmp_path / "planner.lock")

    assert lock.acquire() is True
    assert lock.is_held
    assert (tmp_path / "planner.lock").read_text() == str(os.getpid())

    lock.release()
    assert not lock.is_held
    assert not (tmp_path / "planner.lock").exists()


def test_second_lock_is_refused_while_held(tmp_path):
    first = ProcessLock(tmp_path / "planner.lock")
    second = ProcessLock(tmp_path / "planner.lock")

    assert first.acquire() is True
    try:
        assert second.acquire() is False
    finally:
        first.release()


def test_stale_lock_is_replaced(tmp_path):
    lockfile = tmp_path / "planner.lock"
    lockfile.write_text("999999999")

    lock = ProcessLock(lockfile)
    assert lock.acquire() is True
    lock.release()


def test_garbage_lock_is_replaced(tmp_path):
    lockfile = tmp_path / "planner.lock"
    lockfile.write_text("not a pid")

    with ProcessLock(lockfile) as lock:
        assert lock.is_held


def test_context_manager_raises_when_busy(tmp_path):
    with ProcessLock(tmp_path / "planner.lock"):
        with pytest.raises(RuntimeError):
            with ProcessLock(tmp_path / "planner.lock"):
                pass
