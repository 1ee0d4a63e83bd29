"""Tests for database/migrations.py - legacy history normalization."""

import json

import pytest

from database.migrations import import_legacy_file, normalize_block_record, normalize_history, normalize_key


@pytest.mark.parametrize("raw,expected", [
    ("2025-10-18", "2025-10-18"),
    ("Sat Oct 18 2025", "2025-10-18"),
    ("10/18/2025", "2025-10-18"),
    ("18.10.2025", "2025-10-18"),
    ("2025/10/18", "2025-10-18"),
])
def test_normalize_key(raw, expected):
    assert normalize_key(raw) == expected


@pytest.mark.parametrize("raw", ["yesterday", "2025-13-01", "", None])
def test_normalize_key_rejects_unknown(raw):
    assert normalize_key(raw) is None


def test_normalize_block_record_renames_fields():
    record = normalize_block_record(
        {"id": 7, "title": "B.Tech", "durationMin": 90, "isBreak": False, "subtasks": ["a", "b", "c"]}
    )
    assert record == {
        "id": "7",
        "title": "B.Tech",
        "duration_minutes": 90,
        "is_break": False,
        "sub_items": ["a", "b", "c"],
    }


def test_normalize_block_record_keeps_non_finite_id():
    record = normalize_block_record({"id": float("inf"), "title": "x", "duration_minutes": 5})
    assert record["id"] == float("inf")
    assert normalize_block_record({"id": 2.0, "title": "x"})["id"] == "2"


def test_canonical_key_wins_conflict():
    raw = {
        "Sat Oct 18 2025": [{"id": "old", "title": "Old", "duration_minutes": 10}],
        "2025-10-18": [{"id": "new", "title": "New", "duration_minutes": 10}],
    }
    history, changes = normalize_history(raw)

    assert history["2025-10-18"][0]["id"] == "new"
    assert changes >= 1


def test_unknown_keys_are_dropped():
    history, changes = normalize_history({"someday": []})
    assert history == {}
    assert changes == 1


def test_canonical_history_is_unchanged():
    raw = {"2025-10-18": [{"id": "t1", "title": "A", "duration_minutes": 90}]}
    history, changes = normalize_history(raw)

    assert history == raw
    assert changes == 0


def test_import_legacy_file_with_local_storage_dump(tmp_path):
    source = tmp_path / "dump.json"
    inner = {"Sat Oct 18 2025": [{"id": 1, "title": "A", "durationMin": 30}]}
    source.write_text(json.dumps({"plannerHistory": json.dumps(inner)}), encoding="utf-8")

    history = import_legacy_file(source)
    assert list(history) == ["2025-10-18"]
    assert history["2025-10-18"][0]["duration_minutes"] == 30


def test_import_legacy_file_rejects_non_object(tmp_path):
    source = tmp_path / "dump.json"
    source.write_text("[]", encoding="utf-8")

    with pytest.raises(ValueError):
        import_legacy_file(source)
