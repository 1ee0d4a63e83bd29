"""Tests for models/block.py and the small validators around it."""

from datetime import date, datetime

import pytest

from models.block import Block, ValidationError, blocks_from_dicts
from utils.datetime_utils import date_key, parse_date_key, to_date
from utils.validators import clamp_start_hour, clean_title


def test_block_defaults():
    block = Block(id="a", title="Read", duration_minutes=30)
    assert block.done is False and block.is_break is False
    assert block.sub_items is None
    assert block.is_work


@pytest.mark.parametrize("kwargs", [
    {"id": "", "title": "x", "duration_minutes": 10},
    {"id": "a", "title": None, "duration_minutes": 10},
    {"id": "a", "title": "x", "duration_minutes": -1},
    {"id": "a", "title": "x", "duration_minutes": True},
    {"id": "a", "title": "x", "duration_minutes": "10"},
    {"id": "a", "title": "x", "duration_minutes": 10, "sub_items": "abc"},
])
def test_block_validation(kwargs):
    with pytest.raises(ValidationError):
        Block(**kwargs)


def test_to_dict_omits_missing_sub_items():
    assert "sub_items" not in Block(id="a", title="x", duration_minutes=1).to_dict()
    assert Block(id="a", title="x", duration_minutes=1, sub_items=[]).to_dict()["sub_items"] == []


def test_from_dict_defaults_flags():
    block = Block.from_dict({"id": "a", "title": "x", "duration_minutes": 5})
    assert block.done is False and block.is_break is False


@pytest.mark.parametrize("flags", [{"done": "false"}, {"done": 1}, {"is_break": "true"}, {"done": None}])
def test_from_dict_rejects_non_bool_flags(flags):
    with pytest.raises(ValidationError):
        Block.from_dict({"id": "a", "title": "x", "duration_minutes": 5, **flags})


def test_from_dict_missing_field():
    with pytest.raises(ValidationError):
        Block.from_dict({"id": "a", "title": "x"})


def test_blocks_from_dicts_rejects_duplicate_ids():
    record = {"id": "a", "title": "x", "duration_minutes": 5}
    with pytest.raises(ValidationError):
        blocks_from_dicts([record, dict(record)])


def test_copy_does_not_share_sub_items():
    block = Block(id="a", title="x", duration_minutes=5, sub_items=["1"])
    clone = block.copy()
    clone.sub_items.append("2")
    assert block.sub_items == ["1"]


def test_date_keys():
    assert date_key(date(2025, 1, 5)) == "2025-01-05"
    assert date_key(date(5, 1, 1)) == "0005-01-01"
    assert parse_date_key(date_key(date(5, 1, 1))) == date(5, 1, 1)
    assert parse_date_key("2025-01-05") == date(2025, 1, 5)
    assert to_date(datetime(2025, 1, 5, 13, 0)) == date(2025, 1, 5)
    with pytest.raises(ValidationError):
        parse_date_key("2025-1-5")
    with pytest.raises(ValidationError):
        parse_date_key("2025-02-29")


def test_validators():
    assert clamp_start_hour("1e9") == 23
    assert clamp_start_hour(" 12 ") == 12
    assert clean_title("  Deep work  ") == "Deep work"
    assert clean_title("   ") is None
    assert clean_title("x" * 101) is None
