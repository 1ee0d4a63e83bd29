"""Tests for core/schedule.py - pure operations over a day's blocks."""

from core import schedule as ops
from core.template import NEW_BLOCK_DURATION_MIN, NEW_BLOCK_TITLE, SUB_ITEM_SLOTS, clone_template
from models.block import Block


def test_toggle_done_flips_work_block():
    blocks = clone_template()
    updated = ops.toggle_done(blocks, "t1")

    assert ops.find_block(updated, "t1").done is True
    assert ops.find_block(blocks, "t1").done is False


def test_toggle_done_twice_restores():
    blocks = clone_template()
    assert ops.toggle_done(ops.toggle_done(blocks, "t2"), "t2") == blocks


def test_toggle_done_ignores_breaks():
    blocks = clone_template()
    assert ops.toggle_done(blocks, "b1") == blocks


def test_unknown_id_is_noop():
    blocks = clone_template()

    assert ops.toggle_done(blocks, "missing") == blocks
    assert ops.rename_block(blocks, "missing", "X") == blocks
    assert ops.remove_block(blocks, "missing") == blocks
    assert ops.edit_sub_item(blocks, "missing", 0, "X") == blocks


def test_operations_return_new_objects():
    """Results never alias the input blocks."""
    blocks = clone_template()
    updated = ops.rename_block(blocks, "t1", "Renamed")

    assert all(a is not b for a, b in zip(blocks, updated))
    t3_before = ops.find_block(blocks, "t3")
    t3_after = ops.find_block(updated, "t3")
    assert t3_before.sub_items is not t3_after.sub_items
    assert ops.find_block(blocks, "t1").title == "Internship hunt"


def test_rename_block():
    updated = ops.rename_block(clone_template(), "t4", "Algorithms")
    assert ops.find_block(updated, "t4").title == "Algorithms"


def test_edit_sub_item_replaces_slot():
    updated = ops.edit_sub_item(clone_template(), "t3", 1, "Signals")
    assert ops.find_block(updated, "t3").sub_items == ["Subject 1", "Signals", "Subject 3"]


def test_edit_sub_item_initializes_slots():
    updated = ops.edit_sub_item(clone_template(), "t1", 2, "Portfolio")
    assert ops.find_block(updated, "t1").sub_items == ["", "", "Portfolio"]
    assert len(ops.find_block(updated, "t1").sub_items) == SUB_ITEM_SLOTS


def test_edit_sub_item_out_of_range_does_not_grow():
    blocks = clone_template()
    assert ops.edit_sub_item(blocks, "t3", 3, "Extra") == blocks
    assert ops.edit_sub_item(blocks, "t3", -1, "Extra") == blocks


def test_add_block_inserts_before_last():
    blocks = clone_template()
    updated, new_id = ops.add_block(blocks)

    assert len(updated) == len(blocks) + 1
    assert updated[-1].id == blocks[-1].id
    added = updated[-2]
    assert added.id == new_id
    assert added.title == NEW_BLOCK_TITLE
    assert added.duration_minutes == NEW_BLOCK_DURATION_MIN
    assert added.is_break is False and added.done is False


def test_add_block_to_empty_list_appends():
    updated, new_id = ops.add_block([])
    assert [b.id for b in updated] == [new_id]


def test_add_block_ids_are_unique():
    blocks = clone_template()
    issued = set()
    for _ in range(20):
        blocks, new_id = ops.add_block(blocks, existing_ids=issued)
        issued.add(new_id)

    ids = [b.id for b in blocks]
    assert len(ids) == len(set(ids))


def test_new_block_id_avoids_taken():
    taken = {ops.new_block_id() for _ in range(5)}
    assert ops.new_block_id(taken) not in taken


def test_add_then_remove_restores_list():
    blocks = clone_template()
    updated, new_id = ops.add_block(blocks)
    assert ops.remove_block(updated, new_id) == blocks


def test_remove_block_allows_breaks():
    updated = ops.remove_block(clone_template(), "l")
    assert ops.find_block(updated, "l") is None


def test_unmark_all_clears_done():
    blocks = ops.toggle_done(ops.toggle_done(clone_template(), "t1"), "t5")
    assert not any(b.done for b in ops.unmark_all(blocks))


def test_reset_to_template_is_fresh_copy():
    first = ops.reset_to_template()
    second = ops.reset_to_template()

    assert first == second == clone_template()
    assert first[0] is not second[0]
    first[4].sub_items.append("mutated")
    assert ops.reset_to_template()[4].sub_items == ["Subject 1", "Subject 2", "Subject 3"]


def test_template_has_no_done_blocks():
    assert not any(b.done for b in clone_template())
    assert isinstance(clone_template()[0], Block)
