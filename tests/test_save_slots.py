from __future__ import annotations

from pathlib import Path

import pytest

from idlelife.presentation.cli.save_slots import SaveSlotStore


def test_empty_store_lists_empty_slots(tmp_path: Path) -> None:
    store = SaveSlotStore(tmp_path / "saves")

    slots = store.list_slots()

    assert [slot.slot for slot in slots] == [1, 2, 3]
    assert not any(slot.exists for slot in slots)


def test_write_and_read_slot(tmp_path: Path) -> None:
    store = SaveSlotStore(tmp_path / "saves")
    payload = {"save_version": 1, "metadata": {"life_count": 2}, "state": {}}

    store.write_slot(2, payload)

    assert store.slot_exists(2)
    assert store.read_slot(2) == payload
    listed = store.list_slots()[1]
    assert listed.exists and listed.metadata == {"life_count": 2}


def test_corrupt_slot_is_flagged(tmp_path: Path) -> None:
    save_dir = tmp_path / "saves"
    save_dir.mkdir()
    (save_dir / "slot_1.json").write_text("{not json", encoding="utf-8")

    slot = SaveSlotStore(save_dir).list_slots()[0]

    assert slot.exists is True
    assert slot.is_corrupt is True
    assert slot.metadata is None


def test_delete_slot(tmp_path: Path) -> None:
    store = SaveSlotStore(tmp_path)
    store.write_slot(1, {"metadata": {}})

    store.delete_slot(1)
    store.delete_slot(1)

    assert not store.slot_exists(1)


@pytest.mark.parametrize("slot", [0, 4])
def test_invalid_slot_index(tmp_path: Path, slot: int) -> None:
    with pytest.raises(ValueError):
        SaveSlotStore(tmp_path).slot_exists(slot)
