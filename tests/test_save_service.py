from __future__ import annotations

import json

import pytest

from idlelife.core.rng import RNG
from idlelife.data.repositories import FurnitureRepository, ItemsRepository
from idlelife.domain.progression import INITIAL_AGE
from idlelife.domain.state import GameSession
from idlelife.services.errors import SaveLoadError
from idlelife.services.save_service import SaveService


def _build_service() -> SaveService:
    return SaveService(items_repo=ItemsRepository(), furniture_repo=FurnitureRepository())


def _played_session() -> GameSession:
    session = GameSession(seed=77, rng=RNG(77))
    session.rng.random()
    session.character.increase_attribute("plant_lore", 12)
    session.character.age += 400
    session.character.money = 812
    session.character.food_lifespan = 9
    session.character.recalculate_lifespan()
    session.inventory.add_item("rice", 4)
    session.inventory.add_item("elm_log", 2)
    session.furniture.place("bed", "canopy_bed")
    session.unlocks["auto_sell"] = True
    session.auto_sell.add("elm_log")
    session.life_count = 3
    session.days_elapsed = 1234
    return session


def _round_trip(payload: dict) -> dict:
    return json.loads(json.dumps(payload))


def test_save_round_trip_restores_session() -> None:
    service = _build_service()
    session = _played_session()

    restored = service.deserialize(_round_trip(service.serialize(session)))

    assert restored.seed == 77
    assert restored.character.get_properties() == session.character.get_properties()
    assert restored.character.lifespan == session.character.lifespan
    assert restored.inventory.items == {"rice": 4, "elm_log": 2}
    assert restored.furniture.slots == session.furniture.slots
    assert restored.unlocks == session.unlocks
    assert restored.auto_sell == {"elm_log"}
    assert restored.auto_use == set()
    assert restored.life_count == 3
    assert restored.days_elapsed == 1234


def test_save_round_trip_restores_rng_stream() -> None:
    service = _build_service()
    session = _played_session()

    restored = service.deserialize(_round_trip(service.serialize(session)))

    assert [restored.rng.random() for _ in range(5)] == [session.rng.random() for _ in range(5)]


def test_metadata_summarises_the_save() -> None:
    payload = _build_service().serialize(_played_session())

    metadata = payload["metadata"]
    assert metadata["life_count"] == 3
    assert metadata["age_years"] == 19
    assert metadata["money"] == 812
    assert "saved_at" in metadata
    assert payload["save_version"] == SaveService.SAVE_VERSION


def test_missing_age_falls_back_to_initial_age() -> None:
    service = _build_service()
    payload = _round_trip(service.serialize(_played_session()))
    payload["state"]["character"]["age"] = None

    restored = service.deserialize(payload)

    assert restored.character.age == INITIAL_AGE


def test_missing_unlock_keys_default_to_locked() -> None:
    service = _build_service()
    payload = _round_trip(service.serialize(_played_session()))
    payload["state"]["unlocks"] = {"auto_sell": True}

    restored = service.deserialize(payload)

    assert restored.unlocks["auto_sell"] is True
    assert restored.unlocks["auto_use"] is False


def _corrupt_version(payload: dict) -> None:
    payload["save_version"] = 99


def _drop_rng(payload: dict) -> None:
    del payload["rng"]


def _bad_rng_state(payload: dict) -> None:
    payload["rng"]["state"] = "nope"


def _unknown_item(payload: dict) -> None:
    payload["state"]["inventory"]["philosopher_stone"] = 1


def _zero_quantity(payload: dict) -> None:
    payload["state"]["inventory"]["rice"] = 0


def _furniture_in_wrong_slot(payload: dict) -> None:
    payload["state"]["furniture"]["kitchen"] = "blanket"


def _unknown_unlock(payload: dict) -> None:
    payload["state"]["unlocks"]["auto_fly"] = True


def _life_count_zero(payload: dict) -> None:
    payload["state"]["life_count"] = 0


def _missing_attribute(payload: dict) -> None:
    del payload["state"]["character"]["attributes"]["alchemy"]


def _string_money(payload: dict) -> None:
    payload["state"]["character"]["money"] = "lots"


def _auto_use_unknown_item(payload: dict) -> None:
    payload["state"]["auto_use"] = ["dragon_egg"]


@pytest.mark.parametrize(
    "corrupt",
    [
        _corrupt_version,
        _drop_rng,
        _bad_rng_state,
        _unknown_item,
        _zero_quantity,
        _furniture_in_wrong_slot,
        _unknown_unlock,
        _life_count_zero,
        _missing_attribute,
        _string_money,
        _auto_use_unknown_item,
    ],
)
def test_deserialize_rejects_corrupt_payloads(corrupt) -> None:
    service = _build_service()
    payload = _round_trip(service.serialize(_played_session()))
    corrupt(payload)

    with pytest.raises(SaveLoadError):
        service.deserialize(payload)


def test_deserialize_rejects_non_object() -> None:
    with pytest.raises(SaveLoadError):
        _build_service().deserialize(["not", "a", "save"])
