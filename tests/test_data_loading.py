import json
from pathlib import Path

import pytest

from idlelife.data.errors import DataLoadError, DataReferenceError, DataValidationError
from idlelife.data.repositories import FurnitureRepository, ItemsRepository, ShopsRepository


def _write_json(path: Path, data: dict) -> None:
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def _make_definitions_dir(tmp_path: Path) -> Path:
    definitions_dir = tmp_path / "definitions"
    definitions_dir.mkdir()
    return definitions_dir


def _rice() -> dict:
    return {
        "name": "rice",
        "type": "food",
        "value": 1,
        "description": "Rice.",
        "use_label": "Eat",
        "use_consumes": True,
        "effects": [
            {"kind": "restore_status", "target": "nourishment", "amount": 1},
            {"kind": "check_overage"},
        ],
    }


def test_items_repo_loads_items(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "items.json",
        {
            "rice": _rice(),
            "elm_log": {"name": "elm log", "type": "wood", "value": 1, "description": "A log."},
        },
    )
    repo = ItemsRepository(base_path=definitions_dir)

    rice = repo.get("rice")
    log = repo.get("elm_log")

    assert [item.id for item in repo.all()] == ["elm_log", "rice"]
    assert rice.usable is True
    assert rice.use_consumes is True
    assert [effect.kind for effect in rice.effects] == ["restore_status", "check_overage"]
    assert log.usable is False
    assert log.effects == []


def test_items_repo_get_missing_raises(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(definitions_dir / "items.json", {"rice": _rice()})
    repo = ItemsRepository(base_path=definitions_dir)

    with pytest.raises(KeyError):
        repo.get("missing_item")
    assert repo.has("missing_item") is False


def test_missing_file_raises_load_error(tmp_path: Path) -> None:
    repo = ItemsRepository(base_path=_make_definitions_dir(tmp_path))

    with pytest.raises(DataLoadError):
        repo.all()


def test_validation_rejects_unknown_field(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    payload = _rice()
    payload["heal_hp"] = 3
    _write_json(definitions_dir / "items.json", {"rice": payload})

    with pytest.raises(DataValidationError):
        ItemsRepository(base_path=definitions_dir).all()


def test_validation_rejects_bad_item_type(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    payload = _rice()
    payload["type"] = "potion"
    _write_json(definitions_dir / "items.json", {"rice": payload})

    with pytest.raises(DataValidationError):
        ItemsRepository(base_path=definitions_dir).all()


def test_validation_rejects_effects_without_use_label(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    payload = _rice()
    del payload["use_label"]
    _write_json(definitions_dir / "items.json", {"rice": payload})

    with pytest.raises(DataValidationError):
        ItemsRepository(base_path=definitions_dir).all()


@pytest.mark.parametrize(
    "effect",
    [
        {"kind": "summon_dragon"},
        {"kind": "restore_status", "target": "sanity", "amount": 1},
        {"kind": "increase_attribute", "target": "health", "amount": 1},
        {"kind": "check_overage", "target": "health"},
        {"kind": "restore_status", "target": "health", "amount": "lots"},
        {"kind": "chance", "chance": 1.5, "effects": [{"kind": "check_overage"}]},
        {"kind": "chance", "chance": 0.5, "effects": []},
        {"kind": "check_overage", "effects": [{"kind": "check_overage"}]},
        {"kind": "unlock", "target": "auto_fly"},
        {"kind": "restore_status", "target": "health", "amount": 1, "extra": True},
    ],
)
def test_effect_parser_rejects_invalid_effects(tmp_path: Path, effect: dict) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    payload = _rice()
    payload["effects"] = [effect]
    _write_json(definitions_dir / "items.json", {"rice": payload})

    with pytest.raises(DataValidationError):
        ItemsRepository(base_path=definitions_dir).all()


def test_effect_parser_reads_nested_chance(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    payload = _rice()
    payload["effects"] = [
        {
            "kind": "chance",
            "chance": 0.25,
            "effects": [{"kind": "extend_food_lifespan", "amount": 1, "cap": 100}],
        }
    ]
    _write_json(definitions_dir / "items.json", {"rice": payload})

    effect = ItemsRepository(base_path=definitions_dir).get("rice").effects[0]

    assert effect.chance == 0.25
    assert effect.effects[0].kind == "extend_food_lifespan"
    assert effect.effects[0].cap == 100


def test_furniture_repo_validates_slot(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "furniture.json",
        {
            "throne": {
                "name": "Throne",
                "slot": "hall",
                "value": 1,
                "description": "Fancy.",
                "effects": [],
            }
        },
    )

    with pytest.raises(DataValidationError):
        FurnitureRepository(base_path=definitions_dir).all()


def _write_shop_fixture(definitions_dir: Path, stock: list) -> ShopsRepository:
    _write_json(definitions_dir / "items.json", {"rice": _rice()})
    _write_json(
        definitions_dir / "furniture.json",
        {
            "blanket": {
                "name": "Blanket",
                "slot": "bed",
                "value": 1,
                "description": "Warm.",
                "effects": [{"kind": "restore_status", "target": "stamina", "amount": 1}],
            }
        },
    )
    _write_json(
        definitions_dir / "shops.json",
        {
            "shops": {
                "general_store": {"name": "General Store", "shop_type": "item", "stock": stock},
                "furniture_store": {"name": "Furniture", "shop_type": "furniture", "stock": ["blanket"]},
            }
        },
    )
    items_repo = ItemsRepository(base_path=definitions_dir)
    furniture_repo = FurnitureRepository(base_path=definitions_dir)
    return ShopsRepository(base_path=definitions_dir, items_repo=items_repo, furniture_repo=furniture_repo)


def test_shops_repo_loads_stock(tmp_path: Path) -> None:
    repo = _write_shop_fixture(_make_definitions_dir(tmp_path), ["rice"])

    assert repo.get("general_store").stock == ("rice",)
    assert repo.get("furniture_store").shop_type == "furniture"


def test_shops_repo_rejects_missing_reference(tmp_path: Path) -> None:
    repo = _write_shop_fixture(_make_definitions_dir(tmp_path), ["rice", "blanket"])

    with pytest.raises(DataReferenceError):
        repo.all()


def test_shops_repo_rejects_duplicate_stock(tmp_path: Path) -> None:
    repo = _write_shop_fixture(_make_definitions_dir(tmp_path), ["rice", "rice"])

    with pytest.raises(DataValidationError):
        repo.all()
