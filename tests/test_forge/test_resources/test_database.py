import pytest
import json
from forge.resources.database import Database

@pytest.fixture
def mock_db_path(tmp_path):
    # Setup mock directory structure in tmp_path
    schemas = tmp_path / "schemas"
    schemas.mkdir()

    database = tmp_path / "database"
    database.mkdir()
    (database / "weapons").mkdir()
    (database / "curves").mkdir()

    weapon_schema = {
        "type": "object",
        "required": ["id", "rarity", "weapon_type"],
        "properties": {
            "id": {"type": "string"},
            "rarity": {"type": "string"},
            "weapon_type": {"type": "string"}
        }
    }
    curve_schema = {
        "type": "object",
        "required": ["id", "rarity", "levels"],
        "properties": {
            "levels": {"type": "array", "minItems": 1}
        }
    }
    with open(schemas / "weapon.schema.json", "w") as f:
        json.dump(weapon_schema, f)
    with open(schemas / "curve.schema.json", "w") as f:
        json.dump(curve_schema, f)

    return tmp_path

def test_load_all(mock_db_path):
    weapon_data = [
        {"id": "sword", "rarity": "Common", "weapon_type": "sword"}
    ]
    with open(mock_db_path / "database" / "weapons" / "sword.json", "w") as f:
        json.dump(weapon_data, f)

    curve_data = {"id": "common", "rarity": "Common", "levels": [{"rank": 1, "required_xp": 0}]}
    with open(mock_db_path / "database" / "curves" / "common.json", "w") as f:
        json.dump(curve_data, f)

    db = Database(mock_db_path)
    db.load_all()

    assert "sword" in db.weapons
    assert db.get_weapon("sword")["rarity"] == "Common"
    assert db.get_curve("common")["levels"][0]["rank"] == 1

def test_validation_error(mock_db_path):
    # Missing rarity
    weapon_data = [
        {"id": "broken", "weapon_type": "sword"},
        {"id": "fine", "rarity": "Rare", "weapon_type": "axe"},
    ]
    with open(mock_db_path / "database" / "weapons" / "mixed.json", "w") as f:
        json.dump(weapon_data, f)

    db = Database(mock_db_path)
    db.load_all()

    assert "broken" not in db.weapons
    assert "fine" in db.weapons

def test_missing_schema(mock_db_path):
    weapon_data = [{"id": "sword", "rarity": "Common", "weapon_type": "sword"}]
    with open(mock_db_path / "database" / "weapons" / "sword.json", "w") as f:
        json.dump(weapon_data, f)

    (mock_db_path / "schemas" / "weapon.schema.json").unlink()

    db = Database(mock_db_path)
    db.load_all()

    # Without a schema the category is skipped
    assert "sword" not in db.weapons

def test_validation_disabled_loads_without_schema(mock_db_path):
    weapon_data = [{"id": "sword"}]
    with open(mock_db_path / "database" / "weapons" / "sword.json", "w") as f:
        json.dump(weapon_data, f)
    (mock_db_path / "schemas" / "weapon.schema.json").unlink()

    db = Database(mock_db_path, validate=False)
    db.load_all()

    assert "sword" in db.weapons

def test_malformed_json_is_skipped(mock_db_path):
    (mock_db_path / "database" / "weapons" / "bad.json").write_text("{not json")
    with open(mock_db_path / "database" / "weapons" / "good.json", "w") as f:
        json.dump({"id": "bow", "rarity": "Common", "weapon_type": "bow"}, f)

    db = Database(mock_db_path)
    db.load_all()

    assert list(db.weapons) == ["bow"]

def test_shipped_data_is_valid():
    from pathlib import Path
    db = Database(Path(__file__).parents[3] / "data")
    db.load_all()

    assert {"Common", "Rare", "Epic", "Legendary"} == {c["rarity"] for c in db.curves.values()}
    assert "weapon_iron_sword" in db.weapons
