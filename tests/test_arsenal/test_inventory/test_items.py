import pytest

from forge.core.errors import NotFoundError, ValidationError
from arsenal.inventory.items import WeaponCatalog, WeaponDefinition, WeaponType, parse_weapon


def test_parse_weapon_from_mapping():
    weapon = parse_weapon({
        "id": "weapon_iron_sword",
        "name": "Iron Sword",
        "rarity": "Common",
        "weapon_type": "Sword",
        "model": "iron_sword",
    })

    assert weapon.weapon_type == WeaponType.SWORD
    assert weapon.model_ref == "iron_sword"
    assert weapon.display_name == "Iron Sword"

@pytest.mark.parametrize("data", [
    {"id": "x", "weapon_type": "sword"},
    {"id": "x", "rarity": "Common"},
    {"id": "x", "rarity": "", "weapon_type": "sword"},
    {"rarity": "Common", "weapon_type": "sword"},
    {"id": "x", "rarity": "Common", "weapon_type": "laser"},
    "not-a-mapping",
])
def test_parse_weapon_requires_metadata(data):
    with pytest.raises(ValidationError):
        parse_weapon(data)

def test_model_ref_defaults_to_id():
    weapon = WeaponDefinition(id="weapon_bow", rarity="Common", weapon_type=WeaponType.BOW)
    assert weapon.model_ref == "weapon_bow"
    assert weapon.display_name == "weapon_bow"

def test_catalog_lookup_and_filters():
    catalog = WeaponCatalog()
    catalog.register({"id": "a", "rarity": "Common", "weapon_type": "sword"})
    catalog.register({"id": "b", "rarity": "Rare", "weapon_type": "sword"})
    catalog.register({"id": "c", "rarity": "Rare", "type": "bow"})

    assert catalog.get("a").rarity == "Common"
    assert [w.id for w in catalog.get_by_type(WeaponType.SWORD)] == ["a", "b"]
    assert [w.id for w in catalog.get_by_rarity("Rare")] == ["b", "c"]
    assert catalog.find("zzz") is None
    with pytest.raises(NotFoundError):
        catalog.get("zzz")

def test_catalog_load_skips_invalid(tmp_path):
    class FakeDatabase:
        weapons = {
            "good": {"id": "good", "rarity": "Common", "weapon_type": "axe"},
            "bad": {"id": "bad", "weapon_type": "axe"},
        }

    catalog = WeaponCatalog()
    assert catalog.load_from_database(FakeDatabase()) == 1
    assert "good" in catalog
    assert "bad" not in catalog
