from pathlib import Path

import pytest

from forge.core.config import EngineConfig
from forge.core.events import ArmoryEvent
from forge.runtime.rig import Rig
from arsenal.armory import Armory

DATA_PATH = Path(__file__).parents[2] / "data"


@pytest.fixture
def asset_dir(tmp_path):
    for model in ("iron_sword", "steel_axe", "dawnbreaker"):
        (tmp_path / f"{model}.glb").write_bytes(b"glTF")
    return tmp_path

@pytest.fixture
def armory(asset_dir):
    return Armory.from_config(EngineConfig(data_path=DATA_PATH, asset_path=asset_dir))

def test_from_config_loads_shipped_data(armory):
    assert set(armory.registry.rarities()) == {"Common", "Rare", "Epic", "Legendary"}
    assert "weapon_dawnbreaker" in armory.catalog

def test_player_loadout_flow(armory):
    level_ups = []
    armory.event_bus.subscribe(ArmoryEvent.LEVEL_UP, level_ups.append, weak=False)
    rig = Rig.humanoid(owner="hero")
    inventory = armory.create_inventory("hero", rig=rig)

    sword = inventory.add_item(armory.catalog.get("weapon_iron_sword"))
    blade = inventory.add_item(armory.catalog.get("weapon_dawnbreaker"))

    inventory.equip_item(sword)
    inventory.get_equipped().sheathe()
    assert rig.attached["back"] is inventory.get_equipped().runtime

    inventory.equip_item(blade)
    assert set(rig.attached) == {"hand_r"}

    armory.directory.award_xp(inventory.get_item(sword).key, 150)
    assert len(level_ups) == 1
    assert inventory.get_display_projection()[sword].level == 2

def test_missing_asset_surfaces_on_equip(armory):
    from forge.core.errors import ResourceError

    inventory = armory.create_inventory("hero", rig=Rig.humanoid())
    index = inventory.add_item(armory.catalog.get("weapon_hunting_bow"))

    with pytest.raises(ResourceError):
        inventory.equip_item(index)
    assert inventory.get_equipped() is None

def test_inventories_share_directory_but_not_items(armory):
    first = armory.create_inventory("a", rig=Rig.humanoid("a"))
    second = armory.create_inventory("b", rig=Rig.humanoid("b"))
    first.add_item(armory.catalog.get("weapon_iron_sword"))
    second.add_item(armory.catalog.get("weapon_iron_sword"))

    first.equip_item(0)
    second.equip_item(0)

    assert first.get_equipped() is not second.get_equipped()
    assert len(armory.directory) == 2
