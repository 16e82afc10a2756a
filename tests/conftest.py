import os
import sys
import pytest

# Ensure project modules can be imported
sys.path.append(os.getcwd())

from forge.core.errors import ResourceError
from forge.core.events import EventBus
from forge.runtime.handle import ModelProvider, RuntimeHandle
from forge.runtime.rig import Rig, RigService


COMMON_CURVE = [(1, 0), (2, 100), (3, 300)]


class StubModelProvider(ModelProvider):
    """
    In-memory provider recording every handle it builds.

    Definitions whose model_ref is in ``missing`` fail with ResourceError.
    """

    def __init__(self, missing=()):
        self.missing = set(missing)
        self.created: list[RuntimeHandle] = []

    def resolve_model(self, definition):
        model_id = definition.model_ref
        if model_id in self.missing:
            raise ResourceError(f"Model asset not found: {model_id}")
        handle = RuntimeHandle(model_id)
        self.created.append(handle)
        return handle

    @property
    def live(self) -> list[RuntimeHandle]:
        return [h for h in self.created if not h.destroyed]


@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    return EventBus()


@pytest.fixture
def registry():
    """Registry with the Common test curve."""
    from arsenal.progression.curves import LevelCurveRegistry

    reg = LevelCurveRegistry()
    reg.register_curve("Common", COMMON_CURVE)
    reg.register_curve("Rare", [(1, 0), (2, 200), (3, 500), (4, 1000)])
    return reg


@pytest.fixture
def directory():
    from arsenal.progression.directory import ProgressionDirectory
    return ProgressionDirectory()


@pytest.fixture
def provider():
    return StubModelProvider()


@pytest.fixture
def rig():
    return Rig.humanoid(owner="hero")


@pytest.fixture
def services(provider):
    from arsenal.inventory.weapon import RuntimeServices
    return RuntimeServices(models=provider, rigs=RigService())


@pytest.fixture
def sword():
    from arsenal.inventory.items import WeaponDefinition
    return WeaponDefinition(
        id="weapon_iron_sword",
        name="Iron Sword",
        rarity="Common",
        weapon_type="sword",
        asset_id="iron_sword",
    )


@pytest.fixture
def axe():
    from arsenal.inventory.items import WeaponDefinition
    return WeaponDefinition(
        id="weapon_steel_axe",
        name="Steel Axe",
        rarity="Rare",
        weapon_type="axe",
        asset_id="steel_axe",
    )


@pytest.fixture
def inventory(registry, directory, services, rig, event_bus):
    """Empty inventory for the 'hero' owner."""
    from arsenal.inventory.inventory import WeaponInventory
    return WeaponInventory(
        "hero",
        registry=registry,
        directory=directory,
        services=services,
        rig=rig,
        event_bus=event_bus,
    )
