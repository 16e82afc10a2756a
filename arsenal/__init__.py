"""
Arsenal

Weapon ownership and progression built on the forge engine services:
- Progression (level curves, per-weapon progress, XP routing)
- Inventory (weapon definitions, equip lifecycle, per-owner container)
- Save (inventory persistence)
"""

__version__ = "0.1.0"

from arsenal.progression import (
    LevelDefinition,
    LevelCurve,
    LevelCurveRegistry,
    LevelProgress,
    ProgressSnapshot,
    ProgressionDirectory,
    SyncSink,
    EventBusSink,
)
from arsenal.inventory import (
    WeaponCatalog,
    WeaponDefinition,
    WeaponType,
    Weapon,
    WeaponState,
    VisualState,
    RuntimeServices,
    WeaponInventory,
    DisplayRow,
)
from arsenal.save import SaveManager, InventorySaveData, WeaponSaveData
from arsenal.armory import Armory

__all__ = [
    # Progression
    "LevelDefinition",
    "LevelCurve",
    "LevelCurveRegistry",
    "LevelProgress",
    "ProgressSnapshot",
    "ProgressionDirectory",
    "SyncSink",
    "EventBusSink",
    # Inventory
    "WeaponCatalog",
    "WeaponDefinition",
    "WeaponType",
    "Weapon",
    "WeaponState",
    "VisualState",
    "RuntimeServices",
    "WeaponInventory",
    "DisplayRow",
    # Save
    "SaveManager",
    "InventorySaveData",
    "WeaponSaveData",
    # Wiring
    "Armory",
]
