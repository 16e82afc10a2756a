"""
Inventory module - weapons and the equip lifecycle.

Provides:
- Weapon definitions and catalog
- Weapon instances (stored/equipped state machine)
- Per-owner weapon inventory
"""

from arsenal.inventory.items import (
    WeaponCatalog,
    WeaponDefinition,
    WeaponType,
    parse_weapon,
)
from arsenal.inventory.weapon import (
    Weapon,
    WeaponState,
    VisualState,
    RuntimeServices,
)
from arsenal.inventory.inventory import (
    WeaponInventory,
    DisplayRow,
)

__all__ = [
    # Definitions
    "WeaponCatalog",
    "WeaponDefinition",
    "WeaponType",
    "parse_weapon",
    # Instances
    "Weapon",
    "WeaponState",
    "VisualState",
    "RuntimeServices",
    # Container
    "WeaponInventory",
    "DisplayRow",
]
