"""
Save module - inventory persistence.
"""

from arsenal.save.manager import (
    SaveManager,
    InventorySaveData,
    WeaponSaveData,
)

__all__ = [
    "SaveManager",
    "InventorySaveData",
    "WeaponSaveData",
]
