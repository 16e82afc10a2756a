"""
Save/Load system - weapon inventory persistence.

Provides:
- Save/load one owner's inventory to JSON files in numbered slots
- Save integrity validation (checksum)
- Progression stored as ``{item_id, definition_id, rarity, current_rank, xp}``;
  curves are never saved, ranks are re-resolved from XP on load
"""

from __future__ import annotations

import base64
import hashlib
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import pydantic
from pydantic import Field

from forge.core.component import Component, get_component_type, register_component
from forge.core.errors import ArmoryError, SaveLoadError
from forge.core.events import EventBus, SaveEvent
from arsenal.inventory.inventory import WeaponInventory
from arsenal.inventory.items import WeaponCatalog
from arsenal.inventory.weapon import Weapon
from arsenal.progression.curves import LevelCurveRegistry
from arsenal.progression.progress import LevelProgress


logger = logging.getLogger(__name__)


@register_component
class WeaponSaveData(Component):
    """Saved progression for one weapon."""
    item_id: str
    definition_id: str
    rarity: str
    current_rank: int = Field(ge=1)
    xp: int = Field(ge=0)

    @classmethod
    def from_weapon(cls, weapon: Weapon) -> WeaponSaveData:
        return cls(
            item_id=weapon.key,
            definition_id=weapon.definition.id,
            rarity=weapon.rarity,
            current_rank=weapon.progress.level,
            xp=weapon.progress.xp,
        )


@register_component
class InventorySaveData(Component):
    """Saved inventory for one owner."""
    version: str = "1.0"
    owner: str = ""
    timestamp: str = ""
    items: list[WeaponSaveData] = Field(default_factory=list)
    equipped_index: Optional[int] = None


class SaveManager:
    """
    Manages saving and loading weapon inventories.

    Usage:
        save_mgr = SaveManager("saves", catalog, registry, event_bus=event_bus)
        save_mgr.save_inventory(inventory, slot=0)
        save_mgr.load_inventory(inventory, slot=0)
    """

    VERSION = "1.0"
    MAX_SLOTS = 10

    def __init__(
        self,
        save_path: str | Path,
        catalog: WeaponCatalog,
        registry: LevelCurveRegistry,
        event_bus: Optional[EventBus] = None,
    ):
        self.save_path = Path(save_path)
        self.save_path.mkdir(parents=True, exist_ok=True)
        self.catalog = catalog
        self.registry = registry
        self.event_bus = event_bus

    def _get_slot_path(self, slot: int) -> Path:
        """Get path for a save slot."""
        return self.save_path / f"inventory_{slot:02d}.json"

    def _check_slot(self, slot: int) -> None:
        if not 0 <= slot < self.MAX_SLOTS:
            raise SaveLoadError(f"Save slot {slot} out of range (0..{self.MAX_SLOTS - 1})")

    def create_save_data(self, inventory: WeaponInventory) -> InventorySaveData:
        """Capture an inventory's persisted shape."""
        return InventorySaveData(
            version=self.VERSION,
            owner=str(getattr(inventory.owner, "name", inventory.owner) or ""),
            timestamp=datetime.now().isoformat(),
            items=[WeaponSaveData.from_weapon(w) for w in inventory],
            equipped_index=inventory.equipped_index,
        )

    def save_inventory(self, inventory: WeaponInventory, slot: int) -> Path:
        """
        Save an inventory to a slot.

        Returns:
            Path of the written save file

        Raises:
            SaveLoadError: If the slot is invalid or the file cannot be written
        """
        self._check_slot(slot)
        self._publish(SaveEvent.SAVE_STARTED, slot=slot)

        save_data = self.create_save_data(inventory)
        save_dict = {"type": save_data.get_type_name(), **save_data.model_dump(mode="json")}
        save_dict['checksum'] = self._calculate_checksum(save_dict)

        path = self._get_slot_path(slot)
        try:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(save_dict, f, indent=2)
        except OSError as e:
            self._publish(SaveEvent.SAVE_FAILED, slot=slot, error=str(e))
            raise SaveLoadError(f"Could not write save slot {slot}: {e}") from e

        logger.info("Saved %d weapons to slot %d", len(save_data.items), slot)
        self._publish(SaveEvent.SAVE_COMPLETED, slot=slot)
        return path

    def read_save_data(self, slot: int, validate: bool = True) -> InventorySaveData:
        """
        Read and verify a slot without touching any inventory.

        Raises:
            SaveLoadError: If the slot is missing, corrupted or malformed
        """
        self._check_slot(slot)
        path = self._get_slot_path(slot)
        if not path.exists():
            raise SaveLoadError(f"Save slot {slot} is empty")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                save_dict = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise SaveLoadError(f"Could not read save slot {slot}: {e}") from e

        if validate:
            checksum = save_dict.get('checksum')
            if not checksum or not self._verify_checksum(save_dict, checksum):
                raise SaveLoadError(f"Save slot {slot} corrupted: checksum mismatch")

        record_type = get_component_type(save_dict.pop("type", InventorySaveData.get_type_name()))
        if record_type is not InventorySaveData:
            raise SaveLoadError(f"Save slot {slot} does not hold an inventory")
        save_dict.pop('checksum', None)

        try:
            return InventorySaveData.model_validate(save_dict)
        except pydantic.ValidationError as e:
            raise SaveLoadError(f"Save slot {slot} malformed: {e}") from e

    def load_inventory(
        self,
        inventory: WeaponInventory,
        slot: int,
        validate: bool = True,
        restore_equipped: bool = False,
    ) -> int:
        """
        Replace an inventory's contents with a saved slot.

        The slot is fully read and verified before the inventory is cleared.
        Ranks are re-resolved from XP against the current curves.

        Args:
            inventory: Inventory to fill
            slot: Save slot number
            validate: Whether to verify the checksum
            restore_equipped: Re-equip the saved equipped weapon

        Returns:
            Number of weapons restored

        Raises:
            SaveLoadError: If the slot cannot be loaded
        """
        self._publish(SaveEvent.LOAD_STARTED, slot=slot)
        try:
            save_data = self.read_save_data(slot, validate=validate)
            restored = [self._restore_progress(record) for record in save_data.items]
            self._check_keys(inventory, save_data)
        except ArmoryError as e:
            self._publish(SaveEvent.LOAD_FAILED, slot=slot, error=str(e))
            if isinstance(e, SaveLoadError):
                raise
            raise SaveLoadError(f"Save slot {slot} references unknown data: {e}") from e

        inventory.clear()
        for record, (definition, progress) in zip(save_data.items, restored):
            inventory.add_item(definition, progress, key=record.item_id)

        if restore_equipped and save_data.equipped_index is not None:
            if 0 <= save_data.equipped_index < len(inventory):
                inventory.equip_item(save_data.equipped_index)

        logger.info("Loaded %d weapons from slot %d", len(restored), slot)
        self._publish(SaveEvent.LOAD_COMPLETED, slot=slot)
        return len(restored)

    def _check_keys(self, inventory: WeaponInventory, save_data: InventorySaveData) -> None:
        """Saved item keys must be free in the directory or already owned by the target."""
        owned = {weapon.key for weapon in inventory}
        seen = set()
        for record in save_data.items:
            key = record.item_id
            if key in seen or (key in inventory.directory and key not in owned):
                raise SaveLoadError(f"Item key '{key}' is already in use")
            seen.add(key)

    def _restore_progress(self, record: WeaponSaveData):
        definition = self.catalog.get(record.definition_id)
        if record.rarity != definition.rarity:
            logger.warning(
                "Saved rarity '%s' for %s differs from definition rarity '%s'",
                record.rarity, record.item_id, definition.rarity,
            )
        progress = LevelProgress.restore(self.registry, definition.rarity, record.xp)
        if progress.level != record.current_rank:
            logger.info(
                "Item %s re-resolved from rank %d to %d against current curve",
                record.item_id, record.current_rank, progress.level,
            )
        return definition, progress

    def delete_save(self, slot: int) -> bool:
        """Delete a save slot. Returns False if it was empty."""
        self._check_slot(slot)
        path = self._get_slot_path(slot)
        if not path.exists():
            return False
        path.unlink()
        return True

    def get_used_slots(self) -> list[int]:
        return [i for i in range(self.MAX_SLOTS) if self._get_slot_path(i).exists()]

    def validate_save(self, slot: int) -> bool:
        """
        Validate a save file's integrity.

        Returns:
            True if save is valid, False if corrupted or missing
        """
        try:
            self.read_save_data(slot)
        except SaveLoadError:
            return False
        return True

    # Checksum validation

    def _calculate_checksum(self, data: dict[str, Any]) -> str:
        """Calculate checksum for save data."""
        json_str = json.dumps(data, sort_keys=True, separators=(',', ':'))
        hash_bytes = hashlib.sha256(json_str.encode('utf-8')).digest()
        return base64.b64encode(hash_bytes).decode('ascii')

    def _verify_checksum(self, data: dict[str, Any], expected_checksum: str) -> bool:
        """Verify save data checksum."""
        data_copy = data.copy()
        data_copy.pop('checksum', None)
        return self._calculate_checksum(data_copy) == expected_checksum

    def _publish(self, event_type: SaveEvent, **data: Any) -> None:
        if self.event_bus:
            self.event_bus.publish(event_type, **data)
