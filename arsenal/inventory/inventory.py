"""
Per-entity weapon inventory.

Holds weapons in insertion order with at most one equipped. Every index
operation checks before it acts, so a bad index never leaves a partial
mutation behind.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterator, Mapping, Optional

from forge.core.component import FrozenComponent
from forge.core.errors import OutOfRangeError, ValidationError
from forge.core.events import ArmoryEvent, EventBus
from arsenal.inventory.items import WeaponDefinition, WeaponType, parse_weapon
from arsenal.inventory.weapon import RuntimeServices, Weapon
from arsenal.progression.curves import LevelCurveRegistry
from arsenal.progression.directory import ProgressionDirectory
from arsenal.progression.progress import LevelProgress


logger = logging.getLogger(__name__)


class DisplayRow(FrozenComponent):
    """One inventory line for display consumers."""
    index: int
    key: str
    name: str
    rarity: str
    weapon_type: WeaponType
    level: int
    xp: int
    max_xp: int
    is_equipped: bool


class WeaponInventory:
    """
    Weapon container for one owner.

    Usage:
        inventory = WeaponInventory(owner, registry, directory, services, rig=rig)
        index = inventory.add_item(definition)
        inventory.equip_item(index)
    """

    def __init__(
        self,
        owner: Any,
        registry: LevelCurveRegistry,
        directory: ProgressionDirectory,
        services: RuntimeServices,
        rig: Any = None,
        event_bus: Optional[EventBus] = None,
    ):
        self.owner = owner
        self.rig = rig
        self.event_bus = event_bus
        self._registry = registry
        self._directory = directory
        self._services = services
        self._items: list[Weapon] = []
        self._equipped_index: Optional[int] = None

    @property
    def items(self) -> list[Weapon]:
        """Copy of the weapon list."""
        return list(self._items)

    @property
    def directory(self) -> ProgressionDirectory:
        return self._directory

    @property
    def equipped_index(self) -> Optional[int]:
        return self._equipped_index

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Weapon]:
        return iter(list(self._items))

    def _check_index(self, index: int) -> Weapon:
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self._items):
            raise OutOfRangeError(
                f"Inventory index {index!r} out of range (0..{len(self._items) - 1})"
            )
        return self._items[index]

    def get_item(self, index: int) -> Weapon:
        """
        Raises:
            OutOfRangeError: If the index is invalid
        """
        return self._check_index(index)

    def add_item(
        self,
        definition: WeaponDefinition | Mapping[str, Any],
        initial_progress: LevelProgress | int | None = None,
        key: Optional[str] = None,
    ) -> int:
        """
        Append a stored weapon.

        Args:
            definition: Weapon definition (or raw definition data)
            initial_progress: Existing progress, or a starting XP amount
            key: Item key to reuse (when restoring); generated otherwise

        Returns:
            Index of the new weapon

        Raises:
            ValidationError: If the definition lacks rarity or weapon type,
                or the progress belongs to another rarity
            NotFoundError: If the rarity has no registered curve
        """
        definition = parse_weapon(definition)

        if isinstance(initial_progress, LevelProgress):
            if initial_progress.rarity != definition.rarity:
                raise ValidationError(
                    f"Progress for rarity '{initial_progress.rarity}' cannot back "
                    f"a '{definition.rarity}' weapon"
                )
            progress = initial_progress
        else:
            progress = LevelProgress.create(self._registry, definition.rarity)
            if initial_progress:
                progress.add_xp(initial_progress)

        weapon = Weapon(
            definition,
            owner=self.owner,
            progress=progress,
            directory=self._directory,
            services=self._services,
            rig=self.rig,
            key=key,
            event_bus=self.event_bus,
            holder=self,
        )
        self._items.append(weapon)
        index = len(self._items) - 1

        logger.debug("Added %s at index %d", weapon.name, index)
        self._publish(ArmoryEvent.ITEM_ADDED, index=index, weapon=weapon)
        return index

    def remove_item(self, index: int) -> Weapon:
        """
        Remove a weapon, unequipping it first if needed.

        Returns:
            The removed weapon (already torn down)

        Raises:
            OutOfRangeError: If the index is invalid
        """
        weapon = self._check_index(index)

        if self._equipped_index == index:
            self._equipped_index = None
        weapon.destroy()

        del self._items[index]
        if self._equipped_index is not None and self._equipped_index > index:
            self._equipped_index -= 1

        logger.debug("Removed %s from index %d", weapon.name, index)
        self._publish(ArmoryEvent.ITEM_REMOVED, index=index, weapon=weapon)
        return weapon

    def equip_item(self, index: int) -> Weapon:
        """
        Equip a weapon, unequipping the current one first.

        At most one runtime handle exists per owner at any time. If the
        target fails to equip, the previous weapon stays unequipped.

        Returns:
            The equipped weapon

        Raises:
            OutOfRangeError: If the index is invalid
            ResourceError: If the target's runtime cannot be built
        """
        target = self._check_index(index)
        if self._equipped_index == index and target.is_equipped:
            return target

        self.unequip_item()

        try:
            target._equip()
        except Exception as e:
            logger.warning("Failed to equip %s: %s", target.name, e)
            self._publish(ArmoryEvent.EQUIP_FAILED, index=index, weapon=target, error=str(e))
            raise
        finally:
            if target.is_equipped:
                self._equipped_index = index

        self._publish(ArmoryEvent.ITEM_EQUIPPED, index=index, weapon=target)
        return target

    def unequip_item(self) -> bool:
        """
        Unequip whatever is equipped.

        Returns:
            False if nothing was equipped
        """
        index = self._equipped_index
        if index is None:
            return False

        weapon = self._items[index]
        self._equipped_index = None
        weapon._unequip()
        self._publish(ArmoryEvent.ITEM_UNEQUIPPED, index=index, weapon=weapon)
        return True

    def get_equipped(self) -> Optional[Weapon]:
        if self._equipped_index is None:
            return None
        return self._items[self._equipped_index]

    def clear(self) -> list[Weapon]:
        """Unequip and remove every weapon."""
        self.unequip_item()
        removed = []
        while self._items:
            removed.append(self.remove_item(len(self._items) - 1))
        removed.reverse()
        return removed

    # Queries

    def find(self, key: str) -> Optional[int]:
        """Index of the weapon with this key, or None."""
        for i, weapon in enumerate(self._items):
            if weapon.key == key:
                return i
        return None

    def iter_items(self) -> Iterator[tuple[int, Weapon]]:
        """
        Iterate over weapons with their indices.

        Yields:
            (index, Weapon) tuples
        """
        for i, weapon in enumerate(list(self._items)):
            yield i, weapon

    def filter_items(self, predicate: Callable[[Weapon], bool]) -> list[Weapon]:
        """
        Filter weapons by a predicate.

        Example:
            swords = inventory.filter_items(lambda w: w.weapon_type == WeaponType.SWORD)
        """
        return [weapon for weapon in self._items if predicate(weapon)]

    def get_display_projection(self) -> list[DisplayRow]:
        """Read-only rows for UI consumers, in inventory order."""
        rows = []
        for i, weapon in enumerate(self._items):
            snapshot = weapon.snapshot()
            rows.append(DisplayRow(
                index=i,
                key=weapon.key,
                name=weapon.name,
                rarity=weapon.rarity,
                weapon_type=weapon.weapon_type,
                level=snapshot.level,
                xp=snapshot.xp,
                max_xp=snapshot.max_xp,
                is_equipped=i == self._equipped_index,
            ))
        return rows

    def _publish(self, event_type: ArmoryEvent, **data: Any) -> None:
        if self.event_bus:
            self.event_bus.publish(event_type, owner=self.owner, **data)
