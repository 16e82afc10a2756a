"""
Weapon definitions and catalog.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, Mapping, Optional

import pydantic
from pydantic import Field, field_validator

from forge.core.component import FrozenComponent, register_component
from forge.core.errors import NotFoundError, ValidationError

if TYPE_CHECKING:
    from forge.resources.database import Database


logger = logging.getLogger(__name__)


class WeaponType(Enum):
    """Weapon categories."""
    SWORD = auto()
    GREATSWORD = auto()
    DAGGER = auto()
    AXE = auto()
    SPEAR = auto()
    HAMMER = auto()
    BOW = auto()
    STAFF = auto()

    @classmethod
    def parse(cls, value: Any) -> WeaponType:
        """Accept a member or its (case-insensitive) name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and value.strip():
            try:
                return cls[value.strip().upper()]
            except KeyError:
                pass
        raise ValidationError(f"Unknown weapon type {value!r}")


@register_component
class WeaponDefinition(FrozenComponent):
    """
    Static description of a weapon.

    Attributes:
        id: Definition identifier
        name: Display name
        rarity: Rarity tag selecting the level curve
        weapon_type: Weapon category
        asset_id: Asset used for the runtime model (defaults to ``id``)
    """
    id: str = Field(min_length=1)
    name: str = ""
    rarity: str = Field(min_length=1)
    weapon_type: WeaponType
    description: str = ""
    asset_id: str = ""
    icon_id: str = ""

    @field_validator("weapon_type", mode="before")
    @classmethod
    def _parse_weapon_type(cls, value: Any) -> WeaponType:
        try:
            return WeaponType.parse(value)
        except ValidationError as e:
            raise ValueError(str(e)) from e

    @property
    def display_name(self) -> str:
        return self.name or self.id

    @property
    def model_ref(self) -> str:
        return self.asset_id or self.id


def parse_weapon(data: Mapping[str, Any] | WeaponDefinition) -> WeaponDefinition:
    """
    Build a definition from raw data.

    Raises:
        ValidationError: If required metadata (id, rarity, weapon type) is missing
    """
    if isinstance(data, WeaponDefinition):
        return data
    if not isinstance(data, Mapping):
        raise ValidationError(f"Weapon definition must be a mapping, got {type(data).__name__}")

    missing = [
        key for key in ("id", "rarity", "weapon_type")
        if not data.get(key) and not (key == "weapon_type" and data.get("type"))
    ]
    if missing:
        raise ValidationError(
            f"Weapon definition {data.get('id', '?')!r} missing {', '.join(missing)}"
        )

    try:
        return WeaponDefinition(
            id=data["id"],
            name=data.get("name", ""),
            rarity=data["rarity"],
            weapon_type=data.get("weapon_type") or data.get("type"),
            description=data.get("description", ""),
            asset_id=data.get("model", data.get("asset_id", "")),
            icon_id=data.get("icon", ""),
        )
    except pydantic.ValidationError as e:
        raise ValidationError(f"Invalid weapon definition {data.get('id')!r}: {e}") from e


class WeaponCatalog:
    """
    Registry of weapon definitions.
    """

    def __init__(self):
        self._weapons: dict[str, WeaponDefinition] = {}

    def register(self, definition: WeaponDefinition | Mapping[str, Any]) -> WeaponDefinition:
        """Register (or replace) a weapon definition."""
        weapon = parse_weapon(definition)
        self._weapons[weapon.id] = weapon
        return weapon

    def get(self, weapon_id: str) -> WeaponDefinition:
        """
        Raises:
            NotFoundError: If the definition is unknown
        """
        try:
            return self._weapons[weapon_id]
        except KeyError:
            raise NotFoundError(f"Unknown weapon definition '{weapon_id}'") from None

    def find(self, weapon_id: str) -> Optional[WeaponDefinition]:
        return self._weapons.get(weapon_id)

    def definitions(self) -> list[WeaponDefinition]:
        return list(self._weapons.values())

    def get_by_type(self, weapon_type: WeaponType) -> list[WeaponDefinition]:
        return [w for w in self._weapons.values() if w.weapon_type == weapon_type]

    def get_by_rarity(self, rarity: str) -> list[WeaponDefinition]:
        return [w for w in self._weapons.values() if w.rarity == rarity]

    def __contains__(self, weapon_id: str) -> bool:
        return weapon_id in self._weapons

    def __len__(self) -> int:
        return len(self._weapons)

    def load_from_database(self, database: Database) -> int:
        """
        Register every weapon loaded by the database.

        Returns:
            Number of definitions registered
        """
        count = 0
        for weapon_id, record in database.weapons.items():
            try:
                self.register(record)
            except ValidationError as e:
                logger.error("Skipping weapon '%s': %s", weapon_id, e)
                continue
            count += 1
        logger.info("Registered %d weapon definitions", count)
        return count
