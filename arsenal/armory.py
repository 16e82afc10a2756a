"""
Armory - wiring for the shared progression services.

Initialization order matters: curves and weapon definitions are loaded
before any inventory creates weapons against them.

Usage:
    config = EngineConfig(data_path="data", asset_path="assets/models")
    armory = Armory.from_config(config)
    inventory = armory.create_inventory(player, rig=Rig.humanoid(player))
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from forge.core.config import EngineConfig
from forge.core.events import EventBus
from forge.resources.database import Database
from forge.runtime.handle import ModelProvider, RigAttachment
from forge.runtime.models import AssetModelProvider
from forge.runtime.rig import RigService
from arsenal.inventory.inventory import WeaponInventory
from arsenal.inventory.items import WeaponCatalog
from arsenal.inventory.weapon import RuntimeServices
from arsenal.progression.curves import LevelCurveRegistry
from arsenal.progression.directory import EventBusSink, ProgressionDirectory


logger = logging.getLogger(__name__)


class Armory:
    """
    Process-wide services shared by every inventory.

    Attributes:
        registry: Rarity -> level curve
        catalog: Weapon definitions
        directory: Item key -> progress
        services: Model provider and rig attachment
        event_bus: Bus receiving inventory and progression events
    """

    def __init__(
        self,
        registry: Optional[LevelCurveRegistry] = None,
        catalog: Optional[WeaponCatalog] = None,
        services: Optional[RuntimeServices] = None,
        event_bus: Optional[EventBus] = None,
        config: Optional[EngineConfig] = None,
    ):
        self.config = config or EngineConfig()
        self.event_bus = event_bus or EventBus()
        self.registry = registry or LevelCurveRegistry()
        self.catalog = catalog or WeaponCatalog()
        self.directory = ProgressionDirectory(event_bus=self.event_bus)
        self.directory.add_sink(EventBusSink(self.event_bus))
        self.services = services or RuntimeServices(
            models=AssetModelProvider(self.config.asset_path, self.config.model_extensions),
            rigs=RigService(self.config.hand_socket),
            hand_socket=self.config.hand_socket,
            back_socket=self.config.back_socket,
        )

    @classmethod
    def from_config(
        cls,
        config: EngineConfig,
        models: Optional[ModelProvider] = None,
        rigs: Optional[RigAttachment] = None,
    ) -> Armory:
        """Load curves and weapons from the configured data path."""
        services = None
        if models is not None or rigs is not None:
            services = RuntimeServices(
                models=models or AssetModelProvider(config.asset_path, config.model_extensions),
                rigs=rigs or RigService(config.hand_socket),
                hand_socket=config.hand_socket,
                back_socket=config.back_socket,
            )
        armory = cls(services=services, config=config)
        armory.load(Database(config.data_path, validate=config.validate_schemas))
        return armory

    def load(self, database: Database) -> None:
        """Register curves first, then weapon definitions."""
        database.load_all()
        curves = self.registry.load_from_database(database)
        weapons = self.catalog.load_from_database(database)

        for definition in self.catalog.definitions():
            if definition.rarity in self.registry:
                continue
            logger.warning(
                "Weapon '%s' uses rarity '%s' with no level curve",
                definition.id, definition.rarity,
            )
        logger.info("Armory ready: %d curves, %d weapons", curves, weapons)

    def create_inventory(self, owner: Any, rig: Any = None) -> WeaponInventory:
        return WeaponInventory(
            owner,
            registry=self.registry,
            directory=self.directory,
            services=self.services,
            rig=rig,
            event_bus=self.event_bus,
        )
