"""
Forge

Engine services for the armory: data records, events, configuration,
static data loading and runtime model handling.

Quick Start:
    from forge import EngineConfig, Database, configure_logging

    config = EngineConfig(data_path="data")
    configure_logging(config)
    db = Database(config.data_path)
    db.load_all()
"""

__version__ = "0.1.0"

from forge.core import (
    Component,
    FrozenComponent,
    register_component,
    EventBus,
    Event,
    ArmoryEvent,
    SaveEvent,
    EngineConfig,
    configure_logging,
    ArmoryError,
    ValidationError,
    InvalidStateError,
    NotFoundError,
    OutOfRangeError,
    ResourceError,
    SaveLoadError,
)
from forge.resources import Database
from forge.runtime import (
    RuntimeHandle,
    ModelProvider,
    RigAttachment,
    AssetModelProvider,
    Rig,
    RigService,
)

__all__ = [
    "Component",
    "FrozenComponent",
    "register_component",
    "EventBus",
    "Event",
    "ArmoryEvent",
    "SaveEvent",
    "EngineConfig",
    "configure_logging",
    "ArmoryError",
    "ValidationError",
    "InvalidStateError",
    "NotFoundError",
    "OutOfRangeError",
    "ResourceError",
    "SaveLoadError",
    "Database",
    "RuntimeHandle",
    "ModelProvider",
    "RigAttachment",
    "AssetModelProvider",
    "Rig",
    "RigService",
]
