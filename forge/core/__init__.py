"""
Core engine module.

Exports:
- Component, FrozenComponent, register_component: data record base classes
- EventBus, Event, ArmoryEvent, SaveEvent: Event system
- EngineConfig, configure_logging: Configuration
- Error taxonomy
"""

from forge.core.component import (
    Component,
    FrozenComponent,
    register_component,
    get_component_type,
)
from forge.core.events import EventBus, Event, ArmoryEvent, SaveEvent
from forge.core.config import EngineConfig, configure_logging
from forge.core.errors import (
    ArmoryError,
    ValidationError,
    InvalidStateError,
    NotFoundError,
    OutOfRangeError,
    ResourceError,
    SaveLoadError,
)

__all__ = [
    # Records
    "Component",
    "FrozenComponent",
    "register_component",
    "get_component_type",
    # Events
    "EventBus",
    "Event",
    "ArmoryEvent",
    "SaveEvent",
    # Config
    "EngineConfig",
    "configure_logging",
    # Errors
    "ArmoryError",
    "ValidationError",
    "InvalidStateError",
    "NotFoundError",
    "OutOfRangeError",
    "ResourceError",
    "SaveLoadError",
]
