"""
Weapon instances and their equip lifecycle.

A weapon is data only while stored. Equipping builds its runtime handle
through the model provider and attaches it to the owner's rig; unequipping
detaches and destroys it. The handle never outlives the equipped state.

    STORED --equip()--> EQUIPPED (UNSHEATHED <-> SHEATHED) --unequip()--> STORED
"""

from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Iterator, Optional

from forge.core.errors import ArmoryError, InvalidStateError, ResourceError
from forge.core.events import ArmoryEvent, EventBus
from forge.runtime.handle import ModelProvider, RigAttachment, RuntimeHandle
from arsenal.inventory.items import WeaponDefinition, WeaponType
from arsenal.progression.directory import ProgressionDirectory
from arsenal.progression.progress import LevelProgress, ProgressSnapshot


logger = logging.getLogger(__name__)


class WeaponState(Enum):
    """Lifecycle state."""
    STORED = auto()
    EQUIPPED = auto()


class VisualState(Enum):
    """Visual state of an equipped weapon."""
    SHEATHED = auto()
    UNSHEATHED = auto()


@dataclass
class RuntimeServices:
    """
    Collaborators used to build and place runtime handles.

    Attributes:
        models: Creates handles from definitions
        rigs: Attaches handles to rig sockets
        hand_socket: Socket used while unsheathed
        back_socket: Socket used while sheathed
    """
    models: ModelProvider
    rigs: RigAttachment
    hand_socket: str = "hand_r"
    back_socket: str = "back"


class _PendingRuntime:
    """Owns a freshly resolved handle until the weapon commits it."""

    def __init__(self, rigs: RigAttachment):
        self._rigs = rigs
        self.handle: Optional[RuntimeHandle] = None

    def hold(self, handle: RuntimeHandle) -> RuntimeHandle:
        self.handle = handle
        return handle

    def commit(self) -> RuntimeHandle:
        handle, self.handle = self.handle, None
        return handle

    def release(self) -> None:
        handle, self.handle = self.handle, None
        if handle is None:
            return
        try:
            self._rigs.detach(handle)
        finally:
            handle.destroy()


class Weapon:
    """
    One owned weapon.

    Identity (key, definition) is fixed. Progress keeps accumulating in
    any state. The runtime handle and visual state exist only while
    equipped.
    """

    def __init__(
        self,
        definition: WeaponDefinition,
        owner: Any,
        progress: LevelProgress,
        directory: ProgressionDirectory,
        services: RuntimeServices,
        rig: Any = None,
        key: Optional[str] = None,
        event_bus: Optional[EventBus] = None,
        holder: Any = None,
    ):
        self._key = key or uuid.uuid4().hex
        self._definition = definition
        self._owner = owner
        self._progress = progress
        self._directory = directory
        self._services = services
        self._rig = rig
        self._event_bus = event_bus
        # Owning inventory; equip and unequip go through it
        self._holder = holder

        self._runtime: Optional[RuntimeHandle] = None
        self._visual_state: Optional[VisualState] = None

        directory.register(self._key, progress)

    # Identity

    @property
    def key(self) -> str:
        return self._key

    @property
    def definition(self) -> WeaponDefinition:
        return self._definition

    @property
    def name(self) -> str:
        return self._definition.display_name

    @property
    def rarity(self) -> str:
        return self._definition.rarity

    @property
    def weapon_type(self) -> WeaponType:
        return self._definition.weapon_type

    @property
    def owner(self) -> Any:
        return self._owner

    @property
    def progress(self) -> LevelProgress:
        return self._progress

    # Lifecycle

    @property
    def state(self) -> WeaponState:
        return WeaponState.STORED if self._runtime is None else WeaponState.EQUIPPED

    @property
    def is_equipped(self) -> bool:
        return self._runtime is not None

    @property
    def runtime(self) -> Optional[RuntimeHandle]:
        return self._runtime

    @property
    def visual_state(self) -> Optional[VisualState]:
        """None while stored."""
        return self._visual_state

    @contextmanager
    def runtime_scope(self) -> Iterator[_PendingRuntime]:
        """
        Scope owning a handle under construction.

        Anything still held when the block exits with an error is detached
        and destroyed.
        """
        pending = _PendingRuntime(self._services.rigs)
        try:
            yield pending
        except BaseException:
            pending.release()
            raise

    def equip(self) -> bool:
        """
        Build the runtime handle and attach it, unsheathed, to the owner's rig.

        A weapon held by an inventory is equipped through it, so the
        previously equipped weapon is torn down first.

        Returns:
            False if already equipped

        Raises:
            ResourceError: If the model cannot be resolved or attached.
                The weapon stays stored.
        """
        if self._runtime is not None:
            return False

        if self._holder is not None:
            self._holder.equip_item(self._holder.find(self._key))
            return True
        return self._equip()

    def _equip(self) -> bool:
        if self._runtime is not None:
            return False

        services = self._services
        with self.runtime_scope() as pending:
            try:
                handle = pending.hold(services.models.resolve_model(self._definition))
                services.rigs.attach(handle, self._rig, services.hand_socket)
            except ArmoryError:
                raise
            except Exception as e:
                raise ResourceError(f"Could not build runtime for {self.name}: {e}") from e
            handle.show("unsheathed")
            self._directory.publish(self._key)
            self._runtime = pending.commit()

        self._visual_state = VisualState.UNSHEATHED
        logger.debug("Equipped %s (%s)", self.name, self._key)
        return True

    def unequip(self) -> bool:
        """
        Detach and destroy the runtime handle.

        Returns:
            False if the weapon was not equipped (no state change)
        """
        if self._holder is not None and self._holder.get_equipped() is self:
            return self._holder.unequip_item()
        return self._unequip()

    def _unequip(self) -> bool:
        handle = self._runtime
        if handle is None:
            return False

        self._runtime = None
        self._visual_state = None
        try:
            self._services.rigs.detach(handle)
        finally:
            handle.destroy()
        logger.debug("Unequipped %s (%s)", self.name, self._key)
        return True

    def sheathe(self) -> bool:
        """
        Move the weapon to the back socket and show the sheathed visual.

        Returns:
            False if already sheathed

        Raises:
            InvalidStateError: If the weapon is not equipped
        """
        return self._set_visual_state(VisualState.SHEATHED)

    def unsheathe(self) -> bool:
        """
        Move the weapon to the hand socket and show the drawn visual.

        Returns:
            False if already unsheathed

        Raises:
            InvalidStateError: If the weapon is not equipped
        """
        return self._set_visual_state(VisualState.UNSHEATHED)

    def _set_visual_state(self, target: VisualState) -> bool:
        handle = self._runtime
        if handle is None:
            raise InvalidStateError(f"{self.name} is not equipped")
        if self._visual_state == target:
            return False

        if target == VisualState.SHEATHED:
            self._services.rigs.move(handle, self._services.back_socket)
            handle.show("sheathed")
            event = ArmoryEvent.WEAPON_SHEATHED
        else:
            self._services.rigs.move(handle, self._services.hand_socket)
            handle.show("unsheathed")
            event = ArmoryEvent.WEAPON_UNSHEATHED

        self._visual_state = target
        if self._event_bus:
            self._event_bus.publish(event, item_key=self._key, owner=self._owner)
        return True

    def destroy(self) -> None:
        """Tear down the runtime handle and drop the progression entry."""
        self._unequip()
        self._holder = None
        self._directory.unregister(self._key)

    # Progression

    def award_xp(self, amount: int) -> bool:
        """Award XP through the directory. Legal while stored or equipped."""
        return self._directory.award_xp(self._key, amount)

    def snapshot(self) -> ProgressSnapshot:
        return self._progress.snapshot()

    def __repr__(self) -> str:
        return (
            f"Weapon({self._definition.id!r}, key={self._key[:8]}, "
            f"{self.state.name}, rank={self._progress.level})"
        )
