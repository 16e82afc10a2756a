"""
Progression directory - flat key -> progress namespace.

Lets UI or network handlers award XP with only an item key in hand, and
pushes snapshots outward to registered sync sinks when a level changes.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

from forge.core.errors import NotFoundError, ValidationError
from forge.core.events import ArmoryEvent, EventBus
from arsenal.progression.progress import LevelProgress, ProgressSnapshot


logger = logging.getLogger(__name__)


class SyncSink(ABC):
    """Receives progression snapshots for an item key."""

    @abstractmethod
    def publish(self, item_key: str, snapshot: ProgressSnapshot) -> None:
        """Push the snapshot to the external representation."""


class CallbackSink(SyncSink):
    """Adapts a plain callable to the sink interface."""

    def __init__(self, callback: Callable[[str, ProgressSnapshot], None]):
        self._callback = callback

    def publish(self, item_key: str, snapshot: ProgressSnapshot) -> None:
        self._callback(item_key, snapshot)


class EventBusSink(SyncSink):
    """Republishes snapshots on an EventBus as ``ATTRIBUTES_SYNCED``."""

    def __init__(self, event_bus: EventBus):
        self.event_bus = event_bus

    def publish(self, item_key: str, snapshot: ProgressSnapshot) -> None:
        self.event_bus.publish(ArmoryEvent.ATTRIBUTES_SYNCED, item_key=item_key, snapshot=snapshot)


class ProgressionDirectory:
    """
    Item key -> LevelProgress.

    Usage:
        directory = ProgressionDirectory()
        directory.add_sink(EventBusSink(event_bus))
        directory.register("sword-1", progress)
        directory.award_xp("sword-1", 150)
    """

    def __init__(
        self,
        sinks: Optional[list[SyncSink]] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self._entries: dict[str, LevelProgress] = {}
        self._sinks: list[SyncSink] = list(sinks or [])
        self.event_bus = event_bus

    def add_sink(self, sink: SyncSink | Callable[[str, ProgressSnapshot], None]) -> SyncSink:
        """Register a sync sink (or plain callable)."""
        if not isinstance(sink, SyncSink):
            sink = CallbackSink(sink)
        self._sinks.append(sink)
        return sink

    def remove_sink(self, sink: SyncSink) -> None:
        if sink in self._sinks:
            self._sinks.remove(sink)

    def register(self, key: str, progress: LevelProgress) -> None:
        """
        Register an item's progress.

        Raises:
            ValidationError: If the key already maps to a different progress
        """
        existing = self._entries.get(key)
        if existing is not None and existing is not progress:
            raise ValidationError(f"Item key '{key}' is already registered")
        self._entries[key] = progress

    def unregister(self, key: str) -> Optional[LevelProgress]:
        return self._entries.pop(key, None)

    def get(self, key: str) -> LevelProgress:
        """
        Raises:
            NotFoundError: If the key is not registered
        """
        try:
            return self._entries[key]
        except KeyError:
            raise NotFoundError(f"No progression registered for item '{key}'") from None

    def award_xp(self, key: str, amount: int) -> bool:
        """
        Award XP to an item by key.

        Returns:
            True if the item levelled up (sinks were notified)

        Raises:
            NotFoundError: If the key is not registered
            ValidationError: If the amount is negative
        """
        progress = self.get(key)
        previous = progress.level
        levelled = progress.add_xp(amount)
        if levelled:
            logger.info("Item %s reached level %d", key, progress.level)
            snapshot = self.publish(key)
            if self.event_bus:
                self.event_bus.publish(
                    ArmoryEvent.LEVEL_UP,
                    item_key=key,
                    previous_level=previous,
                    snapshot=snapshot,
                )
        return levelled

    def publish(self, key: str) -> ProgressSnapshot:
        """Push the current snapshot for a key to every sink."""
        snapshot = self.get(key).snapshot()
        for sink in self._sinks:
            sink.publish(key, snapshot)
        return snapshot

    def keys(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
