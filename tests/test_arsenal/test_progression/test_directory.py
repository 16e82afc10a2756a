from unittest.mock import MagicMock

import pytest

from forge.core.errors import NotFoundError, ValidationError
from forge.core.events import ArmoryEvent
from arsenal.progression.directory import EventBusSink, ProgressionDirectory, SyncSink
from arsenal.progression.progress import LevelProgress


def test_award_xp_notifies_sinks_on_level_up(registry):
    sink = MagicMock(spec=SyncSink)
    directory = ProgressionDirectory(sinks=[sink])
    directory.register("sword-1", LevelProgress.create(registry, "Common"))

    assert directory.award_xp("sword-1", 150) is True

    sink.publish.assert_called_once()
    key, snapshot = sink.publish.call_args.args
    assert key == "sword-1"
    assert snapshot.level == 2
    assert snapshot.xp == 150

def test_award_xp_without_level_up_does_not_sync(registry):
    sink = MagicMock(spec=SyncSink)
    directory = ProgressionDirectory(sinks=[sink])
    directory.register("sword-1", LevelProgress.create(registry, "Common"))

    assert directory.award_xp("sword-1", 10) is False
    sink.publish.assert_not_called()

def test_award_xp_unknown_key(registry):
    calls = []
    directory = ProgressionDirectory()
    directory.add_sink(lambda key, snapshot: calls.append(key))

    with pytest.raises(NotFoundError):
        directory.award_xp("missing", 10)
    assert calls == []

def test_negative_award_propagates_validation_error(registry):
    directory = ProgressionDirectory()
    progress = LevelProgress.create(registry, "Common")
    directory.register("sword-1", progress)

    with pytest.raises(ValidationError):
        directory.award_xp("sword-1", -5)
    assert progress.xp == 0

def test_register_conflicting_key(registry):
    directory = ProgressionDirectory()
    first = LevelProgress.create(registry, "Common")
    directory.register("k", first)
    directory.register("k", first)

    with pytest.raises(ValidationError):
        directory.register("k", LevelProgress.create(registry, "Common"))

def test_unregister(registry):
    directory = ProgressionDirectory()
    progress = LevelProgress.create(registry, "Common")
    directory.register("k", progress)

    assert directory.unregister("k") is progress
    assert "k" not in directory
    assert directory.unregister("k") is None
    with pytest.raises(NotFoundError):
        directory.award_xp("k", 1)

def test_event_bus_integration(registry, event_bus):
    directory = ProgressionDirectory(event_bus=event_bus)
    directory.add_sink(EventBusSink(event_bus))
    directory.register("bow", LevelProgress.create(registry, "Common"))

    level_ups = []
    synced = []
    event_bus.subscribe(ArmoryEvent.LEVEL_UP, level_ups.append, weak=False)
    event_bus.subscribe(ArmoryEvent.ATTRIBUTES_SYNCED, synced.append, weak=False)

    directory.award_xp("bow", 50)
    directory.award_xp("bow", 300)

    assert len(level_ups) == 1
    assert level_ups[0]["previous_level"] == 1
    assert level_ups[0]["snapshot"].level == 3
    assert len(synced) == 1
    assert synced[0]["item_key"] == "bow"

def test_publish_pushes_current_snapshot(registry):
    received = []
    directory = ProgressionDirectory()
    directory.add_sink(lambda key, snapshot: received.append((key, snapshot.level)))
    directory.register("k", LevelProgress.create(registry, "Common"))

    directory.publish("k")

    assert received == [("k", 1)]
