"""
Progression module - level curves, per-weapon progress, XP routing.

Provides:
- Level curve definitions and the rarity registry
- Per-weapon level progress and snapshots
- Key-addressed progression directory with sync sinks
"""

from arsenal.progression.curves import (
    LevelDefinition,
    LevelCurve,
    LevelCurveRegistry,
)
from arsenal.progression.progress import (
    LevelProgress,
    ProgressSnapshot,
)
from arsenal.progression.directory import (
    ProgressionDirectory,
    SyncSink,
    CallbackSink,
    EventBusSink,
)

__all__ = [
    # Curves
    "LevelDefinition",
    "LevelCurve",
    "LevelCurveRegistry",
    # Progress
    "LevelProgress",
    "ProgressSnapshot",
    # Directory
    "ProgressionDirectory",
    "SyncSink",
    "CallbackSink",
    "EventBusSink",
]
