"""
Per-weapon level progress.
"""

from __future__ import annotations

from typing import Optional

from forge.core.component import FrozenComponent
from forge.core.errors import ValidationError
from arsenal.progression.curves import LevelCurve, LevelCurveRegistry, LevelDefinition


class ProgressSnapshot(FrozenComponent):
    """
    Read-only view of a weapon's progression, handed to sync sinks.

    Attributes:
        rarity: Rarity tag selecting the curve
        current: Current level definition
        next_level: Next level definition (None at max rank)
        xp: Accumulated XP
    """
    rarity: str
    current: LevelDefinition
    next_level: Optional[LevelDefinition] = None
    xp: int = 0

    @property
    def level(self) -> int:
        return self.current.rank

    @property
    def is_max_level(self) -> bool:
        return self.next_level is None

    @property
    def max_xp(self) -> int:
        """Threshold shown as the bar's end: next rank, or current at max."""
        if self.next_level is None:
            return self.current.required_xp
        return self.next_level.required_xp


class LevelProgress:
    """
    Rank and accumulated XP for one weapon.

    XP only ever grows. Past the curve's last rank extra XP is kept but
    changes nothing. The rank follows the registered curve; once the
    curve for the rarity is replaced, the next read re-resolves against it.
    """

    def __init__(self, registry: LevelCurveRegistry, rarity: str, current: LevelDefinition, xp: int = 0):
        self._registry = registry
        self._rarity = rarity
        self._current = current
        self._xp = xp
        self._resolved_with: Optional[LevelCurve] = None

    @classmethod
    def create(cls, registry: LevelCurveRegistry, rarity: str) -> LevelProgress:
        """
        Fresh progress at rank 1, 0 XP.

        Raises:
            NotFoundError: If the rarity has no registered curve
        """
        curve = registry.lookup(rarity)
        progress = cls(registry, rarity, curve.first, 0)
        progress._resolved_with = curve
        return progress

    @classmethod
    def restore(cls, registry: LevelCurveRegistry, rarity: str, xp: int) -> LevelProgress:
        """Rebuild progress from persisted XP against the current curve."""
        progress = cls.create(registry, rarity)
        progress.add_xp(xp)
        return progress

    @property
    def rarity(self) -> str:
        return self._rarity

    @property
    def current(self) -> LevelDefinition:
        self._sync()
        return self._current

    @property
    def xp(self) -> int:
        return self._xp

    @property
    def level(self) -> int:
        return self.current.rank

    @property
    def curve(self) -> LevelCurve:
        return self._registry.lookup(self._rarity)

    @property
    def next_level(self) -> Optional[LevelDefinition]:
        curve = self._sync()
        return curve.next_after(self._current)

    @property
    def max_level(self) -> int:
        return self.curve.max_rank

    @property
    def is_max_level(self) -> bool:
        return self.next_level is None

    @property
    def progress(self) -> float:
        """Progress to next level (0-1). 1.0 at max rank."""
        next_level = self.next_level
        if next_level is None:
            return 1.0
        current = self._current
        span = next_level.required_xp - current.required_xp
        if span <= 0:
            return 1.0
        return (self._xp - current.required_xp) / span

    def add_xp(self, amount: int) -> bool:
        """
        Add experience points.

        Args:
            amount: XP to add (must be >= 0)

        Returns:
            True if the rank increased

        Raises:
            ValidationError: If amount is negative or not an integer
        """
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise ValidationError(f"XP amount must be an integer, got {amount!r}")
        if amount < 0:
            raise ValidationError(f"XP amount must be >= 0, got {amount}")

        curve = self.curve
        self._xp += amount
        return self._resolve(curve)

    def resolve(self) -> bool:
        """Re-resolve the rank against the registered curve (for reloads)."""
        return self._resolve(self.curve)

    def _sync(self) -> LevelCurve:
        curve = self.curve
        if curve is not self._resolved_with:
            self._resolve(curve)
        return curve

    def _resolve(self, curve: LevelCurve) -> bool:
        previous = self._current.rank
        self._current = curve.resolve(self._xp)
        self._resolved_with = curve
        return self._current.rank > previous

    def snapshot(self) -> ProgressSnapshot:
        next_level = self.next_level
        return ProgressSnapshot(
            rarity=self._rarity,
            current=self._current,
            next_level=next_level,
            xp=self._xp,
        )

    def __repr__(self) -> str:
        return f"LevelProgress({self._rarity!r}, rank={self._current.rank}, xp={self._xp})"
