"""
Level curves - per-rarity XP thresholds and the registry that holds them.
"""

from __future__ import annotations

import logging
from bisect import bisect_right
from typing import TYPE_CHECKING, Any, Iterable, Iterator, Mapping, Optional

import pydantic
from pydantic import Field

from forge.core.component import FrozenComponent, register_component
from forge.core.errors import NotFoundError, ValidationError

if TYPE_CHECKING:
    from forge.resources.database import Database


logger = logging.getLogger(__name__)


@register_component
class LevelDefinition(FrozenComponent):
    """
    One rank on a level curve.

    Attributes:
        rank: Level number, starting at 1
        required_xp: Cumulative XP needed to reach this rank
    """
    rank: int = Field(ge=1)
    required_xp: int = Field(ge=0)


def _coerce_definition(entry: Any) -> LevelDefinition:
    """Accept a LevelDefinition, a (rank, xp) pair or a mapping."""
    if isinstance(entry, LevelDefinition):
        return entry
    try:
        if isinstance(entry, Mapping):
            return LevelDefinition(
                rank=entry.get("rank"),
                required_xp=entry.get("required_xp", entry.get("xp")),
            )
        rank, required_xp = entry
        return LevelDefinition(rank=rank, required_xp=required_xp)
    except pydantic.ValidationError as e:
        raise ValidationError(f"Invalid level definition {entry!r}: {e}") from e
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid level definition {entry!r}") from e


class LevelCurve:
    """
    Ordered, validated sequence of level definitions for one rarity.

    The first entry is rank 1 at 0 XP, ranks are contiguous and the
    thresholds never decrease.
    """

    def __init__(self, levels: Iterable[Any]):
        self._levels: tuple[LevelDefinition, ...] = tuple(
            _coerce_definition(entry) for entry in levels
        )
        self._validate()
        self._thresholds = [level.required_xp for level in self._levels]

    def _validate(self) -> None:
        if not self._levels:
            raise ValidationError("Level curve must not be empty")

        first = self._levels[0]
        if first.rank != 1 or first.required_xp != 0:
            raise ValidationError(
                f"Level curve must start at rank 1 with 0 XP, got "
                f"rank {first.rank} at {first.required_xp} XP"
            )

        for previous, level in zip(self._levels, self._levels[1:]):
            if level.rank != previous.rank + 1:
                raise ValidationError(
                    f"Level ranks must be contiguous: {previous.rank} followed by {level.rank}"
                )
            if level.required_xp < previous.required_xp:
                raise ValidationError(
                    f"Rank {level.rank} requires {level.required_xp} XP, "
                    f"less than rank {previous.rank} ({previous.required_xp})"
                )

    @property
    def first(self) -> LevelDefinition:
        return self._levels[0]

    @property
    def last(self) -> LevelDefinition:
        return self._levels[-1]

    @property
    def max_rank(self) -> int:
        return self._levels[-1].rank

    def __len__(self) -> int:
        return len(self._levels)

    def __iter__(self) -> Iterator[LevelDefinition]:
        return iter(self._levels)

    def __getitem__(self, index: int) -> LevelDefinition:
        return self._levels[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LevelCurve):
            return NotImplemented
        return self._levels == other._levels

    def __repr__(self) -> str:
        return f"LevelCurve({len(self._levels)} ranks, max {self.last.required_xp} XP)"

    def get_rank(self, rank: int) -> LevelDefinition:
        """Definition for a rank number."""
        if not 1 <= rank <= self.max_rank:
            raise NotFoundError(f"Rank {rank} is not on this curve (1..{self.max_rank})")
        return self._levels[rank - 1]

    def resolve(self, xp: int) -> LevelDefinition:
        """
        Highest-rank definition whose threshold is at or below ``xp``.

        Equal thresholds resolve to the highest rank sharing them. XP past
        the last threshold resolves to the last rank.
        """
        index = bisect_right(self._thresholds, xp) - 1
        return self._levels[max(index, 0)]

    def next_after(self, level: LevelDefinition) -> Optional[LevelDefinition]:
        """The entry right after ``level``, or None at max rank."""
        if level.rank >= self.max_rank:
            return None
        return self._levels[level.rank]

    def to_list(self) -> list[dict[str, int]]:
        return [level.model_dump() for level in self._levels]


class LevelCurveRegistry:
    """
    Rarity tag -> level curve.

    Curves are registered during startup, before any weapon progress is
    created against them.
    """

    def __init__(self):
        self._curves: dict[str, LevelCurve] = {}

    def register_curve(self, rarity: str, curve: LevelCurve | Iterable[Any]) -> LevelCurve:
        """
        Register (or replace) the curve for a rarity.

        Raises:
            ValidationError: If the rarity is blank or the curve is malformed
        """
        if not rarity:
            raise ValidationError("Rarity tag must be a non-empty string")
        if not isinstance(curve, LevelCurve):
            curve = LevelCurve(curve)

        replaced = rarity in self._curves
        self._curves[rarity] = curve
        logger.debug(
            "%s curve for %s (%d ranks)",
            "Replaced" if replaced else "Registered", rarity, len(curve),
        )
        return curve

    def lookup(self, rarity: str) -> LevelCurve:
        """
        Get the curve for a rarity.

        Raises:
            NotFoundError: If no curve is registered for the rarity
        """
        try:
            return self._curves[rarity]
        except KeyError:
            raise NotFoundError(f"No level curve registered for rarity '{rarity}'") from None

    def unregister_curve(self, rarity: str) -> bool:
        return self._curves.pop(rarity, None) is not None

    def has_curve(self, rarity: str) -> bool:
        return rarity in self._curves

    def rarities(self) -> list[str]:
        return list(self._curves)

    def __contains__(self, rarity: str) -> bool:
        return rarity in self._curves

    def __len__(self) -> int:
        return len(self._curves)

    def load_from_database(self, database: Database) -> int:
        """
        Register every curve loaded by the database.

        Malformed curves are logged and skipped.

        Returns:
            Number of curves registered
        """
        count = 0
        for curve_id, record in database.curves.items():
            rarity = record.get("rarity", curve_id)
            try:
                self.register_curve(rarity, record.get("levels", []))
            except ValidationError as e:
                logger.error("Skipping level curve '%s': %s", curve_id, e)
                continue
            count += 1
        logger.info("Registered %d level curves", count)
        return count
