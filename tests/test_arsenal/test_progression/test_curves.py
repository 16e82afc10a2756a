import pytest

from forge.core.errors import NotFoundError, ValidationError
from arsenal.progression.curves import LevelCurve, LevelCurveRegistry, LevelDefinition


def test_register_and_lookup():
    registry = LevelCurveRegistry()
    registry.register_curve("Common", [(1, 0), (2, 100), (3, 300)])

    curve = registry.lookup("Common")

    assert len(curve) == 3
    assert curve.first == LevelDefinition(rank=1, required_xp=0)
    assert curve.last.required_xp == 300
    assert "Common" in registry

def test_lookup_unregistered_rarity():
    with pytest.raises(NotFoundError):
        LevelCurveRegistry().lookup("Mythic")

def test_register_replaces_existing():
    registry = LevelCurveRegistry()
    registry.register_curve("Common", [(1, 0), (2, 100)])
    registry.register_curve("Common", [(1, 0), (2, 50), (3, 80)])

    assert registry.lookup("Common").max_rank == 3
    assert registry.rarities() == ["Common"]

@pytest.mark.parametrize("levels", [
    [],
    [(2, 0)],
    [(1, 10)],
    [(1, 0), (3, 100)],
    [(1, 0), (2, 100), (3, 50)],
    [(1, 0), (2, -5)],
    [(1, 0), "bad"],
])
def test_malformed_curves_rejected(levels):
    registry = LevelCurveRegistry()
    with pytest.raises(ValidationError):
        registry.register_curve("Common", levels)
    assert "Common" not in registry

def test_failed_registration_keeps_previous_curve():
    registry = LevelCurveRegistry()
    registry.register_curve("Common", [(1, 0), (2, 100)])

    with pytest.raises(ValidationError):
        registry.register_curve("Common", [(1, 0), (2, 100), (4, 200)])

    assert registry.lookup("Common").max_rank == 2

def test_blank_rarity_rejected():
    with pytest.raises(ValidationError):
        LevelCurveRegistry().register_curve("", [(1, 0)])

def test_curve_accepts_mappings_and_definitions():
    curve = LevelCurve([
        {"rank": 1, "required_xp": 0},
        LevelDefinition(rank=2, required_xp=10),
        {"rank": 3, "xp": 20},
    ])
    assert [level.rank for level in curve] == [1, 2, 3]
    assert curve.to_list()[2] == {"rank": 3, "required_xp": 20}

def test_resolve_picks_highest_qualifying_rank():
    curve = LevelCurve([(1, 0), (2, 100), (3, 100), (4, 300)])

    assert curve.resolve(0).rank == 1
    assert curve.resolve(99).rank == 1
    # Equal thresholds resolve to the highest rank
    assert curve.resolve(100).rank == 3
    assert curve.resolve(299).rank == 3
    assert curve.resolve(5000).rank == 4

def test_next_after_and_get_rank():
    curve = LevelCurve([(1, 0), (2, 100)])
    assert curve.next_after(curve.first).rank == 2
    assert curve.next_after(curve.last) is None
    assert curve.get_rank(2).required_xp == 100
    with pytest.raises(NotFoundError):
        curve.get_rank(3)

def test_unregister_curve():
    registry = LevelCurveRegistry()
    registry.register_curve("Common", [(1, 0)])
    assert registry.unregister_curve("Common")
    assert not registry.unregister_curve("Common")
    assert len(registry) == 0
