import sys
import logging
from pathlib import Path

# Add project root to path
sys.path.append(str(Path(__file__).parent))

from forge.core import EngineConfig, ArmoryError, configure_logging
from arsenal import Armory, LevelProgress


def main():
    config = EngineConfig(data_path=Path(__file__).parent / "data")
    configure_logging(config)
    logger = logging.getLogger("DataVerification")

    try:
        logger.info("Loading armory data...")
        armory = Armory.from_config(config)

        # Verify curves
        for rarity in ("Common", "Rare", "Epic", "Legendary"):
            curve = armory.registry.lookup(rarity)
            assert curve.first.rank == 1 and curve.first.required_xp == 0, f"Bad {rarity} curve start"

        # Verify weapons
        assert "weapon_iron_sword" in armory.catalog, "Missing Iron Sword"
        assert "weapon_dawnbreaker" in armory.catalog, "Missing Dawnbreaker"

        # Every weapon must be levelable
        for definition in armory.catalog.definitions():
            LevelProgress.create(armory.registry, definition.rarity)

        logger.info("VERIFICATION SUCCESSFUL: All data loaded and validated.")

    except (ArmoryError, AssertionError) as e:
        logger.error(f"VERIFICATION FAILED: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
