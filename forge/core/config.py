"""
Engine configuration and logging setup.
"""

from __future__ import annotations

import logging
from pathlib import Path


LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


class EngineConfig:
    """Configuration for the armory engine."""

    def __init__(
        self,
        data_path: str | Path = "data",
        asset_path: str | Path = "assets/models",
        save_path: str | Path = "saves",
        log_level: int | str = logging.INFO,
        validate_schemas: bool = True,
        hand_socket: str = "hand_r",
        back_socket: str = "back",
        model_extensions: tuple[str, ...] = (".glb", ".gltf", ".obj"),
    ):
        self.data_path = Path(data_path)
        self.asset_path = Path(asset_path)
        self.save_path = Path(save_path)
        self.log_level = log_level
        self.validate_schemas = validate_schemas
        self.hand_socket = hand_socket
        self.back_socket = back_socket
        self.model_extensions = model_extensions


def configure_logging(config: EngineConfig | None = None) -> None:
    """Install a root handler using the configured level."""
    config = config or EngineConfig()
    level = config.log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logging.basicConfig(level=level, format=LOG_FORMAT)
