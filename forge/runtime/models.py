"""
File-backed model provider.

Resolves a weapon definition's model id to an asset file under the asset
root and wraps it in a RuntimeHandle. Actual mesh upload is the renderer's
concern; this only guarantees the asset exists before anything is
attached.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import numpy as np

from forge.core.errors import ResourceError
from forge.runtime.handle import ModelProvider, RuntimeHandle


logger = logging.getLogger(__name__)


class AssetModelProvider(ModelProvider):
    """
    Resolves models from an asset directory.

    Features:
    - Lookup by ``model_ref`` (falls back to the definition ``id``)
    - Cached path resolution
    - Optional ``<model>.grip.json`` sidecar holding a 4x4 grip offset
    """

    def __init__(
        self,
        asset_path: str | Path,
        extensions: tuple[str, ...] = (".glb", ".gltf", ".obj"),
    ):
        self.asset_path = Path(asset_path)
        self.extensions = extensions
        self._paths: dict[str, Path] = {}

    def resolve_model(self, definition: Any) -> RuntimeHandle:
        model_id = getattr(definition, "model_ref", "") or getattr(definition, "id", "")
        if not model_id:
            raise ResourceError(f"Definition {definition!r} has no model reference")

        path = self._find(model_id)
        if path is None:
            raise ResourceError(f"Model asset not found: {model_id}")

        return RuntimeHandle(model_id, source=path, local_transform=self._load_grip(path))

    def clear_cache(self) -> None:
        self._paths.clear()

    def _find(self, model_id: str) -> Path | None:
        cached = self._paths.get(model_id)
        if cached is not None and cached.exists():
            return cached

        for ext in self.extensions:
            candidate = self.asset_path / f"{model_id}{ext}"
            if candidate.exists():
                self._paths[model_id] = candidate
                return candidate

        logger.warning("No asset for model '%s' under %s", model_id, self.asset_path)
        return None

    def _load_grip(self, path: Path) -> np.ndarray:
        grip_path = path.with_suffix(".grip.json")
        if not grip_path.exists():
            return np.identity(4)

        try:
            with open(grip_path, 'r', encoding='utf-8') as f:
                matrix = np.asarray(json.load(f), dtype=float)
        except (OSError, ValueError) as e:
            raise ResourceError(f"Unreadable grip offset {grip_path}: {e}") from e

        if matrix.shape != (4, 4):
            raise ResourceError(f"Grip offset {grip_path} must be 4x4, got {matrix.shape}")
        return matrix
