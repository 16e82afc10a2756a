"""
Runtime representations and the collaborator interfaces that create,
attach and detach them.

A RuntimeHandle is the heavyweight object that exists only while a weapon
is equipped. Creation goes through a ModelProvider, placement on a
character goes through a RigAttachment.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional
import itertools

import numpy as np


class RuntimeHandle:
    """
    Live model instance for one equipped weapon.

    Attributes:
        model_id: Asset identifier the handle was built from
        source: Resolved asset path (if file-backed)
        local_transform: Grip offset relative to the socket (4x4)
        world_transform: Last computed world transform (4x4)
        rig: Rig the handle is attached to (None when detached)
        socket: Socket name on the rig
        parts: Visibility of visual sub-representations
    """

    _id_counter = itertools.count(1)

    def __init__(
        self,
        model_id: str,
        source: Optional[Path] = None,
        local_transform: Optional[np.ndarray] = None,
    ):
        self.id = next(RuntimeHandle._id_counter)
        self.model_id = model_id
        self.source = source
        self.local_transform = (
            np.identity(4) if local_transform is None
            else np.asarray(local_transform, dtype=float)
        )
        self.world_transform = self.local_transform.copy()
        self.rig: Any = None
        self.socket: str | None = None
        self.parts: dict[str, bool] = {"sheathed": False, "unsheathed": False}
        self._destroyed = False

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    @property
    def attached(self) -> bool:
        return self.rig is not None

    def show(self, part: str) -> None:
        """Make one visual sub-representation visible, hiding the rest."""
        for name in self.parts:
            self.parts[name] = name == part

    def destroy(self) -> None:
        """Release the instance. Callers detach it from its rig first."""
        self.rig = None
        self.socket = None
        self.parts = {name: False for name in self.parts}
        self._destroyed = True

    def __repr__(self) -> str:
        state = "destroyed" if self._destroyed else (self.socket or "detached")
        return f"RuntimeHandle({self.model_id!r}, #{self.id}, {state})"


class ModelProvider(ABC):
    """Creates runtime handles from weapon definitions."""

    @abstractmethod
    def resolve_model(self, definition: Any) -> RuntimeHandle:
        """
        Build a runtime handle for a definition.

        Raises:
            ResourceError: If the model asset cannot be resolved
        """


class RigAttachment(ABC):
    """Places runtime handles on character rigs."""

    @abstractmethod
    def attach(self, handle: RuntimeHandle, rig: Any, socket: str | None = None) -> None:
        """
        Attach a handle to a rig socket.

        Raises:
            ResourceError: If the attachment cannot be made
        """

    @abstractmethod
    def detach(self, handle: RuntimeHandle) -> None:
        """Detach a handle from whatever rig holds it. No-op if detached."""

    def move(self, handle: RuntimeHandle, socket: str) -> None:
        """Move an attached handle to another socket on the same rig."""
        rig = handle.rig
        self.detach(handle)
        self.attach(handle, rig, socket)
