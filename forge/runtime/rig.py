"""
Character rigs and the in-process attachment service.

A Rig is a named set of sockets, each with a 4x4 transform in model
space. Attaching a handle to a socket composes the socket transform with
the handle's grip offset.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import numpy as np

from forge.core.errors import ResourceError
from forge.runtime.handle import RigAttachment, RuntimeHandle


logger = logging.getLogger(__name__)


def translation(x: float, y: float, z: float) -> np.ndarray:
    """Build a 4x4 translation matrix."""
    matrix = np.identity(4)
    matrix[:3, 3] = (x, y, z)
    return matrix


class Rig:
    """
    Socket layout for one character.

    Attributes:
        owner: Entity reference the rig belongs to
        sockets: Socket name -> 4x4 transform
        root: Rig root transform in world space
    """

    def __init__(
        self,
        owner: Any = None,
        sockets: Optional[dict[str, np.ndarray]] = None,
        root: Optional[np.ndarray] = None,
    ):
        self.owner = owner
        self.sockets: dict[str, np.ndarray] = {
            name: np.asarray(matrix, dtype=float)
            for name, matrix in (sockets or {}).items()
        }
        self.root = np.identity(4) if root is None else np.asarray(root, dtype=float)
        self.attached: dict[str, RuntimeHandle] = {}

    @classmethod
    def humanoid(cls, owner: Any = None) -> Rig:
        """Default biped layout with hand and back sockets."""
        return cls(owner, sockets={
            "hand_r": translation(0.45, 1.1, 0.1),
            "hand_l": translation(-0.45, 1.1, 0.1),
            "back": translation(0.0, 1.4, -0.2),
            "hip_l": translation(-0.25, 0.95, 0.0),
        })

    def has_socket(self, name: str) -> bool:
        return name in self.sockets

    def socket_world(self, name: str) -> np.ndarray:
        """World transform of a socket."""
        return self.root @ self.sockets[name]

    def set_root(self, root: np.ndarray) -> None:
        """Move the rig and refresh every attached handle."""
        self.root = np.asarray(root, dtype=float)
        for socket, handle in self.attached.items():
            handle.world_transform = self.socket_world(socket) @ handle.local_transform


class RigService(RigAttachment):
    """
    In-process attachment service.

    One handle per socket. Attaching to an occupied socket fails rather
    than silently displacing the occupant.
    """

    def __init__(self, default_socket: str = "hand_r"):
        self.default_socket = default_socket

    def attach(self, handle: RuntimeHandle, rig: Rig, socket: str | None = None) -> None:
        socket = socket or self.default_socket
        if handle.destroyed:
            raise ResourceError(f"Cannot attach destroyed handle {handle!r}")
        if rig is None:
            raise ResourceError(f"No rig to attach {handle.model_id}")
        if not rig.has_socket(socket):
            raise ResourceError(f"Rig has no socket '{socket}'")
        occupant = rig.attached.get(socket)
        if occupant is not None and occupant is not handle:
            raise ResourceError(f"Socket '{socket}' already holds {occupant.model_id}")
        if handle.attached:
            self.detach(handle)

        rig.attached[socket] = handle
        handle.rig = rig
        handle.socket = socket
        handle.world_transform = rig.socket_world(socket) @ handle.local_transform
        logger.debug("Attached %r to socket %s", handle, socket)

    def move(self, handle: RuntimeHandle, socket: str) -> None:
        # attach() validates the target before releasing the current socket
        if handle.rig is None:
            raise ResourceError(f"Cannot move detached handle {handle!r}")
        self.attach(handle, handle.rig, socket)

    def detach(self, handle: RuntimeHandle) -> None:
        rig = handle.rig
        if rig is None:
            return
        if rig.attached.get(handle.socket) is handle:
            del rig.attached[handle.socket]
        logger.debug("Detached %r from socket %s", handle, handle.socket)
        handle.rig = None
        handle.socket = None
        handle.world_transform = handle.local_transform.copy()
