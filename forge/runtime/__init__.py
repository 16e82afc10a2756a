"""
Runtime representations - model handles and rig attachment.
"""

from forge.runtime.handle import RuntimeHandle, ModelProvider, RigAttachment
from forge.runtime.models import AssetModelProvider
from forge.runtime.rig import Rig, RigService, translation

__all__ = [
    "RuntimeHandle",
    "ModelProvider",
    "RigAttachment",
    "AssetModelProvider",
    "Rig",
    "RigService",
    "translation",
]
