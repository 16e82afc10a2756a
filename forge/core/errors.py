"""
Engine exceptions.

All errors are raised synchronously to the caller of the mutating
operation. Nothing in the engine retries or swallows them.
"""


class ArmoryError(Exception):
    """Base exception for the engine."""


class ValidationError(ArmoryError):
    """Raised for malformed input: negative XP, missing metadata, bad curves."""


class InvalidStateError(ValidationError):
    """Raised when an operation is not legal in the current lifecycle state."""


class NotFoundError(ArmoryError, LookupError):
    """Raised for an unregistered rarity or unknown item key."""


class OutOfRangeError(NotFoundError, IndexError):
    """Raised when an inventory index does not address an item."""


class ResourceError(ArmoryError):
    """Raised when a runtime representation cannot be created or attached."""


class SaveLoadError(ArmoryError):
    """Raised when save or load operations fail."""
