"""
Static data loading.
"""

from forge.resources.database import Database

__all__ = ["Database"]
