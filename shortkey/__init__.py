"""
shortkey package initializer.
"""

from . import cache
from . import manager
from . import storage

__all__ = ["cache", "manager", "storage"]
