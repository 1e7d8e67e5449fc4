# arena/utils/__init__.py
"""Utility modules for the arena server."""

from .errors import *
from .units import *

__all__ = ['errors', 'units', 'logger']
