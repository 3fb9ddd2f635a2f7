"""
Known-map world models used as ray-casting oracles
"""

from .base import WorldModel
from .segments import SegmentWorld
from .grid import GridWorld

__all__ = ['WorldModel', 'SegmentWorld', 'GridWorld']
