"""
Playlist module: scheduling and slot-matrix editing
"""

from . import matrix, scheduler

__all__ = ["matrix", "scheduler"]
