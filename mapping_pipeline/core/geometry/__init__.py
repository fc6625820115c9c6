"""
Geometry module: zone constraints and automatic placement
"""

from .constraints import ZoneConstraintEngine
from .placement import PlacementResult, auto_placement_no_scale

__all__ = ["ZoneConstraintEngine", "PlacementResult", "auto_placement_no_scale"]
