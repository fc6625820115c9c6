"""
Zone Constraint Engine
Keeps every zone 1:1 (dst mirrors src size) and inside its source and canvas bounds.
"""

import logging
from typing import Union

from ...models import Number, Rect, Size, Zone

logger = logging.getLogger(__name__)

SRC = "src"
DST = "dst"


def clamp(value: Number, low: Number, high: Number) -> Number:
    """Clamp value into [low, high]; low wins when the range is empty."""
    return max(low, min(high, value))


def floor_size(value: Number) -> Number:
    """Sizes are never smaller than one pixel."""
    return max(1, value)


class ZoneConstraintEngine:
    """
    Corrects zone edits so they always satisfy the geometry invariants.

    Responsibilities:
    - Propagate the src size into dst (a zone never scales content).
    - Floor widths and heights at 1.
    - Clamp src into the source space and dst into the canvas space.

    Nothing here raises for out-of-range input; edits are always satisfiable.
    """

    @staticmethod
    def apply_edit(zone: Zone, kind: str, rect: Rect, source: Size, canvas: Size) -> Zone:
        """
        Apply a proposed rectangle edit to one side of a zone.

        Args:
            zone: The zone as it is before the edit.
            kind: "src" or "dst", the side being edited.
            rect: The proposed rectangle for that side.
            source: Size of the owning source.
            canvas: Size of the canvas.

        Returns:
            Zone: A new, corrected zone.
        """
        if kind == SRC:
            src = Rect(rect.x, rect.y, floor_size(rect.w), floor_size(rect.h))
            dst = Rect(zone.dst.x, zone.dst.y, src.w, src.h)
        elif kind == DST:
            src = Rect(zone.src.x, zone.src.y, floor_size(zone.src.w), floor_size(zone.src.h))
            dst = Rect(rect.x, rect.y, src.w, src.h)
        else:
            raise ValueError(f"Zone side must be 'src' or 'dst', got {kind!r}")

        return ZoneConstraintEngine.normalize(Zone(src=src, dst=dst), source, canvas)

    @staticmethod
    def normalize(zone: Zone, source: Size, canvas: Size) -> Zone:
        """Return a copy of zone with sizes synced and both rectangles clamped into bounds."""
        source_w, source_h = floor_size(source.w), floor_size(source.h)
        canvas_w, canvas_h = floor_size(canvas.w), floor_size(canvas.h)

        # A zone wider than either space cannot lie inside it.
        w = min(floor_size(zone.src.w), source_w, canvas_w)
        h = min(floor_size(zone.src.h), source_h, canvas_h)

        src = Rect(
            x=clamp(zone.src.x, 0, source_w - w),
            y=clamp(zone.src.y, 0, source_h - h),
            w=w,
            h=h,
        )
        dst = Rect(
            x=clamp(zone.dst.x, 0, canvas_w - w),
            y=clamp(zone.dst.y, 0, canvas_h - h),
            w=w,
            h=h,
        )
        if (src.w, src.h) != (zone.src.w, zone.src.h):
            logger.debug(f"Zone size {zone.src.w}x{zone.src.h} corrected to {w}x{h}")
        return Zone(src=src, dst=dst)

    @staticmethod
    def offset(zone: Zone, delta: Union[int, float], source: Size, canvas: Size) -> Zone:
        """Shift both rectangles by delta on each axis, clamped (used when duplicating a zone)."""
        moved = Zone(
            src=Rect(zone.src.x + delta, zone.src.y + delta, zone.src.w, zone.src.h),
            dst=Rect(zone.dst.x + delta, zone.dst.y + delta, zone.dst.w, zone.dst.h),
        )
        return ZoneConstraintEngine.normalize(moved, source, canvas)

    @staticmethod
    def is_valid(zone: Zone, source: Size, canvas: Size) -> bool:
        """True when the zone is 1:1 and both rectangles lie inside their bounds."""
        src, dst = zone.src, zone.dst
        if dst.w != src.w or dst.h != src.h:
            return False
        if src.w < 1 or src.h < 1:
            return False
        inside_source = 0 <= src.x and src.x + src.w <= source.w and 0 <= src.y and src.y + src.h <= source.h
        inside_canvas = 0 <= dst.x and dst.x + dst.w <= canvas.w and 0 <= dst.y and dst.y + dst.h <= canvas.h
        return inside_source and inside_canvas
