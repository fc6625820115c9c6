"""
Placement Engine
Tiles every source onto the canvas at 1:1 scale, row by row, in source order.
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import List

from ...models import Mapping, Rect, Zone

logger = logging.getLogger(__name__)


@dataclass
class PlacementResult:
    """Outcome of an auto-placement run."""
    mapping: Mapping
    placed: List[int] = field(default_factory=list)
    partial: List[int] = field(default_factory=list)
    skipped: List[int] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.partial and not self.skipped


def auto_placement_no_scale(mapping: Mapping) -> PlacementResult:
    """
    Regenerate the zones of every source without scaling.

    Each source is cut into horizontal slices of at most the remaining canvas
    row width. One cursor walks the canvas for all sources; a new row starts
    when the cursor reaches the right edge and is as tall as the source that
    opens it. When a row would run past the bottom edge the whole run stops:
    zones emitted so far are kept and later sources stay empty.

    Args:
        mapping: The mapping to lay out. It is not modified.

    Returns:
        PlacementResult: The new mapping plus which sources were fully placed,
        partially placed, or skipped.
    """
    result = PlacementResult(mapping=copy.deepcopy(mapping))
    sources = result.mapping.sources
    canvas_w = max(1, result.mapping.canvas.w)
    canvas_h = max(1, result.mapping.canvas.h)

    for source in sources:
        source.zones = []

    cursor_x = 0
    cursor_y = 0
    aborted_at = None

    for index, source in enumerate(sources):
        source_w = max(1, source.size.w)
        source_h = max(1, source.size.h)
        remaining = source_w
        source_x = 0

        while remaining > 0:
            if cursor_x >= canvas_w:
                cursor_x, cursor_y = 0, cursor_y + source_h
            if cursor_y + source_h > canvas_h:
                aborted_at = index
                break

            slice_w = min(canvas_w - cursor_x, remaining)
            source.zones.append(Zone(
                src=Rect(x=source_x, y=0, w=slice_w, h=source_h),
                dst=Rect(x=cursor_x, y=cursor_y, w=slice_w, h=source_h),
            ))

            cursor_x += slice_w
            source_x += slice_w
            remaining -= slice_w

            if cursor_x >= canvas_w and remaining > 0:
                cursor_x, cursor_y = 0, cursor_y + source_h

        if aborted_at is not None:
            break
        result.placed.append(index)

    if aborted_at is not None:
        for index in range(aborted_at, len(sources)):
            if sources[index].zones:
                result.partial.append(index)
            else:
                result.skipped.append(index)
        logger.warning(
            f"Auto-placement ran out of canvas height at source {aborted_at}: "
            f"partial={result.partial} skipped={result.skipped}"
        )

    logger.info(
        f"Auto-placement: {len(result.placed)}/{len(sources)} sources placed on "
        f"{canvas_w}x{canvas_h} canvas"
    )
    return result
