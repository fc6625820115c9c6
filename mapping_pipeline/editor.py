"""
Mapping Editor
Every user-level edit of a mapping, each returning a new, valid Mapping.
"""

import copy
import logging
import random
from typing import List, Optional

from .core.config import EditorConfig
from .core.geometry.constraints import DST, SRC, ZoneConstraintEngine, floor_size
from .core.geometry.placement import PlacementResult, auto_placement_no_scale
from .core.playlists import matrix, scheduler
from .models import Mapping, Number, OverlayConfig, Rect, Size, Source, Zone

logger = logging.getLogger(__name__)

_UNSET = object()


class MappingEditor:
    """
    Hub for mapping edits.

    Geometry edits go through the ZoneConstraintEngine so that zones stay 1:1
    and in bounds; playlist edits go through the scheduler and matrix helpers.
    Inputs are never mutated.
    """

    def __init__(self, config: Optional[EditorConfig] = None, rng: Optional[random.Random] = None):
        self.config = config or EditorConfig()
        self._rng = rng or random.Random()

    # ------------------------------------------------------------------ mapping
    def new_mapping(self) -> Mapping:
        """A fresh mapping with one empty source, sized from the configuration."""
        cw, ch = self.config.canvas_size
        profile = self.config.default_profile
        return Mapping(
            canvas=Size(cw, ch),
            fps=self.config.fps,
            loop=self.config.loop,
            active_profile=profile,
            profiles=[profile],
            sources=[self._blank_source()],
        )

    def set_canvas(self, mapping: Mapping, w: Optional[Number] = None, h: Optional[Number] = None) -> Mapping:
        """Resize the canvas and pull every zone back inside it."""
        result = copy.deepcopy(mapping)
        if w is not None:
            result.canvas.w = floor_size(w)
        if h is not None:
            result.canvas.h = floor_size(h)
        for source in result.sources:
            self._renormalize(result, source)
        logger.info(f"Canvas set to {result.canvas.w}x{result.canvas.h}")
        return result

    def set_playback(self, mapping: Mapping, fps=_UNSET, loop=_UNSET) -> Mapping:
        result = copy.deepcopy(mapping)
        if fps is not _UNSET:
            result.fps = fps
        if loop is not _UNSET:
            result.loop = loop
        return result

    def check(self, mapping: Mapping) -> List[str]:
        """List invariant violations in a mapping, e.g. one imported from a hand-edited file."""
        problems = []
        for si, source in enumerate(mapping.sources):
            for zi, zone in enumerate(source.zones):
                if not ZoneConstraintEngine.is_valid(zone, source.size, mapping.canvas):
                    problems.append(f"sources[{si}].zones[{zi}] is not 1:1 or out of bounds")
            # entries for known profiles are created lazily, so only strays are reported
            if source.playlists is not None and mapping.profiles is not None:
                for profile in source.playlists:
                    if profile not in mapping.profiles:
                        problems.append(f"sources[{si}].playlists has an entry for unknown profile '{profile}'")
        return problems

    # ------------------------------------------------------------------ sources
    def add_source(self, mapping: Mapping) -> Mapping:
        result = copy.deepcopy(mapping)
        result.sources.append(self._blank_source())
        logger.info(f"Source {len(result.sources) - 1} added")
        return result

    def delete_source(self, mapping: Mapping, source_idx: int) -> Mapping:
        result = copy.deepcopy(mapping)
        del result.sources[source_idx]
        logger.info(f"Source {source_idx} deleted")
        return result

    def set_source_size(self, mapping: Mapping, source_idx: int, w: Optional[Number] = None, h: Optional[Number] = None) -> Mapping:
        """Resize a source and pull its zones back inside it."""
        result = copy.deepcopy(mapping)
        source = result.sources[source_idx]
        if w is not None:
            source.size.w = floor_size(w)
        if h is not None:
            source.size.h = floor_size(h)
        self._renormalize(result, source)
        return result

    def set_media_root(self, mapping: Mapping, source_idx: int, media_root: str) -> Mapping:
        result = copy.deepcopy(mapping)
        result.sources[source_idx].media_root = media_root
        return result

    def set_source_profile(self, mapping: Mapping, source_idx: int, profile: Optional[str]) -> Mapping:
        result = copy.deepcopy(mapping)
        result.sources[source_idx].active = profile
        return result

    def update_overlay(self, mapping: Mapping, source_idx: int, media_root=_UNSET, playlist=_UNSET, loop=_UNSET, zones=_UNSET) -> Mapping:
        """Set overlay fields of a source, creating the overlay on first write."""
        result = copy.deepcopy(mapping)
        source = result.sources[source_idx]
        if source.overlay is None:
            source.overlay = OverlayConfig()
        if media_root is not _UNSET:
            source.overlay.media_root = media_root
        if playlist is not _UNSET:
            source.overlay.playlist = [name.strip() for name in playlist if name.strip()] if playlist is not None else None
        if loop is not _UNSET:
            source.overlay.loop = loop
        if zones is not _UNSET:
            if zones is None or zones == "same":
                source.overlay.zones = zones
            else:
                source.overlay.zones = [
                    ZoneConstraintEngine.normalize(z, source.size, result.canvas) for z in zones
                ]
        return result

    # ------------------------------------------------------------------ zones
    def add_zone(self, mapping: Mapping, source_idx: int) -> Mapping:
        """Append a default zone at the origin of both spaces."""
        result = copy.deepcopy(mapping)
        source = result.sources[source_idx]
        zw, zh = self.config.new_zone_size
        w = min(zw, source.size.w)
        h = min(zh, source.size.h)
        zone = Zone(src=Rect(0, 0, w, h), dst=Rect(0, 0, w, h))
        source.zones.append(ZoneConstraintEngine.normalize(zone, source.size, result.canvas))
        return result

    def copy_zone(self, mapping: Mapping, source_idx: int, zone_idx: int) -> Mapping:
        """Duplicate a zone, shifted by the configured offset in both spaces."""
        result = copy.deepcopy(mapping)
        source = result.sources[source_idx]
        duplicate = ZoneConstraintEngine.offset(
            source.zones[zone_idx], self.config.copy_offset, source.size, result.canvas
        )
        source.zones.append(duplicate)
        return result

    def remove_zone(self, mapping: Mapping, source_idx: int, zone_idx: int) -> Mapping:
        result = copy.deepcopy(mapping)
        del result.sources[source_idx].zones[zone_idx]
        return result

    def move_zone_rect(self, mapping: Mapping, source_idx: int, zone_idx: int, kind: str, rect: Rect) -> Mapping:
        """Replace one side of a zone (as a drag does) and re-apply the constraints."""
        result = copy.deepcopy(mapping)
        source = result.sources[source_idx]
        zone = source.zones[zone_idx]
        source.zones[zone_idx] = ZoneConstraintEngine.apply_edit(zone, kind, rect, source.size, result.canvas)
        return result

    def edit_zone(self, mapping: Mapping, source_idx: int, zone_idx: int, kind: str, **fields: Number) -> Mapping:
        """Change individual fields (x, y, w, h) of one side of a zone."""
        if kind not in (SRC, DST):
            raise ValueError(f"Zone side must be 'src' or 'dst', got {kind!r}")
        unknown = set(fields) - {"x", "y", "w", "h"}
        if unknown:
            raise ValueError(f"Unknown rectangle fields: {sorted(unknown)}")
        current = getattr(mapping.sources[source_idx].zones[zone_idx], kind)
        rect = Rect(**{**current.to_dict(), **fields})
        return self.move_zone_rect(mapping, source_idx, zone_idx, kind, rect)

    def auto_place(self, mapping: Mapping) -> PlacementResult:
        return auto_placement_no_scale(mapping)

    # ------------------------------------------------------------------ playlists
    def shuffle_source(self, mapping: Mapping, source_idx: int, profile: Optional[str] = None) -> Mapping:
        """Spread out repeated clips in one source's playlist."""
        result = copy.deepcopy(mapping)
        source = result.sources[source_idx]
        items = matrix.ensure_playlist(result, source, profile)
        reordered = scheduler.reorder_slots(items, attempts=self.config.shuffle_attempts, rng=self._rng)
        items[:] = reordered
        return result

    def adjust_count(self, mapping: Mapping, source_idx: int, name: str, delta: int, profile: Optional[str] = None) -> Mapping:
        result = copy.deepcopy(mapping)
        if not name:
            return result
        items = matrix.ensure_playlist(result, result.sources[source_idx], profile)
        items[:] = scheduler.adjust_count(items, name, delta)
        return result

    def set_cell(self, mapping: Mapping, source_idx: int, slot: int, value: str, profile: Optional[str] = None) -> Mapping:
        return matrix.set_cell(mapping, source_idx, slot, value, profile)

    def add_slot_row(self, mapping: Mapping, profile: Optional[str] = None) -> Mapping:
        return matrix.add_slot_row(mapping, profile)

    def trim_empty_tail(self, mapping: Mapping, profile: Optional[str] = None) -> Mapping:
        return matrix.trim_empty_tail(mapping, profile)

    def remove_slot(self, mapping: Mapping, slot: int, profile: Optional[str] = None) -> Mapping:
        return matrix.remove_slot(mapping, slot, profile)

    def move_slot(self, mapping: Mapping, source_idx: int, from_slot: int, to_slot: int, profile: Optional[str] = None) -> Mapping:
        return matrix.move_slot(mapping, source_idx, from_slot, to_slot, profile)

    def add_profile(self, mapping: Mapping, name: str) -> Mapping:
        return matrix.add_profile(mapping, name)

    def remove_profile(self, mapping: Mapping, name: str) -> Mapping:
        return matrix.remove_profile(mapping, name)

    def set_active_profile(self, mapping: Mapping, name: str) -> Mapping:
        return matrix.set_active_profile(mapping, name)

    # ------------------------------------------------------------------ helpers
    def _blank_source(self) -> Source:
        sw, sh = self.config.new_source_size
        return Source(size=Size(sw, sh), zones=[], playlists={}, active=self.config.default_profile)

    @staticmethod
    def _renormalize(mapping: Mapping, source: Source) -> None:
        source.zones = [ZoneConstraintEngine.normalize(z, source.size, mapping.canvas) for z in source.zones]
