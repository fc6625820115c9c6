"""
Playlist Matrix
Slot-level playlist editing across all sources, and profile management.

Every function takes a Mapping and returns a new one; the input is left untouched.
"""

import copy
import logging
from typing import Dict, List, Optional

from ...models import Mapping, Source

logger = logging.getLogger(__name__)


def playlist_for(mapping: Mapping, source: Source, profile: Optional[str] = None) -> List[str]:
    """Read-only view of a source's playlist for profile (default: the mapping's selected profile)."""
    name = profile or mapping.playlist_profile()
    return list((source.playlists or {}).get(name, []))


def ensure_playlist(mapping: Mapping, source: Source, profile: Optional[str] = None) -> List[str]:
    """Return the mutable playlist list, creating the map and list on first write."""
    name = profile or mapping.playlist_profile()
    if source.playlists is None:
        source.playlists = {}
    return source.playlists.setdefault(name, [])


def selections(mapping: Mapping, source_idx: int, profile: Optional[str] = None) -> List[str]:
    """Distinct clip names of a playlist in first-appearance order."""
    source = mapping.sources[source_idx]
    return list(dict.fromkeys(n for n in playlist_for(mapping, source, profile) if n))


def clip_counts(mapping: Mapping, source_idx: int, profile: Optional[str] = None) -> Dict[str, int]:
    """How often each clip occurs in a playlist."""
    counts: Dict[str, int] = {}
    for name in playlist_for(mapping, mapping.sources[source_idx], profile):
        if name:
            counts[name] = counts.get(name, 0) + 1
    return counts


def slot_count(mapping: Mapping, profile: Optional[str] = None) -> int:
    """Number of matrix rows: the longest playlist, at least one."""
    lengths = [len(playlist_for(mapping, s, profile)) for s in mapping.sources]
    return max([1] + lengths)


# ── Slot editing ────────────────────────────────────────────────────────────

def set_cell(mapping: Mapping, source_idx: int, slot: int, value: str, profile: Optional[str] = None) -> Mapping:
    """Write one slot, padding the playlist with empty slots up to it."""
    result = copy.deepcopy(mapping)
    items = ensure_playlist(result, result.sources[source_idx], profile)
    while len(items) <= slot:
        items.append("")
    items[slot] = value
    return result


def add_slot_row(mapping: Mapping, profile: Optional[str] = None) -> Mapping:
    """Append one empty slot to every source's playlist."""
    result = copy.deepcopy(mapping)
    for source in result.sources:
        ensure_playlist(result, source, profile).append("")
    return result


def trim_empty_tail(mapping: Mapping, profile: Optional[str] = None) -> Mapping:
    """Drop trailing empty (or whitespace-only) slots from every playlist."""
    result = copy.deepcopy(mapping)
    for source in result.sources:
        name = profile or result.playlist_profile()
        items = (source.playlists or {}).get(name)
        if not items:
            continue
        end = len(items)
        while end > 0 and not items[end - 1].strip():
            end -= 1
        source.playlists[name] = items[:end]
    return result


def remove_slot(mapping: Mapping, slot: int, profile: Optional[str] = None) -> Mapping:
    """Remove one slot index from every playlist that is long enough."""
    result = copy.deepcopy(mapping)
    for source in result.sources:
        items = (source.playlists or {}).get(profile or result.playlist_profile())
        if items is not None and 0 <= slot < len(items):
            del items[slot]
    return result


def move_slot(mapping: Mapping, source_idx: int, from_slot: int, to_slot: int, profile: Optional[str] = None) -> Mapping:
    """Move one entry within a single source's playlist."""
    result = copy.deepcopy(mapping)
    items = ensure_playlist(result, result.sources[source_idx], profile)
    while len(items) <= max(from_slot, to_slot):
        items.append("")
    if from_slot != to_slot:
        items.insert(to_slot, items.pop(from_slot))
    return result


# ── Profiles ────────────────────────────────────────────────────────────────

def add_profile(mapping: Mapping, name: str) -> Mapping:
    """Declare a profile and give every source an empty playlist for it."""
    name = (name or "").strip()
    result = copy.deepcopy(mapping)
    if not name:
        return result
    if result.profiles is None:
        result.profiles = []
    if name not in result.profiles:
        result.profiles.append(name)
        for source in result.sources:
            if source.playlists is None:
                source.playlists = {}
            source.playlists.setdefault(name, [])
        logger.info(f"Profile added: {name}")
    return result


def remove_profile(mapping: Mapping, name: str) -> Mapping:
    """
    Delete a profile everywhere.

    The mapping's active profile falls back to the first remaining one, and
    sources pinned to the deleted profile follow the mapping's.
    """
    result = copy.deepcopy(mapping)
    result.profiles = [p for p in (result.profiles or []) if p != name]
    if result.active_profile == name:
        result.active_profile = result.profiles[0] if result.profiles else None
    for source in result.sources:
        if source.playlists is not None:
            source.playlists.pop(name, None)
        if source.active == name:
            source.active = result.active_profile
    logger.info(f"Profile removed: {name}")
    return result


def set_active_profile(mapping: Mapping, name: str) -> Mapping:
    result = copy.deepcopy(mapping)
    result.active_profile = name
    return result
