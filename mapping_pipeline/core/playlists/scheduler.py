"""
Playlist Scheduler
Reorders per-source clip lists so repeated clips are spaced out.
"""

import logging
import random
from collections import Counter
from typing import List, Optional

logger = logging.getLogger(__name__)

DEFAULT_SHUFFLE_ATTEMPTS = 24


def has_adjacent_duplicate(items: List[str]) -> bool:
    """True when two neighbouring entries are equal."""
    return any(items[i] == items[i - 1] for i in range(1, len(items)))


def spread_playlist(items: List[str]) -> List[str]:
    """
    Deterministic round-robin spread.

    Each pass walks the clip names, most copies left first, and emits one
    copy of every name that still has copies and differs from the item just
    emitted. Names are re-sorted by remaining count after each full pass.
    When a pass emits nothing, only the previous clip is left and it is
    placed anyway, so the result may still hold an adjacent duplicate.
    """
    remaining = Counter(items)
    names = sorted(remaining, key=lambda name: -remaining[name])
    result: List[str] = []

    while len(result) < len(items):
        placed = False
        for name in names:
            if remaining[name] <= 0 or (result and result[-1] == name):
                continue
            result.append(name)
            remaining[name] -= 1
            placed = True

        if not placed:
            name = next(n for n in names if remaining[n] > 0)
            result.append(name)
            remaining[name] -= 1

        names.sort(key=lambda name: -remaining[name])

    return result


def randomize_playlist(
    items: List[str],
    attempts: int = DEFAULT_SHUFFLE_ATTEMPTS,
    rng: Optional[random.Random] = None,
) -> List[str]:
    """
    Reorder items so the result differs from the input and has no adjacent
    duplicates, when that can be found.

    The deterministic spread is tried first. If it changes nothing or still
    repeats a clip back to back, up to ``attempts`` uniform shuffles are
    tried. Falls back to the spread result; never raises.
    """
    if len(items) <= 1:
        return list(items)

    spread = spread_playlist(items)
    if spread != items and not has_adjacent_duplicate(spread):
        return spread

    rng = rng or random.Random()
    for _ in range(attempts):
        candidate = list(items)
        rng.shuffle(candidate)
        if candidate == items or has_adjacent_duplicate(candidate):
            continue
        return candidate

    logger.debug(f"No better order found for {len(items)} clips after {attempts} shuffles")
    return spread


def reorder_slots(
    slots: List[str],
    attempts: int = DEFAULT_SHUFFLE_ATTEMPTS,
    rng: Optional[random.Random] = None,
) -> List[str]:
    """Reorder the filled slots of a playlist; empty slots move to the end."""
    filled = [name for name in slots if name]
    empties = len(slots) - len(filled)
    if len(filled) <= 1:
        return list(slots)
    reordered = randomize_playlist(filled, attempts=attempts, rng=rng)
    return reordered + [""] * empties


def adjust_count(slots: List[str], name: str, delta: int) -> List[str]:
    """
    Add or remove copies of one clip.

    Positive delta appends copies at the end. Negative delta removes
    occurrences starting from the end, at most as many as exist.
    """
    result = list(slots)
    if not name or delta == 0:
        return result

    if delta > 0:
        result.extend([name] * delta)
        return result

    to_remove = min(-delta, result.count(name))
    for i in range(len(result) - 1, -1, -1):
        if to_remove == 0:
            break
        if result[i] == name:
            del result[i]
            to_remove -= 1
    return result
