"""
Tests for playlist spreading, the random fallback and count adjustment.
"""

import random
from collections import Counter

from mapping_pipeline.core.playlists.scheduler import (
    adjust_count,
    has_adjacent_duplicate,
    randomize_playlist,
    reorder_slots,
    spread_playlist,
)


class TestSpreadPlaylist:

    def test_spread_avoids_adjacent_duplicates(self):
        """Max multiplicity 3 <= ceil(5/2): a clean arrangement exists and is found."""
        items = ["a", "a", "a", "b", "b"]
        result = spread_playlist(items)

        assert result == ["a", "b", "a", "b", "a"]
        assert not has_adjacent_duplicate(result)

    def test_spread_is_a_permutation_when_impossible(self):
        """Max multiplicity 4 > ceil(5/2): some duplicate is unavoidable, nothing raises."""
        items = ["a", "a", "a", "a", "b"]
        result = spread_playlist(items)

        assert Counter(result) == Counter(items)

    def test_spread_is_deterministic(self):
        items = ["c", "a", "b", "a", "c", "a"]
        assert spread_playlist(items) == spread_playlist(list(items))

    def test_round_robin_emits_every_name_per_pass(self):
        assert spread_playlist(["a", "a", "b", "b", "c", "c"]) == ["a", "b", "c", "a", "b", "c"]

    def test_passes_start_with_most_copies_left(self):
        items = ["a", "b", "b", "b", "c", "c"]
        assert spread_playlist(items) == ["b", "c", "a", "b", "c", "b"]

    def test_single_leftover_clip_is_placed_anyway(self):
        assert spread_playlist(["a", "a", "a", "b", "c"]) == ["a", "b", "c", "a", "a"]

    def test_round_robin_can_leave_a_duplicate(self):
        """b b b b a a c c has a clean order, but the passes end on a forced repeat."""
        items = ["b", "b", "b", "b", "a", "a", "c", "c"]
        result = spread_playlist(items)

        assert result == ["b", "a", "c", "b", "a", "c", "b", "b"]
        assert has_adjacent_duplicate(result)

    def test_spread_handles_many_random_multisets(self):
        rng = random.Random(0)
        for _ in range(300):
            names = [f"clip{i}" for i in range(rng.randint(1, 5))]
            items = [rng.choice(names) for _ in range(rng.randint(1, 12))]
            result = spread_playlist(items)

            assert Counter(result) == Counter(items)
            if len(Counter(items)) == 1:
                assert result == items

    def test_empty_input(self):
        assert spread_playlist([]) == []


class TestRandomizePlaylist:

    def test_prefers_spread_when_it_changes_order(self):
        assert randomize_playlist(["a", "a", "b", "b"]) == ["a", "b", "a", "b"]

    def test_falls_back_to_shuffle_when_spread_changes_nothing(self):
        """Distinct clips already in spread order still get a new order."""
        items = ["a", "b", "c"]
        result = randomize_playlist(items, rng=random.Random(3))

        assert result != items
        assert sorted(result) == items

    def test_returns_spread_when_nothing_better_exists(self):
        """a b a b a is the only clean arrangement; it comes back unchanged."""
        items = ["a", "b", "a", "b", "a"]
        assert randomize_playlist(items, rng=random.Random(5)) == items

    def test_impossible_input_does_not_raise(self):
        items = ["a", "a", "a", "a", "b"]
        result = randomize_playlist(items, rng=random.Random(9))

        assert Counter(result) == Counter(items)

    def test_zero_attempts_returns_spread(self):
        items = ["a", "b", "c"]
        assert randomize_playlist(items, attempts=0) == spread_playlist(items)

    def test_single_item(self):
        assert randomize_playlist(["only"]) == ["only"]


class TestReorderSlots:

    def test_empty_slots_move_to_the_end(self):
        result = reorder_slots(["a", "", "a", "b", ""])

        assert result == ["a", "b", "a", "", ""]

    def test_single_filled_slot_is_untouched(self):
        slots = ["", "a", ""]
        assert reorder_slots(slots) == slots


class TestAdjustCount:

    def test_increase_appends_copies(self):
        assert adjust_count(["a", "b"], "c", 2) == ["a", "b", "c", "c"]

    def test_decrease_removes_from_the_end(self):
        assert adjust_count(["a", "b", "a", "c"], "a", -1) == ["a", "b", "c"]

    def test_over_removal_is_capped(self):
        assert adjust_count(["a", "b", "a"], "a", -5) == ["b"]

    def test_increase_then_decrease_restores_the_list(self):
        original = ["x", "y", "x", ""]
        changed = adjust_count(original, "x", 3)

        assert changed.count("x") == 5
        assert adjust_count(changed, "x", -3) == original

    def test_empty_name_or_zero_delta_is_a_no_op(self):
        assert adjust_count(["a"], "", 3) == ["a"]
        assert adjust_count(["a"], "a", 0) == ["a"]

    def test_input_list_is_not_modified(self):
        slots = ["a", "a"]
        adjust_count(slots, "a", -1)
        assert slots == ["a", "a"]
