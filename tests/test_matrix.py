"""
Tests for playlist slot editing and profile management.
"""

import copy

from mapping_pipeline.core.playlists import matrix
from mapping_pipeline.models import Mapping, Size, Source


class TestSlotEditing:

    def test_set_cell_pads_with_empty_slots(self, mapping):
        result = matrix.set_cell(mapping, 0, 5, "c.mp4")

        assert result.sources[0].playlists["default"] == ["a.mp4", "a.mp4", "b.mp4", "", "", "c.mp4"]

    def test_set_cell_creates_playlist_map_lazily(self):
        mapping = Mapping(canvas=Size(10, 10), sources=[Source(size=Size(5, 5))])
        result = matrix.set_cell(mapping, 0, 0, "clip.mp4")

        assert result.sources[0].playlists == {"default": ["clip.mp4"]}
        assert mapping.sources[0].playlists is None

    def test_add_slot_row_extends_every_source(self, mapping):
        result = matrix.add_slot_row(mapping)

        assert result.sources[0].playlists["default"][-1] == ""
        assert len(result.sources[1].playlists["default"]) == 4

    def test_trim_empty_tail(self, mapping):
        padded = matrix.set_cell(mapping, 1, 6, "  ")
        result = matrix.trim_empty_tail(padded)

        assert result.sources[1].playlists["default"] == ["x.mp4", "", "y.mp4"]

    def test_remove_slot_applies_to_all_sources(self, mapping):
        result = matrix.remove_slot(mapping, 1)

        assert result.sources[0].playlists["default"] == ["a.mp4", "b.mp4"]
        assert result.sources[1].playlists["default"] == ["x.mp4", "y.mp4"]

    def test_remove_slot_beyond_length_is_ignored(self, mapping):
        result = matrix.remove_slot(mapping, 10)
        assert result == mapping

    def test_move_slot_within_one_source(self, mapping):
        result = matrix.move_slot(mapping, 0, 2, 0)

        assert result.sources[0].playlists["default"] == ["b.mp4", "a.mp4", "a.mp4"]
        assert result.sources[1].playlists == mapping.sources[1].playlists

    def test_explicit_profile(self, mapping):
        result = matrix.set_cell(mapping, 1, 0, "w.mp4", profile="night")

        assert result.sources[1].playlists["night"] == ["w.mp4"]
        assert result.sources[1].playlists["default"] == ["x.mp4", "", "y.mp4"]

    def test_input_is_never_mutated(self, mapping):
        before = copy.deepcopy(mapping)
        matrix.set_cell(mapping, 0, 0, "changed")
        matrix.add_slot_row(mapping)
        matrix.remove_slot(mapping, 0)
        assert mapping == before


class TestViews:

    def test_selections_in_first_appearance_order(self, mapping):
        assert matrix.selections(mapping, 0) == ["a.mp4", "b.mp4"]

    def test_clip_counts_skip_empty_slots(self, mapping):
        assert matrix.clip_counts(mapping, 1) == {"x.mp4": 1, "y.mp4": 1}

    def test_slot_count_is_longest_playlist(self, mapping):
        assert matrix.slot_count(mapping) == 3
        assert matrix.slot_count(mapping, profile="night") == 1


class TestProfiles:

    def test_add_profile_creates_empty_lists(self, mapping):
        result = matrix.add_profile(mapping, "  show ")

        assert result.profiles == ["default", "night", "show"]
        assert all(s.playlists["show"] == [] for s in result.sources)

    def test_add_existing_or_blank_profile_changes_nothing(self, mapping):
        assert matrix.add_profile(mapping, "night") == mapping
        assert matrix.add_profile(mapping, "   ") == mapping

    def test_remove_active_profile_falls_back_to_first_remaining(self, mapping):
        result = matrix.remove_profile(mapping, "default")

        assert result.profiles == ["night"]
        assert result.active_profile == "night"
        assert all("default" not in s.playlists for s in result.sources)

    def test_remove_last_profile_clears_active(self):
        mapping = Mapping(canvas=Size(1, 1), active_profile="only", profiles=["only"])
        result = matrix.remove_profile(mapping, "only")

        assert result.profiles == []
        assert result.active_profile is None

    def test_set_active_profile(self, mapping):
        assert matrix.set_active_profile(mapping, "night").active_profile == "night"

    def test_active_profile_applies_to_every_source(self, mapping):
        """source 0 stores active="default" but still follows the mapping's profile."""
        switched = matrix.set_active_profile(mapping, "night")

        assert matrix.playlist_for(switched, switched.sources[0]) == []
        assert matrix.playlist_for(switched, switched.sources[1]) == ["z.mp4"]

        result = matrix.set_cell(switched, 0, 0, "x.mp4")
        assert result.sources[0].playlists["night"] == ["x.mp4"]
        assert result.sources[0].playlists["default"] == ["a.mp4", "a.mp4", "b.mp4"]

    def test_remove_profile_repoints_pinned_sources(self, mapping):
        result = matrix.remove_profile(mapping, "default")

        assert result.sources[0].active == "night"
        assert result.sources[1].active is None

    def test_removed_profile_is_not_recreated_by_later_edits(self, mapping):
        result = matrix.remove_profile(mapping, "default")
        result = matrix.set_cell(result, 0, 0, "clip.mp4")
        result = matrix.add_slot_row(result)

        for source in result.sources:
            assert set(source.playlists) == {"night"}
        assert result.sources[0].playlists["night"] == ["clip.mp4", ""]
