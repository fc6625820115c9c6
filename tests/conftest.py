"""
Shared fixtures for the mapping pipeline tests.
"""

import random

import pytest

from mapping_pipeline.core.config import EditorConfig
from mapping_pipeline.editor import MappingEditor
from mapping_pipeline.models import Mapping, Rect, Size, Source, Zone


@pytest.fixture
def editor():
    """Editor with default configuration and a seeded random fallback."""
    return MappingEditor(EditorConfig(), rng=random.Random(1234))


@pytest.fixture
def mapping():
    """Two sources on a 1000x500 canvas, with zones and playlists in two profiles."""
    return Mapping(
        canvas=Size(1000, 500),
        fps=60,
        loop=True,
        active_profile="default",
        profiles=["default", "night"],
        sources=[
            Source(
                size=Size(300, 100),
                zones=[Zone(src=Rect(0, 0, 300, 100), dst=Rect(0, 0, 300, 100))],
                media_root="/media/wall-a",
                playlists={"default": ["a.mp4", "a.mp4", "b.mp4"], "night": []},
                active="default",
            ),
            Source(
                size=Size(200, 50),
                zones=[],
                playlists={"default": ["x.mp4", "", "y.mp4"], "night": ["z.mp4"]},
            ),
        ],
    )
