"""
Editor Configuration Model
Represents a validated configuration state
"""

from typing import Tuple


class EditorConfig:
    """
    Immutable configuration object for the mapping editor.

    Represents a VALID configuration state only.
    All validation must be performed before instantiation.
    """

    def __init__(
        self,
        canvas_size: Tuple[int, int] = (3840, 2160),
        fps: int = 60,
        loop: bool = True,
        default_profile: str = "default",
        new_source_size: Tuple[int, int] = (1920, 108),
        new_zone_size: Tuple[int, int] = (1920, 108),
        copy_offset: int = 10,
        shuffle_attempts: int = 24,
        export_indent: int = 2,
        logs_dir: str = "logs",
    ):
        """
        Initialize EditorConfig with validated values.

        Args:
            canvas_size: Canvas (w, h) of a new mapping
            fps: Frame rate of a new mapping
            loop: Loop flag of a new mapping
            default_profile: Profile name a new mapping starts with
            new_source_size: Source (w, h) used by "add source"
            new_zone_size: Upper bound of the zone size used by "add zone"
            copy_offset: Offset in pixels applied when duplicating a zone
            shuffle_attempts: Random shuffles tried by the playlist scheduler
            export_indent: JSON indentation of exported documents
            logs_dir: Directory for the log file
        """
        self._canvas_size = canvas_size
        self._fps = fps
        self._loop = loop
        self._default_profile = default_profile
        self._new_source_size = new_source_size
        self._new_zone_size = new_zone_size
        self._copy_offset = copy_offset
        self._shuffle_attempts = shuffle_attempts
        self._export_indent = export_indent
        self._logs_dir = logs_dir

    @property
    def canvas_size(self) -> Tuple[int, int]:
        return self._canvas_size

    @property
    def fps(self) -> int:
        return self._fps

    @property
    def loop(self) -> bool:
        return self._loop

    @property
    def default_profile(self) -> str:
        return self._default_profile

    @property
    def new_source_size(self) -> Tuple[int, int]:
        return self._new_source_size

    @property
    def new_zone_size(self) -> Tuple[int, int]:
        return self._new_zone_size

    @property
    def copy_offset(self) -> int:
        return self._copy_offset

    @property
    def shuffle_attempts(self) -> int:
        """Random shuffles tried before falling back to the deterministic spread."""
        return self._shuffle_attempts

    @property
    def export_indent(self) -> int:
        return self._export_indent

    @property
    def logs_dir(self) -> str:
        return self._logs_dir

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"EditorConfig(canvas={self.canvas_size[0]}x{self.canvas_size[1]}, "
            f"fps={self.fps}, default_profile={self.default_profile!r}, "
            f"shuffle_attempts={self.shuffle_attempts})"
        )
