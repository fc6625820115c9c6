from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

Number = Union[int, float]


@dataclass
class Rect:
    """An axis-aligned rectangle in either source or canvas pixel space."""
    x: Number = 0
    y: Number = 0
    w: Number = 1
    h: Number = 1

    def to_dict(self) -> Dict[str, Number]:
        return {"x": self.x, "y": self.y, "w": self.w, "h": self.h}


@dataclass
class Size:
    """Pixel dimensions of a source feed or of the canvas."""
    w: Number = 1
    h: Number = 1

    def to_dict(self) -> Dict[str, Number]:
        return {"w": self.w, "h": self.h}


@dataclass
class Zone:
    """A 1:1 placement of a source region (src) onto the canvas (dst)."""
    src: Rect
    dst: Rect

    def to_dict(self) -> Dict[str, Any]:
        return {"src": self.src.to_dict(), "dst": self.dst.to_dict()}


@dataclass
class OverlayConfig:
    """Secondary layer drawn over a source. zones == "same" reuses the source zones."""
    media_root: Optional[str] = None
    playlist: Optional[List[str]] = None
    loop: Optional[bool] = None
    zones: Optional[Union[str, List[Zone]]] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.media_root is not None:
            data["media_root"] = self.media_root
        if self.playlist is not None:
            data["playlist"] = list(self.playlist)
        if self.loop is not None:
            data["loop"] = self.loop
        if self.zones is not None:
            data["zones"] = self.zones if isinstance(self.zones, str) else [z.to_dict() for z in self.zones]
        return data


@dataclass
class Source:
    """One video feed definition with its zones and per-profile playlists."""
    size: Size
    zones: List[Zone] = field(default_factory=list)
    media_root: Optional[str] = None
    playlists: Optional[Dict[str, List[str]]] = None
    bundles: Optional[Dict[str, List[List[str]]]] = None
    active: Optional[str] = None
    overlay: Optional[OverlayConfig] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.media_root is not None:
            data["media_root"] = self.media_root
        if self.playlists is not None:
            data["playlists"] = {name: list(items) for name, items in self.playlists.items()}
        if self.bundles is not None:
            data["bundles"] = {name: [list(group) for group in groups] for name, groups in self.bundles.items()}
        if self.active is not None:
            data["active"] = self.active
        data["source"] = self.size.to_dict()
        data["zones"] = [z.to_dict() for z in self.zones]
        if self.overlay is not None:
            data["overlay"] = self.overlay.to_dict()
        return data


@dataclass
class Mapping:
    """Root aggregate: the canvas, global playback settings, profiles and sources."""
    canvas: Size
    sources: List[Source] = field(default_factory=list)
    fps: Optional[Number] = None
    loop: Optional[bool] = None
    active_profile: Optional[str] = None
    profiles: Optional[List[str]] = None

    def profile_names(self) -> List[str]:
        """Declared profiles, or the implicit single "default" profile."""
        return list(self.profiles) if self.profiles is not None else ["default"]

    def playlist_profile(self) -> str:
        """The profile playlist edits apply to, for all sources at once."""
        if self.active_profile:
            return self.active_profile
        names = self.profile_names()
        return names[0] if names else "default"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"canvas": self.canvas.to_dict()}
        if self.fps is not None:
            data["fps"] = self.fps
        if self.loop is not None:
            data["loop"] = self.loop
        if self.active_profile is not None:
            data["active_profile"] = self.active_profile
        if self.profiles is not None:
            data["profiles"] = list(self.profiles)
        data["sources"] = [s.to_dict() for s in self.sources]
        return data
