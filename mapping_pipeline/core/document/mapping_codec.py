"""
Mapping Document Codec
Validates imported JSON documents and serializes mappings for export
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from ...models import Mapping, OverlayConfig, Rect, Size, Source, Zone

logger = logging.getLogger(__name__)


class MappingDecodeError(Exception):
    """Raised when a mapping document does not have the expected shape."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


def _type_name(value: Any) -> str:
    return type(value).__name__


class MappingCodec:
    """
    Converts between mapping documents (JSON) and typed Mapping values.

    Responsibilities:
    - Validate the whole document before building anything (no partial import).
    - Keep absent optional fields absent.
    - Export verbatim, pretty-printed.
    """

    def __init__(self, indent: int = 2):
        self._indent = indent

    # ------------------------------------------------------------------ export
    def encode(self, mapping: Mapping) -> Dict[str, Any]:
        return mapping.to_dict()

    def dumps(self, mapping: Mapping) -> str:
        return json.dumps(self.encode(mapping), indent=self._indent, ensure_ascii=False)

    def save(self, mapping: Mapping, path: Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.dumps(mapping) + "\n", encoding="utf-8")
        logger.info(f"✓ Mapping exported to {path}")

    # ------------------------------------------------------------------ import
    def loads(self, text: str) -> Mapping:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise MappingDecodeError("", f"Invalid JSON: {e}") from e
        return self.decode(data)

    def load(self, path: Path) -> Mapping:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Mapping document not found: {path}")
        mapping = self.loads(path.read_text(encoding="utf-8"))
        logger.info(f"Mapping imported from {path}: {len(mapping.sources)} sources")
        return mapping

    def decode(self, data: Any) -> Mapping:
        """
        Build a Mapping from a parsed document.

        Raises:
            MappingDecodeError: If any part of the document has the wrong shape.
        """
        doc = self._object(data, "")
        sources = self._list(self._required(doc, "sources", ""), "sources")

        return Mapping(
            canvas=self._size(self._required(doc, "canvas", ""), "canvas"),
            sources=[self._source(s, f"sources[{i}]") for i, s in enumerate(sources)],
            fps=self._optional_number(doc, "fps", ""),
            loop=self._optional_bool(doc, "loop", ""),
            active_profile=self._optional_str(doc, "active_profile", ""),
            profiles=self._optional_str_list(doc, "profiles", ""),
        )

    # ------------------------------------------------------------------ parts
    def _source(self, data: Any, path: str) -> Source:
        obj = self._object(data, path)
        zones = self._list(obj.get("zones", []), f"{path}.zones")
        return Source(
            size=self._size(self._required(obj, "source", path), f"{path}.source"),
            zones=[self._zone(z, f"{path}.zones[{i}]") for i, z in enumerate(zones)],
            media_root=self._optional_str(obj, "media_root", path),
            playlists=self._playlists(obj, path),
            bundles=self._bundles(obj, path),
            active=self._optional_str(obj, "active", path),
            overlay=self._overlay(obj["overlay"], f"{path}.overlay") if obj.get("overlay") is not None else None,
        )

    def _overlay(self, data: Any, path: str) -> OverlayConfig:
        obj = self._object(data, path)
        zones = obj.get("zones")
        if zones is None or zones == "same":
            overlay_zones = zones
        else:
            items = self._list(zones, f"{path}.zones")
            overlay_zones = [self._zone(z, f"{path}.zones[{i}]") for i, z in enumerate(items)]
        return OverlayConfig(
            media_root=self._optional_str(obj, "media_root", path),
            playlist=self._optional_str_list(obj, "playlist", path),
            loop=self._optional_bool(obj, "loop", path),
            zones=overlay_zones,
        )

    def _zone(self, data: Any, path: str) -> Zone:
        obj = self._object(data, path)
        return Zone(
            src=self._rect(self._required(obj, "src", path), f"{path}.src"),
            dst=self._rect(self._required(obj, "dst", path), f"{path}.dst"),
        )

    def _rect(self, data: Any, path: str) -> Rect:
        obj = self._object(data, path)
        return Rect(**{k: self._number(self._required(obj, k, path), f"{path}.{k}") for k in ("x", "y", "w", "h")})

    def _size(self, data: Any, path: str) -> Size:
        obj = self._object(data, path)
        return Size(**{k: self._number(self._required(obj, k, path), f"{path}.{k}") for k in ("w", "h")})

    def _playlists(self, obj: Dict[str, Any], path: str) -> Optional[Dict[str, List[str]]]:
        if obj.get("playlists") is None:
            return None
        playlists = self._object(obj["playlists"], f"{path}.playlists")
        return {
            name: self._str_list(items, f"{path}.playlists.{name}")
            for name, items in playlists.items()
        }

    def _bundles(self, obj: Dict[str, Any], path: str) -> Optional[Dict[str, List[List[str]]]]:
        if obj.get("bundles") is None:
            return None
        bundles = self._object(obj["bundles"], f"{path}.bundles")
        result = {}
        for name, groups in bundles.items():
            groups_path = f"{path}.bundles.{name}"
            result[name] = [
                self._str_list(group, f"{groups_path}[{i}]")
                for i, group in enumerate(self._list(groups, groups_path))
            ]
        return result

    # ------------------------------------------------------------------ primitives
    @staticmethod
    def _join(path: str, key: str) -> str:
        return f"{path}.{key}" if path else key

    def _required(self, obj: Dict[str, Any], key: str, path: str) -> Any:
        if key not in obj:
            raise MappingDecodeError(self._join(path, key), "Missing required field")
        return obj[key]

    def _object(self, value: Any, path: str) -> Dict[str, Any]:
        if not isinstance(value, dict):
            raise MappingDecodeError(path, f"Expected an object, got {_type_name(value)}")
        return value

    def _list(self, value: Any, path: str) -> List[Any]:
        if not isinstance(value, list):
            raise MappingDecodeError(path, f"Expected a list, got {_type_name(value)}")
        return value

    def _number(self, value: Any, path: str):
        # bool is an int subclass but never a valid coordinate
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise MappingDecodeError(path, f"Expected a number, got {_type_name(value)}")
        return value

    def _str_list(self, value: Any, path: str) -> List[str]:
        items = self._list(value, path)
        for i, item in enumerate(items):
            if not isinstance(item, str):
                raise MappingDecodeError(f"{path}[{i}]", f"Expected a string, got {_type_name(item)}")
        return list(items)

    def _optional_number(self, obj: Dict[str, Any], key: str, path: str):
        if obj.get(key) is None:
            return None
        return self._number(obj[key], self._join(path, key))

    def _optional_bool(self, obj: Dict[str, Any], key: str, path: str) -> Optional[bool]:
        if obj.get(key) is None:
            return None
        if not isinstance(obj[key], bool):
            raise MappingDecodeError(self._join(path, key), f"Expected a boolean, got {_type_name(obj[key])}")
        return obj[key]

    def _optional_str(self, obj: Dict[str, Any], key: str, path: str) -> Optional[str]:
        if obj.get(key) is None:
            return None
        if not isinstance(obj[key], str):
            raise MappingDecodeError(self._join(path, key), f"Expected a string, got {_type_name(obj[key])}")
        return obj[key]

    def _optional_str_list(self, obj: Dict[str, Any], key: str, path: str) -> Optional[List[str]]:
        if obj.get(key) is None:
            return None
        return self._str_list(obj[key], self._join(path, key))
