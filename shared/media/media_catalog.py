"""
Media Catalog
Session cache of directory listings for the playlist editor.
"""

import asyncio
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Awaitable, Callable, Dict, List, Optional, Union

if TYPE_CHECKING:
    from mapping_pipeline.models import Mapping

logger = logging.getLogger(__name__)


class MediaListingError(Exception):
    """Raised by a lister when a root cannot be listed."""
    pass


@dataclass(frozen=True)
class Pending:
    """A listing request for the root is in flight."""


@dataclass(frozen=True)
class Ready:
    files: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Failed:
    error: str


RootState = Union[Pending, Ready, Failed]
Lister = Callable[[str], Awaitable[List[str]]]


def sort_file_names(names: List[str]) -> List[str]:
    """Case-insensitive order, stable for names that differ only in case."""
    return sorted(names, key=lambda name: (name.casefold(), name))


class LocalMediaLister:
    """
    Lists the regular files of a directory on the local filesystem.

    The blocking scan runs in a worker thread so the event loop stays free.
    """

    async def __call__(self, root: str) -> List[str]:
        if not root:
            raise MediaListingError("missing root")
        return await asyncio.to_thread(self._scan, root)

    @staticmethod
    def _scan(root: str) -> List[str]:
        path = Path(root)
        try:
            with os.scandir(path) as entries:
                names = [entry.name for entry in entries if entry.is_file()]
        except OSError as e:
            raise MediaListingError(f"{e.strerror or e}: {root}") from e
        return sort_file_names(names)


class MediaCatalog:
    """
    Caches one listing per media root for the lifetime of an editing session.

    Responsibilities:
    - Request each root at most once; skip roots already pending.
    - Record failures as an error string per root (no automatic retry).
    - Serve file lists to the playlist editor without raising.
    """

    def __init__(self, lister: Optional[Lister] = None):
        self._lister: Lister = lister or LocalMediaLister()
        self._states: Dict[str, RootState] = {}

    async def ensure(self, root: str) -> Optional[RootState]:
        """
        Populate the cache for root if nothing is known about it yet.

        Returns:
            The state of root after this call, or None for an empty root.
        """
        if not root:
            return None
        if root in self._states:
            return self._states[root]

        self._states[root] = Pending()
        try:
            files = await self._lister(root)
        except Exception as e:
            message = str(e) or type(e).__name__
            logger.warning(f"Listing failed for media root {root}: {message}")
            self._states[root] = Failed(error=message)
        else:
            logger.info(f"✓ Listed {len(files)} files in {root}")
            self._states[root] = Ready(files=list(files))
        return self._states[root]

    async def ensure_for_mapping(self, mapping: "Mapping") -> None:
        """Warm the cache for every distinct media root used by a mapping's sources."""
        roots = list(dict.fromkeys(s.media_root for s in mapping.sources if s.media_root))
        await asyncio.gather(*(self.ensure(root) for root in roots))

    def state(self, root: str) -> Optional[RootState]:
        return self._states.get(root)

    def is_loading(self, root: str) -> bool:
        return isinstance(self._states.get(root), Pending)

    def has_listing(self, root: str) -> bool:
        """True once a request for root has finished, successfully or not."""
        return isinstance(self._states.get(root), (Ready, Failed))

    def files(self, root: str) -> List[str]:
        """Known files for root; empty while pending, after a failure, or when unknown."""
        state = self._states.get(root)
        return list(state.files) if isinstance(state, Ready) else []

    def error(self, root: str) -> str:
        state = self._states.get(root)
        return state.error if isinstance(state, Failed) else ""

    def missing_files(self, root: str, names: List[str]) -> List[str]:
        """Playlist entries not present in a successful listing of root."""
        state = self._states.get(root)
        if not isinstance(state, Ready):
            return []
        available = set(state.files)
        return [name for name in dict.fromkeys(names) if name and name not in available]
