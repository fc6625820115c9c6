"""
Media listing cache shared by the pipelines
"""

from .media_catalog import LocalMediaLister, MediaCatalog, MediaListingError

__all__ = ["LocalMediaLister", "MediaCatalog", "MediaListingError"]
