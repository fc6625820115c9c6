"""
Mapping document import/export
"""

from .mapping_codec import MappingCodec, MappingDecodeError

__all__ = ["MappingCodec", "MappingDecodeError"]
