"""Domain entities for internal representation.

Pure frozen dataclasses passed between services and handlers.
They carry no HTTP or serialization concerns.
"""

from .image_lookup import ImageLookup, LookupSource

__all__ = ["ImageLookup", "LookupSource"]
