# ABOUTME: Offline map tile store pipeline
# ABOUTME: Coordinate transforms, bounded tile cache, read-only MBTiles store and floor lookup

from .cache import TileCache
from .floors import MapFloorLocator
from .models import BoundingBox, TileAddress, TileStoreMetadata, parse_metadata
from .store import TileStore, TileStoreError, TileStoreOpenError
from .transform import (
    game_content_bounds,
    game_to_geographic,
    geographic_to_game,
    native_row_to_xyz_row,
    xyz_row_to_native_row,
)

__all__ = [
    "BoundingBox",
    "MapFloorLocator",
    "TileAddress",
    "TileCache",
    "TileStore",
    "TileStoreError",
    "TileStoreMetadata",
    "TileStoreOpenError",
    "game_content_bounds",
    "game_to_geographic",
    "geographic_to_game",
    "native_row_to_xyz_row",
    "parse_metadata",
    "xyz_row_to_native_row",
]
