# ABOUTME: Locates and opens the per-floor map tile stores (map_floor_{n}.mbtiles)
# ABOUTME: Checks the user map directory before the bundled one; each floor gets its own store and cache

from pathlib import Path

from osrswiki.config import get_config
from osrswiki.maps.cache import TileCache
from osrswiki.maps.store import TileStore, TileStoreOpenError
from osrswiki.utils.logging import get_logger

FLOOR_FILE_TEMPLATE = "map_floor_{floor}.mbtiles"
MIN_FLOOR = 0
MAX_FLOOR = 3


class MapFloorLocator:
    """Resolves game map floors to tile store files."""

    def __init__(
        self,
        map_directory: Path | None = None,
        bundled_directory: Path | None = None,
        cache_max_bytes: int | None = None,
        cache_max_entries: int | None = None,
    ):
        config = get_config()
        self.search_paths = [
            directory
            for directory in (map_directory or config.map_directory, bundled_directory or config.bundled_map_directory)
            if directory is not None
        ]
        self.cache_max_bytes = config.tile_cache_max_bytes if cache_max_bytes is None else cache_max_bytes
        self.cache_max_entries = config.tile_cache_max_entries if cache_max_entries is None else cache_max_entries
        self.logger = get_logger(__name__)

    def locate_floor(self, floor: int) -> Path | None:
        """Return the first existing store file for a floor, or None."""
        if not MIN_FLOOR <= floor <= MAX_FLOOR:
            raise ValueError(f"Floor must be between {MIN_FLOOR} and {MAX_FLOOR}, got {floor}")

        file_name = FLOOR_FILE_TEMPLATE.format(floor=floor)
        for directory in self.search_paths:
            candidate = Path(directory) / file_name
            if candidate.is_file():
                return candidate
        return None

    def available_floors(self) -> list[int]:
        return [floor for floor in range(MIN_FLOOR, MAX_FLOOR + 1) if self.locate_floor(floor) is not None]

    def open_floor(self, floor: int) -> TileStore:
        """Open the tile store for a floor.

        Raises:
            TileStoreOpenError: If no store file exists for the floor or it cannot be opened
        """
        path = self.locate_floor(floor)
        if path is None:
            self.logger.warning("Map floor not found", floor=floor, search_paths=[str(p) for p in self.search_paths])
            raise TileStoreOpenError(f"No tile store found for floor {floor}")

        return TileStore.open(path, cache=TileCache(self.cache_max_bytes, self.cache_max_entries))
