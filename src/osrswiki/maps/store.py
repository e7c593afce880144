# ABOUTME: Read-only MBTiles tile store with an in-memory LRU cache in front of SQLite
# ABOUTME: Safe for concurrent readers; per-call read errors degrade to "tile absent"

import sqlite3
from pathlib import Path
from types import TracebackType
from urllib.parse import quote

from sqlalchemy import Engine, create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import QueuePool
from sqlmodel import Session, select

from osrswiki.maps.cache import TileCache
from osrswiki.maps.models import MetadataEntry, Tile, TileAddress, TileStoreMetadata, parse_metadata
from osrswiki.maps.transform import xyz_row_to_native_row
from osrswiki.utils.logging import get_logger, with_store_context

logger = get_logger(__name__)


class TileStoreError(Exception):
    """Base exception for tile store failures."""

    pass


class TileStoreOpenError(TileStoreError):
    """Raised when a store file is missing or unreadable; the store is unusable."""

    pass


def _create_readonly_engine(path: Path) -> Engine:
    uri = f"file:{quote(path.resolve().as_posix())}?mode=ro"

    def connect() -> sqlite3.Connection:
        return sqlite3.connect(uri, uri=True, check_same_thread=False)

    # One pooled connection per concurrent reader
    return create_engine("sqlite://", creator=connect, poolclass=QueuePool, pool_size=4, max_overflow=8)


class TileStore:
    """Tile lookups by consumer-facing (XYZ) address.

    The XYZ -> TMS row flip happens once per persistent lookup. The cache is keyed on the
    XYZ address, so cache hits never see a flipped row.

    Concurrency: every lookup checks a connection out of the engine's pool, so concurrent
    callers each use their own SQLite connection; the cache has its own lock.
    """

    def __init__(self, path: Path, engine: Engine, cache: TileCache, raw_metadata: dict[str, str]):
        self.path = path
        self.engine = engine
        self.cache = cache
        self._raw_metadata = raw_metadata
        self._metadata = parse_metadata(raw_metadata)
        self._closed = False
        self.logger = logger.bind(store_path=str(path))

    @classmethod
    def open(cls, path: str | Path, cache: TileCache | None = None) -> "TileStore":
        """Open an .mbtiles file read-only.

        Args:
            path: Path to the .mbtiles file
            cache: Cache to place in front of the file (a default-bounded one if None)

        Returns:
            An open TileStore

        Raises:
            TileStoreOpenError: If the file does not exist or its metadata cannot be queried
        """
        path = Path(path)
        with with_store_context(str(path)) as store_logger:
            if not path.is_file():
                raise TileStoreOpenError(f"Tile store not found: {path}")

            engine = _create_readonly_engine(path)

            try:
                raw_metadata = cls._read_metadata(engine)
            except SQLAlchemyError as e:
                engine.dispose()
                raise TileStoreOpenError(f"Tile store failed integrity check: {path}: {e}") from e

            store = cls(path, engine, cache if cache is not None else TileCache(), raw_metadata)
            store_logger.info(
                "Tile store opened",
                min_zoom=store._metadata.min_zoom,
                max_zoom=store._metadata.max_zoom,
                metadata_keys=len(raw_metadata),
            )
            return store

    @staticmethod
    def _read_metadata(engine: Engine) -> dict[str, str]:
        with Session(engine) as session:
            entries = session.exec(select(MetadataEntry)).all()
            return {entry.name: entry.value for entry in entries if entry.value is not None}

    def get_tile(self, zoom: int, column: int, row: int) -> bytes | None:
        """Return the tile blob at an XYZ address, or None if the tile is not present.

        Addresses outside the zoom level's grid and read errors also return None.
        """
        address = TileAddress(zoom, column, row)
        if not address.is_valid():
            return None

        cached = self.cache.get(address)
        if cached is not None:
            return cached

        if self._closed:
            self.logger.warning("Tile requested from closed store", zoom=zoom, column=column, row=row)
            return None

        native_row = xyz_row_to_native_row(zoom, row)
        try:
            with Session(self.engine) as session:
                statement = select(Tile.tile_data).where(
                    Tile.zoom_level == zoom,
                    Tile.tile_column == column,
                    Tile.tile_row == native_row,
                )
                data = session.exec(statement).first()
            if data is None:
                return None
            # TEXT values written by other tools cannot be served as tile bytes
            data = bytes(data)
        except (SQLAlchemyError, TypeError) as e:
            self.logger.warning(
                "Tile read failed", zoom=zoom, column=column, row=row, native_row=native_row, error=str(e)
            )
            return None

        self.cache.put(address, data)
        return data

    def get_metadata(self) -> TileStoreMetadata:
        return self._metadata

    def get_raw_metadata(self) -> dict[str, str]:
        """Return a copy of the flat key/value metadata table read at open."""
        return dict(self._raw_metadata)

    def clear_cache(self) -> None:
        self.cache.clear()

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self.cache.clear()
            self.engine.dispose()
            self.logger.debug("Tile store closed")

    def __enter__(self) -> "TileStore":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
