# ABOUTME: Shared pytest fixtures: fresh configuration per test and MBTiles files built on disk
# ABOUTME: Tile fixtures store rows in TMS order, exactly as real .mbtiles files do

import sqlite3
from pathlib import Path

import pytest
import structlog
from loguru import logger

from osrswiki.config import reload_config


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Isolate each test from OSRSWIKI_* variables set in the developer's shell."""
    import os

    for key in list(os.environ):
        if key.startswith("OSRSWIKI_"):
            monkeypatch.delenv(key, raising=False)
    yield reload_config()
    monkeypatch.undo()
    reload_config()


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop sinks bound to streams captured during a test."""
    yield
    logger.remove()
    structlog.reset_defaults()


def build_mbtiles(path: Path, tiles: dict[tuple[int, int, int], bytes], metadata: dict[str, str]) -> Path:
    """Write an .mbtiles file.

    Args:
        path: Destination file
        tiles: Mapping of (zoom, column, xyz_row) -> blob; rows are flipped to TMS on write
        metadata: Flat metadata entries
    """
    connection = sqlite3.connect(path)
    try:
        connection.execute("CREATE TABLE metadata (name TEXT PRIMARY KEY, value TEXT)")
        connection.execute(
            "CREATE TABLE tiles (zoom_level INTEGER, tile_column INTEGER, tile_row INTEGER, tile_data BLOB, "
            "PRIMARY KEY (zoom_level, tile_column, tile_row))"
        )
        connection.executemany("INSERT INTO metadata (name, value) VALUES (?, ?)", metadata.items())
        connection.executemany(
            "INSERT INTO tiles VALUES (?, ?, ?, ?)",
            [(z, x, (1 << z) - 1 - y, data) for (z, x, y), data in tiles.items()],
        )
        connection.commit()
    finally:
        connection.close()
    return path


SAMPLE_METADATA = {
    "name": "map_floor_0",
    "format": "png",
    "bounds": "-180.0,-85.0511,180.0,85.0511",
    "minzoom": "0",
    "maxzoom": "3",
}

SAMPLE_TILES = {
    (0, 0, 0): b"z0-root",
    (1, 0, 0): b"z1-top-left",
    (1, 1, 1): b"z1-bottom-right",
    (2, 1, 0): b"z2-x1-y0",
    (3, 5, 2): b"z3-x5-y2" * 10,
}


@pytest.fixture
def mbtiles_path(tmp_path) -> Path:
    return build_mbtiles(tmp_path / "map_floor_0.mbtiles", SAMPLE_TILES, SAMPLE_METADATA)


@pytest.fixture
def mbtiles_factory(tmp_path):
    """Build custom .mbtiles files: factory(name, tiles, metadata) -> Path."""

    def factory(name: str, tiles: dict[tuple[int, int, int], bytes], metadata: dict[str, str] | None = None) -> Path:
        return build_mbtiles(tmp_path / name, tiles, SAMPLE_METADATA if metadata is None else metadata)

    return factory
