# ABOUTME: Tile store models: addresses, store metadata and the MBTiles table mappings
# ABOUTME: SQLModel tables mirror the read-only `tiles` and `metadata` tables of an .mbtiles file

from dataclasses import dataclass

from pydantic import BaseModel, Field
from sqlmodel import Field as SQLField
from sqlmodel import SQLModel


@dataclass(frozen=True, slots=True)
class TileAddress:
    """Consumer-facing tile address (XYZ rows, origin top-left)."""

    zoom: int
    column: int
    row: int

    def is_valid(self) -> bool:
        if self.zoom < 0:
            return False
        size = 1 << self.zoom
        return 0 <= self.column < size and 0 <= self.row < size


class BoundingBox(BaseModel):
    min_lat: float
    min_lon: float
    max_lat: float
    max_lon: float


class TileStoreMetadata(BaseModel):
    """Store-level metadata, parsed once when the store is opened."""

    bounding_box: BoundingBox | None = Field(None, description="Coverage from the `bounds` entry")
    min_zoom: int | None = None
    max_zoom: int | None = None
    name: str | None = None
    format: str | None = None


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def parse_bounds(value: str | None) -> BoundingBox | None:
    """Parse an MBTiles `bounds` value ("minLon,minLat,maxLon,maxLat")."""
    if not value:
        return None
    try:
        parts = [float(part.strip()) for part in value.split(",")]
    except ValueError:
        return None
    if len(parts) != 4:
        return None
    min_lon, min_lat, max_lon, max_lat = parts
    return BoundingBox(min_lat=min_lat, min_lon=min_lon, max_lat=max_lat, max_lon=max_lon)


def parse_metadata(raw: dict[str, str]) -> TileStoreMetadata:
    """Build TileStoreMetadata from the flat key/value metadata table.

    Missing or malformed entries become None rather than raising.
    """
    return TileStoreMetadata(
        bounding_box=parse_bounds(raw.get("bounds")),
        min_zoom=_parse_int(raw.get("minzoom")),
        max_zoom=_parse_int(raw.get("maxzoom")),
        name=raw.get("name"),
        format=raw.get("format"),
    )


class Tile(SQLModel, table=True):
    """A tile blob addressed by TMS row."""

    __tablename__ = "tiles"  # type: ignore[assignment]

    zoom_level: int = SQLField(primary_key=True)
    tile_column: int = SQLField(primary_key=True)
    tile_row: int = SQLField(primary_key=True, description="TMS row (origin bottom-left)")
    tile_data: bytes


class MetadataEntry(SQLModel, table=True):
    __tablename__ = "metadata"  # type: ignore[assignment]

    name: str = SQLField(primary_key=True)
    value: str | None = None
