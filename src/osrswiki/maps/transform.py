# ABOUTME: Pure coordinate transforms for the offline map
# ABOUTME: TMS<->XYZ row flip and game-plane <-> Web Mercator geographic projection

import math

from osrswiki.maps.models import BoundingBox

# Game plane -> canvas mapping
GAME_COORD_SCALE = 4.0
GAME_MIN_X = 1024.0
GAME_MAX_Y = 12608.0
CANVAS_SIZE = 65536.0

# Rendered game map image, in canvas pixels
MAP_IMAGE_WIDTH = 12800.0
MAP_IMAGE_HEIGHT = 45568.0


def xyz_row_to_native_row(zoom: int, row: int) -> int:
    """Flip a row between XYZ (origin top-left) and TMS (origin bottom-left).

    The flip is its own inverse, so the same formula converts in both directions.
    """
    return (1 << zoom) - 1 - row


native_row_to_xyz_row = xyz_row_to_native_row


def game_to_geographic(gx: float, gy: float) -> tuple[float, float]:
    """Project in-game planar coordinates to (latitude, longitude)."""
    nx = (gx - GAME_MIN_X) * GAME_COORD_SCALE / CANVAS_SIZE
    ny = (GAME_MAX_Y - gy) * GAME_COORD_SCALE / CANVAS_SIZE

    lon = -180.0 + nx * 360.0
    lat = math.degrees(math.atan(math.sinh(math.pi * (1.0 - 2.0 * ny))))
    return lat, lon


def geographic_to_game(lat: float, lon: float) -> tuple[float, float]:
    """Exact inverse of game_to_geographic."""
    nx = (lon + 180.0) / 360.0
    ny = (1.0 - math.asinh(math.tan(math.radians(lat))) / math.pi) / 2.0

    gx = nx * CANVAS_SIZE / GAME_COORD_SCALE + GAME_MIN_X
    gy = GAME_MAX_Y - ny * CANVAS_SIZE / GAME_COORD_SCALE
    return gx, gy


def game_content_bounds() -> BoundingBox:
    """Geographic bounds of the rendered game map, for clamping pans to real content."""
    game_max_x = GAME_MIN_X + MAP_IMAGE_WIDTH / GAME_COORD_SCALE
    game_min_y = GAME_MAX_Y - MAP_IMAGE_HEIGHT / GAME_COORD_SCALE

    # Game y grows northwards, so GAME_MAX_Y is the top edge of the image
    lat_a, lon_a = game_to_geographic(GAME_MIN_X, game_min_y)
    lat_b, lon_b = game_to_geographic(game_max_x, GAME_MAX_Y)
    return BoundingBox(
        min_lat=min(lat_a, lat_b),
        min_lon=min(lon_a, lon_b),
        max_lat=max(lat_a, lat_b),
        max_lon=max(lon_a, lon_b),
    )
