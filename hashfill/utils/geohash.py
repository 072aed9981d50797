"""
Geohash cell geometry.

Converts geohash strings to their lon/lat bounding boxes and Shapely
rectangles, and enumerates child and descendant cells in alphabet order.
Implementation based on standard geohash algorithm.
"""
from itertools import product
from typing import List, Tuple

from shapely.geometry import Polygon

from hashfill.utils.exceptions import GeometryError


# Base32 encoding for geohash, also the order children are visited in
BASE32 = "0123456789bcdefghjkmnpqrstuvwxyz"

WORLD_BOUNDS = (-90.0, 90.0, -180.0, 180.0)


def validate_geohash(geohash: str) -> str:
    """
    Normalise a geohash to lower case and check its alphabet.

    The empty string is valid and stands for the whole world.

    Raises:
        GeometryError: If the value is not a string or holds a character
            outside the geohash alphabet
    """
    if not isinstance(geohash, str):
        raise GeometryError(f"Geohash must be a string, got {type(geohash).__name__}")

    geohash = geohash.lower()
    for char in geohash:
        if char not in BASE32:
            raise GeometryError(f"Invalid geohash character: {char!r} in {geohash!r}")
    return geohash


def get_box_bounds(geohash: str) -> Tuple[float, float, float, float]:
    """
    Get the bounding box for a geohash.

    Args:
        geohash: Geohash string, possibly empty

    Returns:
        Tuple of (min_lat, max_lat, min_lon, max_lon)

    Example:
        >>> get_box_bounds("s")
        (0.0, 45.0, 0.0, 45.0)
        >>> get_box_bounds("")
        (-90.0, 90.0, -180.0, 180.0)
    """
    lat_range = [WORLD_BOUNDS[0], WORLD_BOUNDS[1]]
    lon_range = [WORLD_BOUNDS[2], WORLD_BOUNDS[3]]

    is_even = True  # Start with longitude

    for char in validate_geohash(geohash):
        idx = BASE32.index(char)

        # Each character encodes 5 bits
        for i in range(4, -1, -1):
            bit = (idx >> i) & 1

            if is_even:  # Longitude
                mid = (lon_range[0] + lon_range[1]) / 2
                if bit == 1:
                    lon_range[0] = mid
                else:
                    lon_range[1] = mid
            else:  # Latitude
                mid = (lat_range[0] + lat_range[1]) / 2
                if bit == 1:
                    lat_range[0] = mid
                else:
                    lat_range[1] = mid

            is_even = not is_even

    return lat_range[0], lat_range[1], lon_range[0], lon_range[1]


def geohash_bbox(geohash: str) -> Tuple[float, float, float, float]:
    """Bounding rectangle of a geohash as (min_lon, min_lat, max_lon, max_lat)."""
    min_lat, max_lat, min_lon, max_lon = get_box_bounds(geohash)
    return min_lon, min_lat, max_lon, max_lat


def geohash_polygon(geohash: str) -> Polygon:
    """
    Convert a geohash to a Shapely Polygon representing its bounding box.

    The empty geohash maps to the whole lon/lat extent, never to an empty
    shape.

    Example:
        >>> geohash_polygon("").bounds
        (-180.0, -90.0, 180.0, 90.0)
    """
    min_lat, max_lat, min_lon, max_lon = get_box_bounds(geohash)

    return Polygon([
        (min_lon, min_lat),
        (min_lon, max_lat),
        (max_lon, max_lat),
        (max_lon, min_lat),
        (min_lon, min_lat)
    ])


def children(geohash: str) -> List[str]:
    """The 32 child cells of a geohash, in alphabet order."""
    return [geohash + char for char in BASE32]


def extend_to_precision(geohash: str, precision: int) -> List[str]:
    """
    Expand a geohash to every descendant at the given precision.

    Descendants come out in alphabet order, so splicing them in place of
    the parent keeps a depth-first ordering intact. A geohash already at
    ``precision`` is returned unchanged.

    Example:
        >>> extend_to_precision("s", 2)[:3]
        ['s0', 's1', 's2']
        >>> len(extend_to_precision("s", 3))
        1024

    Raises:
        GeometryError: If the geohash is longer than ``precision``
    """
    depth = precision - len(geohash)
    if depth < 0:
        raise GeometryError(
            f"Cannot extend {geohash!r} to precision {precision}: already longer"
        )
    return [geohash + ''.join(suffix) for suffix in product(BASE32, repeat=depth)]
