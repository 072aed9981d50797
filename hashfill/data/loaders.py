"""
Fence loading functions with validation.

Reads fence polygons from GeoJSON (or any format GeoPandas can read) and
builds them from raw (lon, lat) rings.
"""
from pathlib import Path
from typing import Iterable, Sequence, Tuple

import geopandas as gpd
from shapely.geometry import MultiPolygon, Polygon

from hashfill.utils.exceptions import FenceLoadError
from hashfill.utils.logging_config import get_logger

logger = get_logger(__name__)

Ring = Sequence[Tuple[float, float]]


def load_fence(file_path: Path, index: int = 0) -> Polygon:
    """
    Load a fence polygon from a vector file.

    Args:
        file_path: Path to a GeoJSON file (Feature, FeatureCollection or bare
            geometry)
        index: Which feature to use when the file holds several

    Returns:
        Shapely Polygon in lon/lat order, holes included

    Raises:
        FenceLoadError: If the file is missing, unreadable, empty, or the
            selected geometry is not a single polygon

    Example:
        >>> fence = load_fence(Path("testdata/regents.geojson"))
        >>> fence.geom_type
        'Polygon'
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FenceLoadError(f"Fence file not found: {file_path}")

    logger.info("loading_fence", file=str(file_path), index=index)

    try:
        gdf = gpd.read_file(file_path)
    except Exception as e:
        raise FenceLoadError(f"Failed to read fence file {file_path}: {e}") from e

    if len(gdf) == 0:
        raise FenceLoadError(f"Fence file holds no features: {file_path}")
    if not 0 <= index < len(gdf):
        raise FenceLoadError(
            f"Feature index {index} out of range, {file_path} holds {len(gdf)} features"
        )

    geometry = gdf.geometry.iloc[index]
    if isinstance(geometry, MultiPolygon) and len(geometry.geoms) == 1:
        geometry = geometry.geoms[0]

    if not isinstance(geometry, Polygon):
        geom_type = geometry.geom_type if geometry is not None else "None"
        raise FenceLoadError(f"Fence must be a single Polygon, got {geom_type}")

    logger.info(
        "fence_loaded",
        bounds=geometry.bounds,
        holes=len(geometry.interiors),
        vertices=len(geometry.exterior.coords),
    )
    return geometry


def fence_from_coordinates(shell: Ring, holes: Iterable[Ring] = ()) -> Polygon:
    """
    Build a fence from (lon, lat) rings.

    Example:
        >>> fence = fence_from_coordinates(
        ...     [(0, 0), (0, 45), (45, 45), (45, 0), (0, 0)],
        ...     holes=[[(10, 10), (10, 20), (20, 20), (20, 10), (10, 10)]],
        ... )
        >>> len(fence.interiors)
        1
    """
    return Polygon(shell, [list(hole) for hole in holes])
