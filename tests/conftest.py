"""
Shared fences for the test-suite.

Cell reference (precision 1 cells are 45 x 45 degrees):
  "s"  = lon [0, 45],  lat [0, 45]
  "t"  = lon [45, 90], lat [0, 45]
  "s7" = lon [11.25, 22.5], lat [16.875, 22.5]
"""
import pytest
from shapely.geometry import Polygon, box


@pytest.fixture
def cell_fence():
    """Fence identical to geohash cell 's'."""
    return box(0, 0, 45, 45)


@pytest.fixture
def overhang_fence():
    """Cell 's' plus a strip reaching 5 degrees into cell 't'."""
    return box(0, 0, 50, 45)


@pytest.fixture
def holed_fence():
    """Cell 's' with cell 's7' cut out as a hole."""
    return Polygon(
        [(0, 0), (0, 45), (45, 45), (45, 0), (0, 0)],
        [[(11.25, 16.875), (11.25, 22.5), (22.5, 22.5), (22.5, 16.875), (11.25, 16.875)]],
    )


@pytest.fixture
def triangle_fence():
    """Irregular fence that is not aligned with any geohash grid line."""
    return Polygon([(1.3, 1.1), (30.7, 5.2), (10.4, 40.9), (1.3, 1.1)])
