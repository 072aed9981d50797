"""
Geometry predicates between a fence polygon and a geohash cell.

The filler only ever asks two questions about a cell: is it fully covered by
the fence, and does it share any area with the fence. Both are answered by
an injectable provider; ShapelyPredicates is the default and delegates the
actual geometry to GEOS through Shapely.

Boundary rule: the fence is a closed set. A cell lying on the shell, or
sharing an edge with a hole ring from the outside, is contained. A cell
inside a hole is neither contained nor intersecting. Shared edges or
corners alone never count as an intersection.
"""
import threading
from typing import Callable, Protocol

from shapely.geometry import Polygon
from shapely.prepared import PreparedGeometry, prep

from hashfill.utils.error_handling import predicate_guard, validate_fence
from hashfill.utils.geohash import geohash_polygon
from hashfill.utils.logging_config import get_logger

logger = get_logger(__name__)


class Container(Protocol):
    """Tests whether a fence fully covers a geohash cell."""

    def contains(self, fence: Polygon, geohash: str) -> bool:
        ...


class Intersector(Protocol):
    """Tests whether a fence shares area with a geohash cell."""

    def intersects(self, fence: Polygon, geohash: str) -> bool:
        ...


class PredicateProvider(Container, Intersector, Protocol):
    """Both predicates the filler depends on."""


class ShapelyPredicates:
    """
    Default predicate provider backed by Shapely.

    The fence is validated and prepared once per fence object and thread,
    and reused for every cell tested against it. Prepared geometries build
    their indexes lazily, so each worker thread keeps its own. The fence
    itself is never modified.

    Example:
        >>> from shapely.geometry import box
        >>> predicates = ShapelyPredicates()
        >>> predicates.contains(box(0, 0, 45, 45), "s")
        True
        >>> predicates.intersects(box(0, 0, 45, 45), "t")
        False
    """

    def __init__(self):
        self._local = threading.local()

    def _prepared(self, fence: Polygon) -> PreparedGeometry:
        cached = getattr(self._local, "cached", None)
        if cached is None or cached[0] is not fence:
            validate_fence(fence)
            cached = (fence, prep(fence))
            self._local.cached = cached
            logger.debug(
                "fence_prepared",
                bounds=fence.bounds,
                holes=len(fence.interiors),
            )
        return cached[1]

    @predicate_guard
    def contains(self, fence: Polygon, geohash: str) -> bool:
        """True iff every point of the cell lies in the fence (holes excluded)."""
        prepared = self._prepared(fence)
        return bool(prepared.covers(geohash_polygon(geohash)))

    @predicate_guard
    def intersects(self, fence: Polygon, geohash: str) -> bool:
        """True iff the cell and the fence's covered area overlap."""
        prepared = self._prepared(fence)
        cell = geohash_polygon(geohash)
        return bool(prepared.intersects(cell) and not prepared.touches(cell))


class FunctionPredicates:
    """Adapts two plain ``(fence, geohash) -> bool`` callables into a provider."""

    def __init__(
        self,
        contains: Callable[[Polygon, str], bool],
        intersects: Callable[[Polygon, str], bool],
    ):
        self._contains = contains
        self._intersects = intersects

    def contains(self, fence: Polygon, geohash: str) -> bool:
        return self._contains(fence, geohash)

    def intersects(self, fence: Polygon, geohash: str) -> bool:
        return self._intersects(fence, geohash)


def predicates_from_functions(
    contains: Callable[[Polygon, str], bool],
    intersects: Callable[[Polygon, str], bool],
) -> FunctionPredicates:
    """
    Build a provider from two callables, e.g. to swap in another geometry
    engine or to stub predicates in tests.

    Example:
        >>> always = predicates_from_functions(lambda f, h: False, lambda f, h: True)
        >>> always.intersects(None, "")
        True
    """
    return FunctionPredicates(contains, intersects)
