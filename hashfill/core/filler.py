"""
Recursive geohash filling of fence polygons.

Computes the smallest ordered set of geohashes that cover a fence according
to a fill mode, then optionally expands that variable-precision set to a
single fixed precision.

The search is depth-first from the empty geohash (the whole world):
  - a cell the fence fully contains is emitted and not subdivided
  - a cell the fence does not intersect is pruned
  - a boundary cell at max precision is emitted only in INTERSECTS mode
  - anything else is split into its 32 children, in alphabet order

Cost therefore follows the number of cells crossing the fence boundary at
each precision, not the fence's area.
"""
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional

from shapely.geometry import Polygon

from hashfill.core.predicates import PredicateProvider, ShapelyPredicates
from hashfill.utils.config import FillerConfig, FillMode, build_config
from hashfill.utils.geohash import BASE32, children, extend_to_precision
from hashfill.utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class SearchResult:
    """Hashes found under one search root, with the work it took."""
    hashes: List[str]
    evaluations: int = 0
    contained: int = 0
    boundary: int = 0


class RecursiveFiller:
    """
    Fills a fence with geohashes by searching for the largest cells that
    match the contains/intersects predicates.

    Args:
        config: Filler settings; defaults to max_precision=6, variable precision
        predicates: Provider answering contains/intersects; defaults to a new
            ShapelyPredicates instance
        **overrides: ``max_precision``, ``fixed_precision`` or ``workers``,
            applied on top of ``config``

    Raises:
        ConfigurationError: If the resulting configuration is invalid

    Example:
        >>> from shapely.geometry import box
        >>> filler = RecursiveFiller(max_precision=2)
        >>> filler.fill(box(0, 0, 45, 45), FillMode.INTERSECTS)
        ['s']
    """

    def __init__(
        self,
        config: Optional[FillerConfig] = None,
        predicates: Optional[PredicateProvider] = None,
        **overrides,
    ):
        base = config.model_dump() if config is not None else {}
        base.update(overrides)
        self.config = build_config(**base)
        self.predicates = predicates if predicates is not None else ShapelyPredicates()

    @property
    def max_precision(self) -> int:
        return self.config.max_precision

    @property
    def fixed_precision(self) -> bool:
        return self.config.fixed_precision

    def fill(self, fence: Polygon, mode: FillMode = FillMode.INTERSECTS) -> List[str]:
        """
        Fill the fence with geohashes.

        Computes the variable-length hashes matching the fence, then, if
        fixed precision is configured, extends each one out to max_precision
        in place.

        Raises:
            PredicateFailure: If any predicate evaluation fails; nothing is
                returned in that case
        """
        mode = FillMode(mode)
        logger.info(
            "fill_started",
            mode=mode.value,
            max_precision=self.max_precision,
            fixed_precision=self.fixed_precision,
            workers=self.config.workers,
        )

        try:
            if self.config.workers > 1:
                result = self._search_parallel(fence, mode)
            else:
                result = self.compute_variable_hashes(fence, mode)
        except Exception as e:
            logger.error("fill_failed", mode=mode.value, error=str(e))
            raise

        hashes = result.hashes
        if self.fixed_precision:
            hashes = self.extend_hashes(hashes)

        logger.info(
            "fill_completed",
            mode=mode.value,
            hashes=len(hashes),
            variable_hashes=len(result.hashes),
            evaluations=result.evaluations,
            contained=result.contained,
            boundary=result.boundary,
        )
        return hashes

    def extend_hashes(self, hashes: List[str]) -> List[str]:
        """Replace every hash shorter than max_precision by its descendants."""
        out = []
        for geohash in hashes:
            out.extend(extend_to_precision(geohash, self.max_precision))
        return out

    def compute_variable_hashes(
        self,
        fence: Polygon,
        mode: FillMode,
        root: str = "",
    ) -> SearchResult:
        """
        Compute the smallest list of hashes under ``root`` matching the fence
        according to the fill mode.

        Uses an explicit stack rather than recursion. Children are pushed in
        reverse alphabet order so they pop in alphabet order, which keeps the
        output identical to a recursive depth-first search.
        """
        result = SearchResult(hashes=[])
        stack = [root]

        while stack:
            geohash = stack.pop()

            result.evaluations += 1
            if self.predicates.contains(fence, geohash):
                result.contained += 1
                result.hashes.append(geohash)
                continue

            result.evaluations += 1
            if not self.predicates.intersects(fence, geohash):
                continue

            if len(geohash) >= self.max_precision:
                # Boundary cell that can't be split any further
                result.boundary += 1
                if mode == FillMode.INTERSECTS:
                    result.hashes.append(geohash)
                continue

            stack.extend(reversed(children(geohash)))

        return result

    def _search_parallel(self, fence: Polygon, mode: FillMode) -> SearchResult:
        """
        Same search as compute_variable_hashes, with the root's 32 subtrees
        run on a thread pool and reassembled in alphabet order.
        """
        root = self._decide_root(fence, mode)
        if root is not None:
            return root

        result = SearchResult(hashes=[], evaluations=2)
        with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
            futures = [
                executor.submit(self.compute_variable_hashes, fence, mode, char)
                for char in BASE32
            ]
            try:
                for future in futures:
                    subtree = future.result()
                    result.hashes.extend(subtree.hashes)
                    result.evaluations += subtree.evaluations
                    result.contained += subtree.contained
                    result.boundary += subtree.boundary
            except Exception:
                for future in futures:
                    future.cancel()
                raise

        logger.debug("parallel_search_merged", subtrees=len(futures))
        return result

    def _decide_root(
        self,
        fence: Polygon,
        mode: FillMode,
    ) -> Optional[SearchResult]:
        """
        Evaluate the root cell on its own.

        Returns the final result when the root is decided without splitting
        (contained, disjoint, or max_precision is 0), else None.
        """
        if self.max_precision == 0:
            return self.compute_variable_hashes(fence, mode)

        if self.predicates.contains(fence, ""):
            return SearchResult(hashes=[""], evaluations=1, contained=1)
        if not self.predicates.intersects(fence, ""):
            return SearchResult(hashes=[], evaluations=2)
        return None
