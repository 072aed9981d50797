"""
Error handling utilities for geometry predicates.

Provides a decorator that turns geometry-engine failures into
PredicateFailure, and fence validation shared by predicate providers.
"""
from functools import wraps
from typing import Callable

from shapely.geometry import Polygon
from shapely.validation import explain_validity

from hashfill.utils.exceptions import PredicateFailure
from hashfill.utils.logging_config import get_logger

logger = get_logger(__name__)


def predicate_guard(func: Callable) -> Callable:
    """
    Decorator for predicate methods with a ``(fence, geohash)`` signature.

    PredicateFailure passes through untouched. Any other exception raised
    while evaluating the predicate is logged and re-raised as
    PredicateFailure, chained to the original.

    Example:
        >>> class Stub:
        ...     @predicate_guard
        ...     def contains(self, fence, geohash):
        ...         raise ValueError("boom")
        >>> Stub().contains(None, "gcp")
        Traceback (most recent call last):
        ...
        hashfill.utils.exceptions.PredicateFailure: contains failed: boom (geohash='gcp')
    """
    @wraps(func)
    def wrapper(self, fence, geohash):
        try:
            return func(self, fence, geohash)
        except PredicateFailure:
            raise
        except Exception as e:
            logger.error(
                "predicate_failed",
                predicate=func.__name__,
                geohash=geohash,
                error=str(e),
            )
            raise PredicateFailure(
                f"{func.__name__} failed: {e}",
                geohash=geohash,
                details={'predicate': func.__name__, 'error_type': type(e).__name__},
            ) from e
    return wrapper


def validate_fence(fence) -> None:
    """
    Validate that a fence is a usable polygon.

    Parameters
    ----------
    fence : shapely.geometry.Polygon
        Fence to validate; holes are allowed

    Raises
    ------
    PredicateFailure
        If the fence is not a Polygon, is empty, or is geometrically invalid
    """
    if not isinstance(fence, Polygon):
        raise PredicateFailure(
            f"Fence must be a shapely Polygon, got {type(fence).__name__}"
        )
    if fence.is_empty:
        raise PredicateFailure("Fence polygon is empty")
    if not fence.is_valid:
        raise PredicateFailure(
            f"Fence polygon is invalid: {explain_validity(fence)}",
            details={'holes': len(fence.interiors)},
        )
