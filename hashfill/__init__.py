"""
hashfill: fill polygons with geohashes.

Finds the minimal set of geohash cells covering a fence polygon, optionally
expanded to a single fixed precision.
"""
from hashfill.core.filler import RecursiveFiller, SearchResult
from hashfill.core.predicates import ShapelyPredicates, predicates_from_functions
from hashfill.utils.config import FillerConfig, FillMode
from hashfill.utils.exceptions import (
    HashfillError,
    ConfigurationError,
    PredicateFailure,
    GeometryError,
    FenceLoadError,
)

__version__ = "0.1.0"

__all__ = [
    'RecursiveFiller',
    'SearchResult',
    'ShapelyPredicates',
    'predicates_from_functions',
    'FillerConfig',
    'FillMode',
    'HashfillError',
    'ConfigurationError',
    'PredicateFailure',
    'GeometryError',
    'FenceLoadError',
]
