"""
Core filling algorithm and the geometry predicates it depends on.
"""
from hashfill.core.filler import RecursiveFiller, SearchResult
from hashfill.core.predicates import (
    Container,
    Intersector,
    PredicateProvider,
    ShapelyPredicates,
    FunctionPredicates,
    predicates_from_functions,
)

__all__ = [
    'RecursiveFiller',
    'SearchResult',
    'Container',
    'Intersector',
    'PredicateProvider',
    'ShapelyPredicates',
    'FunctionPredicates',
    'predicates_from_functions',
]
