"""
Custom exception hierarchy for hashfill.

All custom exceptions inherit from HashfillError for easy catching.
"""


class HashfillError(Exception):
    """Base exception for all hashfill errors."""
    pass


class ConfigurationError(HashfillError):
    """Configuration-related errors.

    Raised when filler configuration loading or validation fails.

    Example:
        >>> raise ConfigurationError("max_precision must be >= 0, got -1")
    """
    pass


class PredicateFailure(HashfillError):
    """Geometry predicate errors.

    Raised when a contains/intersects test cannot be evaluated for a
    (fence, geohash) pair: malformed fence, or a failure inside the
    geometry engine. Aborts the whole fill.

    Attributes:
        geohash: Geohash being tested when the failure happened
        details: Dictionary with error details
    """

    def __init__(self, message: str, geohash: str = None, details: dict = None):
        super().__init__(message)
        self.geohash = geohash
        self.details = details or {}

    def __str__(self):
        base = super().__str__()
        if self.geohash is not None:
            return f"{base} (geohash={self.geohash!r})"
        return base


class GeometryError(HashfillError):
    """Geohash or coordinate errors.

    Example:
        >>> raise GeometryError("Invalid geohash character: 'a'")
    """
    pass


class FenceLoadError(HashfillError):
    """Fence loading errors.

    Raised when a fence file cannot be read or holds no usable polygon.

    Example:
        >>> raise FenceLoadError("Fence file not found: park.geojson")
    """
    pass
