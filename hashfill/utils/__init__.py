"""
Shared utilities: geohash geometry, configuration, errors and logging.
"""
