"""
Fence ingestion.
"""
from hashfill.data.loaders import load_fence, fence_from_coordinates

__all__ = ['load_fence', 'fence_from_coordinates']
