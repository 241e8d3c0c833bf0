"""Assignment strategies for clustering algorithms."""

from .hard import HardAssignment, PartialAssignment, nearest_centers

__all__ = [
    'HardAssignment',
    'PartialAssignment',
    'nearest_centers'
]
