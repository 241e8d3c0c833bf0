"""Initialization strategies for clustering algorithms."""

from .random import RandomInit
from .kmeans_plusplus import KMeansPlusPlusInit, weighted_choice
from .precomputed import PrecomputedInit

__all__ = [
    'RandomInit',
    'KMeansPlusPlusInit',
    'PrecomputedInit',
    'weighted_choice'
]
