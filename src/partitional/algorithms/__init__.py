"""Clustering algorithm implementations."""

from .kmeans import KMeans
from .kmedians import KMedians
from .kmedoids import KMedoids
from .mini_batch_kmeans import MiniBatchKMeans
from .clarans import Clarans, run_clarans

__all__ = [
    'KMeans',
    'KMedians',
    'KMedoids',
    'MiniBatchKMeans',
    'Clarans',
    'run_clarans'
]
