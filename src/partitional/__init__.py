"""
Partitional: iterative partitional clustering on torch tensors.

This package implements a family of partition-based clustering algorithms
sharing one skeleton (seeding, parallel nearest-center assignment,
per-cluster update, convergence check):
- K-means
- K-medians
- K-medoids
- Mini-batch K-means
- CLARANS

Example usage:
    >>> import torch
    >>> from partitional import KMeans
    >>>
    >>> # Generate sample data
    >>> X = torch.randn(1000, 10)
    >>>
    >>> # Fit K-means
    >>> kmeans = KMeans(n_clusters=5, verbose=1)
    >>> kmeans.fit(X)
    >>>
    >>> # Get cluster assignments
    >>> labels = kmeans.predict(X)

The engine can also be driven directly with an explicit configuration:
    >>> from partitional import ClusteringConfig, run_clustering
    >>> config = ClusteringConfig(n_clusters=5, update_rule='median', metric='manhattan')
    >>> result = run_clustering(X, config)
"""

__version__ = '0.1.0'

# Core types and engine (imported before utils)
from .base import (
    Point,
    ClusteringConfig,
    ClusteringResult,
    AlgorithmState,
    AssignmentMatrix,
    SeedingMethod,
    UpdateRule,
    ConfigurationError,
    DimensionMismatchError,
    NotFittedError,
    ClusteringCancelled,
    run_clustering
)

# Import main algorithms
from .algorithms import KMeans, KMedians, KMedoids, MiniBatchKMeans, Clarans

from .distances import DistanceMetric, get_metric

from .utils import inertia, adjusted_rand_score

# Import visualization
from .visualization import plot_clusters_2d, plot_result

__all__ = [
    # Algorithms
    'KMeans',
    'KMedians',
    'KMedoids',
    'MiniBatchKMeans',
    'Clarans',

    # Engine
    'ClusteringConfig',
    'ClusteringResult',
    'AlgorithmState',
    'AssignmentMatrix',
    'SeedingMethod',
    'UpdateRule',
    'run_clustering',
    'Point',

    # Distances
    'DistanceMetric',
    'get_metric',

    # Errors
    'ConfigurationError',
    'DimensionMismatchError',
    'NotFittedError',
    'ClusteringCancelled',

    # Metrics
    'inertia',
    'adjusted_rand_score',

    # Visualization
    'plot_clusters_2d',
    'plot_result',

    # Version
    '__version__'
]
