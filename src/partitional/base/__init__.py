"""Base classes, data structures and configuration for partitional clustering."""

from .interfaces import (
    AssignmentStrategy,
    ParameterUpdater,
    DistanceMetric,
    InitializationStrategy,
    ConvergenceCriterion
)

from .data_structures import (
    Point,
    SeedResult,
    UpdateResult,
    AssignmentMatrix,
    AlgorithmState,
    ClusteringResult
)

from .exceptions import (
    ConfigurationError,
    DimensionMismatchError,
    NotFittedError,
    ClusteringCancelled
)

from .config import ClusteringConfig, SeedingMethod, UpdateRule

from .clustering_base import BaseClusteringAlgorithm, run_clustering

__all__ = [
    # Interfaces
    'AssignmentStrategy',
    'ParameterUpdater',
    'DistanceMetric',
    'InitializationStrategy',
    'ConvergenceCriterion',

    # Data structures
    'Point',
    'SeedResult',
    'UpdateResult',
    'AssignmentMatrix',
    'AlgorithmState',
    'ClusteringResult',

    # Errors
    'ConfigurationError',
    'DimensionMismatchError',
    'NotFittedError',
    'ClusteringCancelled',

    # Configuration
    'ClusteringConfig',
    'SeedingMethod',
    'UpdateRule',

    # Engine
    'BaseClusteringAlgorithm',
    'run_clustering'
]
