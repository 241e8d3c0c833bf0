"""Distance metrics for clustering algorithms."""

from typing import Union

from ..base.interfaces import DistanceMetric
from ..base.exceptions import ConfigurationError
from .euclidean import SquaredEuclideanDistance, EuclideanDistance
from .lp import ManhattanDistance, ChebyshevDistance, MinkowskiDistance
from .discrete import HammingDistance
from .cosine import CosineDistance

METRICS = {
    'sqeuclidean': SquaredEuclideanDistance,
    'euclidean': EuclideanDistance,
    'manhattan': ManhattanDistance,
    'chebyshev': ChebyshevDistance,
    'minkowski': MinkowskiDistance,
    'hamming': HammingDistance,
    'cosine': CosineDistance,
}


def get_metric(metric: Union[str, DistanceMetric]) -> DistanceMetric:
    """Resolve a metric name (or pass through a metric instance).

    Raises:
        ConfigurationError: If the name is not registered
    """
    if isinstance(metric, DistanceMetric):
        return metric
    if isinstance(metric, str) and metric.lower() in METRICS:
        return METRICS[metric.lower()]()
    raise ConfigurationError(
        f"Unknown metric {metric!r}, expected one of {sorted(METRICS)} "
        f"or a DistanceMetric instance"
    )


__all__ = [
    'DistanceMetric',
    'SquaredEuclideanDistance',
    'EuclideanDistance',
    'ManhattanDistance',
    'ChebyshevDistance',
    'MinkowskiDistance',
    'HammingDistance',
    'CosineDistance',
    'METRICS',
    'get_metric'
]
