"""
Euclidean distance metrics.

Squared Euclidean is the default metric of the engine: convergence
tolerances are expressed in squared-distance units, so no square root is
taken on the hot path.
"""

import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric


class SquaredEuclideanDistance(DistanceMetric):
    """Squared Euclidean distance metric.

    Computes ||x - μ||² where μ is the cluster center. Differences are
    formed explicitly rather than through the ||x||² + ||μ||² - 2<x,μ>
    expansion so that identical vectors are exactly zero apart.
    """

    name = 'sqeuclidean'

    def _pairwise(self, points: Tensor, centers: Tensor) -> Tensor:
        diff = points.unsqueeze(1) - centers.unsqueeze(0)
        return torch.sum(diff * diff, dim=2)


class EuclideanDistance(SquaredEuclideanDistance):
    """Euclidean (L2) distance."""

    name = 'euclidean'

    def _pairwise(self, points: Tensor, centers: Tensor) -> Tensor:
        return torch.sqrt(super()._pairwise(points, centers))
