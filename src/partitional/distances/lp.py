"""
L1, L-infinity and general Minkowski distances.
"""

import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric


class ManhattanDistance(DistanceMetric):
    """Sum of absolute coordinate differences (L1).

    The usual choice for K-Medians and K-Medoids.
    """

    name = 'manhattan'

    def _pairwise(self, points: Tensor, centers: Tensor) -> Tensor:
        diff = points.unsqueeze(1) - centers.unsqueeze(0)
        return torch.sum(torch.abs(diff), dim=2)


class ChebyshevDistance(DistanceMetric):
    """Largest absolute coordinate difference (L-infinity)."""

    name = 'chebyshev'

    def _pairwise(self, points: Tensor, centers: Tensor) -> Tensor:
        diff = points.unsqueeze(1) - centers.unsqueeze(0)
        return torch.amax(torch.abs(diff), dim=2)


class MinkowskiDistance(DistanceMetric):
    """Minkowski distance (Σ|x_i - y_i|^p)^(1/p)."""

    name = 'minkowski'

    def __init__(self, p: float = 2.0):
        """
        Args:
            p: Order of the norm, must be >= 1 for a true metric
        """
        if p < 1:
            raise ValueError(f"Minkowski order p must be >= 1, got {p}")
        self.p = float(p)

    def _pairwise(self, points: Tensor, centers: Tensor) -> Tensor:
        diff = torch.abs(points.unsqueeze(1) - centers.unsqueeze(0))
        return torch.sum(diff ** self.p, dim=2) ** (1.0 / self.p)

    def __repr__(self) -> str:
        return f"MinkowskiDistance(p={self.p})"
