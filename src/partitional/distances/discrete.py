"""
Hamming distance for categorical or binary coordinates.
"""

import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric


class HammingDistance(DistanceMetric):
    """Number of coordinates in which two vectors differ."""

    name = 'hamming'

    def _pairwise(self, points: Tensor, centers: Tensor) -> Tensor:
        mismatches = points.unsqueeze(1) != centers.unsqueeze(0)
        return mismatches.sum(dim=2).to(points.dtype)
