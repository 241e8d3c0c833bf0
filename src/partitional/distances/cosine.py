"""
Cosine distance.

Cosine similarity grows as vectors become more alike, so it cannot be used
directly where the engine minimises distance. It is exposed only in its
distance form, 1 - cos(x, y), which lies in [0, 2].
"""

import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric


class CosineDistance(DistanceMetric):
    """Cosine distance 1 - <x, y> / (||x|| ||y||).

    A zero vector has similarity 0 with every other vector (distance 1).
    Identical vectors, the zero vector included, are exactly 0 apart.
    Parallel vectors of different length are also at distance 0, so this
    is not a metric in the strict sense.
    """

    name = 'cosine'

    def __init__(self, eps: float = 1e-12):
        self.eps = eps

    def _pairwise(self, points: Tensor, centers: Tensor) -> Tensor:
        point_norms = torch.norm(points, dim=1, keepdim=True)
        center_norms = torch.norm(centers, dim=1, keepdim=True)
        points_unit = points / point_norms.clamp(min=self.eps)
        centers_unit = centers / center_norms.clamp(min=self.eps)
        similarities = points_unit @ centers_unit.t()
        distances = torch.clamp(1.0 - similarities, min=0.0, max=2.0)

        # 1 - u.u rounds to ~1e-16 for some unit vectors
        identical = (points.unsqueeze(1) == centers.unsqueeze(0)).all(dim=2)
        return distances.masked_fill(identical, 0.0)
