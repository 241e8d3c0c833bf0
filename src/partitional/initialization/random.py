"""
Random initialization strategy for clustering algorithms.

Draws initial centers uniformly from the dataset.
"""

from typing import Optional
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy, DistanceMetric
from ..base.data_structures import SeedResult
from ..base.exceptions import ConfigurationError


class RandomInit(InitializationStrategy):
    """Random initialization by selecting points from the dataset.

    Draws n_clusters indices independently and uniformly, with replacement,
    so the same point may seed more than one cluster.
    """

    def initialize(self, points: Tensor, n_clusters: int,
                   metric: Optional[DistanceMetric] = None,
                   generator: Optional[torch.Generator] = None) -> SeedResult:
        """Initialize clusters with random points.

        Args:
            points: (n, d) data points
            n_clusters: Number of clusters
            metric: Ignored
            generator: Random source of the run

        Returns:
            SeedResult with copies of the drawn points and their indices
        """
        n_points = points.shape[0]

        if n_clusters > n_points:
            raise ConfigurationError(f"Cannot create {n_clusters} clusters from {n_points} points")

        indices = torch.randint(n_points, (n_clusters,), generator=generator).to(points.device)

        return SeedResult(centers=points[indices].clone(), indices=indices)
