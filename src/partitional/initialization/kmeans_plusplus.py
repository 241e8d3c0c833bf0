"""
K-means++ initialization strategy.

Selects initial cluster centers using the K-means++ algorithm, which chooses
centers that are far apart to improve convergence speed and quality.
"""

from typing import Optional
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy, DistanceMetric
from ..base.data_structures import SeedResult
from ..base.exceptions import ConfigurationError
from ..distances import SquaredEuclideanDistance


def weighted_choice(weights: Tensor, generator: Optional[torch.Generator] = None) -> int:
    """Draw one index with probability proportional to its weight.

    Cumulative-weight selection: a uniform [0, 1) draw is scaled by the
    total weight and weights are subtracted in index order; the index at
    which the running value becomes non-positive is selected. Zero-weight
    entries are never selected. If every weight is zero the draw is uniform.

    Args:
        weights: (n,) non-negative unnormalized weights
        generator: Random source

    Returns:
        Selected index
    """
    total = weights.sum().item()
    if not total > 0:
        return int(torch.randint(weights.shape[0], (1,), generator=generator).item())

    target = torch.rand(1, generator=generator, dtype=torch.float64).item() * total
    cumulative = torch.cumsum(weights.to(torch.float64), dim=0)
    positive = weights > 0

    hits = torch.nonzero((cumulative >= target) & positive)
    if hits.numel() > 0:
        return int(hits[0].item())

    # Rounding left the target just above the final cumulative sum
    return int(torch.nonzero(positive)[-1].item())


class KMeansPlusPlusInit(InitializationStrategy):
    """K-means++ initialization for better starting positions.

    Algorithm:
    1. Choose first center uniformly at random
    2. For each remaining center:
       - Compute distance from each point to nearest existing center
       - Choose next center with probability proportional to that distance
         (squared Euclidean under the default metric)
    """

    def initialize(self, points: Tensor, n_clusters: int,
                   metric: Optional[DistanceMetric] = None,
                   generator: Optional[torch.Generator] = None) -> SeedResult:
        """Initialize cluster centers using K-means++.

        Args:
            points: (n, d) data points
            n_clusters: Number of clusters
            metric: Distance used for the sampling weights
            generator: Random source of the run

        Returns:
            SeedResult with the chosen points and their indices
        """
        n_points = points.shape[0]

        if n_clusters > n_points:
            raise ConfigurationError(f"Cannot create {n_clusters} clusters from {n_points} points")

        if metric is None:
            metric = SquaredEuclideanDistance()

        # Choose first center uniformly at random
        first_idx = int(torch.randint(n_points, (1,), generator=generator).item())
        center_indices = [first_idx]

        # Distance from every point to its nearest chosen center
        distances = metric.pairwise(points, points[first_idx:first_idx + 1]).squeeze(1)

        for _ in range(1, n_clusters):
            idx = weighted_choice(distances, generator)
            center_indices.append(idx)

            new_center_distances = metric.pairwise(points, points[idx:idx + 1]).squeeze(1)
            distances = torch.minimum(distances, new_center_distances)

        indices = torch.tensor(center_indices, dtype=torch.long, device=points.device)
        return SeedResult(centers=points[indices].clone(), indices=indices)
