"""
Online mean update strategy (Mini-Batch K-means).

Each iteration draws ``batch_size`` points and folds them one at a time into
their nearest center with the exact incremental mean formula

    c <- (1 - eta) * c + eta * x,   eta = 1 / count

where ``count`` is the running number of draws the center has absorbed
over the whole run.
"""

from typing import Optional, List
import torch
from torch import Tensor

from ..base.interfaces import ParameterUpdater, DistanceMetric
from ..base.data_structures import UpdateResult


class OnlineMeanUpdater(ParameterUpdater):
    """Sequential per-draw mean update.

    Draws are generated up front from the run generator, but applied one at
    a time: every draw reads and then mutates the center it lands on and its
    count, so the next draw must see the result.
    """

    def __init__(self, batch_size: int = 1024):
        """
        Args:
            batch_size: Number of draws per iteration
        """
        self.batch_size = batch_size
        self._counts: List[float] = []

    @property
    def requires_assignment(self) -> bool:
        return False

    @property
    def counts(self) -> List[float]:
        """Draws absorbed per center so far in this run."""
        return list(self._counts)

    def reset(self, n_clusters: int) -> None:
        self._counts = [0.0] * n_clusters

    def update(self, points: Tensor,
               assignment,
               centers: Tensor,
               metric: DistanceMetric,
               generator: Optional[torch.Generator] = None,
               **kwargs) -> UpdateResult:
        """Apply one batch of draws.

        Args:
            points: (n, d) data points
            assignment: Ignored (None)
            centers: (K, d) current centers
            metric: Distance used to find the nearest center
            generator: Random source of the run

        Returns:
            UpdateResult; centers no draw landed on are flagged not updated
        """
        n_points = points.shape[0]
        n_clusters = centers.shape[0]
        if len(self._counts) != n_clusters:
            self.reset(n_clusters)

        draws = torch.randint(n_points, (self.batch_size,), generator=generator)

        new_centers = centers.clone()
        updated = torch.zeros(n_clusters, dtype=torch.bool, device=centers.device)

        for index in draws.tolist():
            x = points[index]
            nearest = int(torch.argmin(metric.pairwise(x.unsqueeze(0), new_centers)[0]))

            self._counts[nearest] += 1.0
            eta = 1.0 / self._counts[nearest]
            new_centers[nearest] = (1.0 - eta) * new_centers[nearest] + eta * x
            updated[nearest] = True

        return UpdateResult(centers=new_centers, updated=updated)
