"""
Mean update strategy for centroid-based clustering.
"""

from typing import Optional
import torch
from torch import Tensor

from ..base.interfaces import ParameterUpdater, DistanceMetric
from ..base.data_structures import AssignmentMatrix, UpdateResult


class MeanUpdater(ParameterUpdater):
    """Updates each center to the mean of its assigned points (K-means).

    Uses the per-cluster counts and sums reduced during assignment. A
    cluster with no points keeps its previous center.
    """

    def update(self, points: Tensor,
               assignment: AssignmentMatrix,
               centers: Tensor,
               metric: Optional[DistanceMetric] = None,
               **kwargs) -> UpdateResult:
        """Update cluster means.

        Args:
            points: (n, d) data points
            assignment: Current assignment (with counts and sums)
            centers: (K, d) previous centers
            metric: Ignored
            **kwargs: Ignored

        Returns:
            UpdateResult with the new means
        """
        counts = assignment.count_per_cluster()
        sums = assignment.cluster_sums()
        if sums is None:
            sums = torch.zeros_like(centers)
            sums.index_add_(0, assignment.get_hard(), points)

        updated = counts > 0
        new_centers = centers.clone()
        new_centers[updated] = sums[updated] / counts[updated].unsqueeze(1).to(centers.dtype)

        return UpdateResult(centers=new_centers, updated=updated)
