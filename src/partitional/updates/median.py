"""
Median update strategy (K-medians).
"""

from typing import Optional
import torch
from torch import Tensor

from ..base.interfaces import ParameterUpdater, DistanceMetric
from ..base.data_structures import AssignmentMatrix, UpdateResult


def coordinate_median(values: Tensor) -> Tensor:
    """Dimension-wise median of an (m, d) block.

    Each dimension is sorted independently. An odd count takes the middle
    value; an even count averages the two middle values. ``torch.median``
    is not used because it returns the lower of the two middles.
    """
    m = values.shape[0]
    ordered, _ = torch.sort(values, dim=0)
    middle = m // 2
    if m % 2 == 1:
        return ordered[middle].clone()
    return (ordered[middle - 1] + ordered[middle]) / 2.0


class MedianUpdater(ParameterUpdater):
    """Updates each center to the coordinate-wise median of its points.

    The resulting center need not coincide with any input point.
    """

    def update(self, points: Tensor,
               assignment: AssignmentMatrix,
               centers: Tensor,
               metric: Optional[DistanceMetric] = None,
               **kwargs) -> UpdateResult:
        n_clusters = centers.shape[0]
        new_centers = centers.clone()
        updated = torch.zeros(n_clusters, dtype=torch.bool, device=centers.device)

        for k in range(n_clusters):
            indices = assignment.get_cluster_indices(k)
            if len(indices) == 0:
                continue
            new_centers[k] = coordinate_median(points[indices])
            updated[k] = True

        return UpdateResult(centers=new_centers, updated=updated)
