"""
Medoid update strategy (K-medoids).

A medoid is an input point, so centers are tracked by index. For every
cluster the member with the lowest total distance to the other members
replaces the current medoid, but only when it is strictly cheaper.
"""

from typing import Optional
import torch
from torch import Tensor

from ..base.interfaces import ParameterUpdater, DistanceMetric
from ..base.data_structures import AssignmentMatrix, UpdateResult
from ..utils.device import get_chunk_size


def candidate_costs(points: Tensor, members: Tensor, metric: DistanceMetric,
                    block_size: Optional[int] = None) -> Tensor:
    """Total distance from all members to each member as candidate medoid.

    Args:
        points: (n, d) data points
        members: (m,) indices of the cluster's points
        metric: Distance metric
        block_size: Candidates evaluated per block. Each candidate costs an
            (m, d) difference block, so None sizes blocks from memory like
            the assignment chunks.

    Returns:
        (m,) total cost per candidate, in member order
    """
    member_points = points[members]
    n_members, dimension = member_points.shape
    if block_size is None:
        block_size = get_chunk_size(n_members, dimension, n_members,
                                    element_size=points.element_size())

    costs = []
    for block in torch.split(member_points, block_size):
        costs.append(metric.pairwise(member_points, block).sum(dim=0))
    return torch.cat(costs)


class MedoidUpdater(ParameterUpdater):
    """Medoid update: swap in the cheapest member if strictly cheaper.

    Ties keep the incumbent; among equally cheap challengers the lowest
    point index wins. Clusters that received no points keep their medoid.
    """

    def __init__(self, block_size: Optional[int] = None):
        """
        Args:
            block_size: Candidates evaluated per distance block (None sizes
                blocks from memory)
        """
        self.block_size = block_size

    @property
    def uses_medoids(self) -> bool:
        return True

    def update(self, points: Tensor,
               assignment: AssignmentMatrix,
               centers: Tensor,
               metric: DistanceMetric,
               medoid_indices: Optional[Tensor] = None,
               **kwargs) -> UpdateResult:
        """Update medoids.

        Args:
            points: (n, d) data points
            assignment: Current assignment
            centers: (K, d) coordinates of the current medoids
            metric: Distance used for the costs (typically Manhattan)
            medoid_indices: (K,) indices of the current medoids

        Returns:
            UpdateResult with medoid coordinates and indices
        """
        if medoid_indices is None:
            raise ValueError("Medoid update requires the current medoid indices")

        n_clusters = centers.shape[0]
        new_indices = medoid_indices.clone()
        updated = torch.zeros(n_clusters, dtype=torch.bool, device=centers.device)

        for k in range(n_clusters):
            members = assignment.get_cluster_indices(k)
            if len(members) == 0:
                continue
            updated[k] = True

            incumbent = int(medoid_indices[k])
            costs = candidate_costs(points, members, metric, self.block_size)

            position = torch.nonzero(members == incumbent)
            if position.numel() > 0:
                current_cost = costs[position[0, 0]]
            else:
                current_cost = metric.pairwise(points[members],
                                               points[incumbent:incumbent + 1]).sum()

            best = int(torch.argmin(costs))
            if costs[best] < current_cost:
                new_indices[k] = members[best]

        return UpdateResult(centers=points[new_indices].clone(),
                            updated=updated,
                            medoid_indices=new_indices)
