"""
Hard assignment strategy for clustering algorithms.

Assigns each point to its nearest center. The work is a map over
contiguous point chunks, run on a thread pool, followed by a reduce that
merges the per-chunk aggregates.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from functools import reduce
from typing import Optional, Tuple
import torch
from torch import Tensor

from ..base.interfaces import AssignmentStrategy, DistanceMetric
from ..base.data_structures import AssignmentMatrix
from ..utils.device import get_chunk_size


def nearest_centers(points: Tensor, centers: Tensor,
                    metric: DistanceMetric) -> Tuple[Tensor, Tensor]:
    """Nearest center index and distance for each point.

    ``argmin`` returns the first minimal index, so among equally distant
    centers the lowest index wins.

    Returns:
        labels: (n,) long tensor
        distances: (n,) distance to the chosen center
    """
    distances = metric.pairwise(points, centers)
    labels = torch.argmin(distances, dim=1)
    min_distances = torch.gather(distances, 1, labels.unsqueeze(1)).squeeze(1)
    return labels, min_distances


@dataclass
class PartialAssignment:
    """Aggregates of one or more assigned point chunks.

    ``segments`` holds (start offset, labels, distances) for every chunk
    covered; counts and sums are per-cluster totals. ``merge`` is
    associative and commutative up to floating point summation order, and
    the caller reduces in chunk order so the result is reproducible.
    """
    start: int
    segments: Tuple[Tuple[int, Tensor, Tensor], ...]
    counts: Tensor   # (K,)
    sums: Tensor     # (K, d)

    def merge(self, other: 'PartialAssignment') -> 'PartialAssignment':
        segments = tuple(sorted(self.segments + other.segments, key=lambda s: s[0]))
        return PartialAssignment(
            start=min(self.start, other.start),
            segments=segments,
            counts=self.counts + other.counts,
            sums=self.sums + other.sums
        )

    def to_matrix(self, n_points: int, n_clusters: int) -> AssignmentMatrix:
        """Scatter the segments into one total assignment."""
        first_labels = self.segments[0][1]
        first_distances = self.segments[0][2]
        labels = torch.empty(n_points, dtype=torch.long, device=first_labels.device)
        min_distances = torch.empty(n_points, dtype=first_distances.dtype,
                                    device=first_distances.device)
        covered = 0
        for start, seg_labels, seg_distances in self.segments:
            stop = start + seg_labels.shape[0]
            labels[start:stop] = seg_labels
            min_distances[start:stop] = seg_distances
            covered += seg_labels.shape[0]

        assert covered == n_points, f"Assignment covers {covered} of {n_points} points"

        return AssignmentMatrix(labels, n_clusters,
                                min_distances=min_distances,
                                counts=self.counts,
                                sums=self.sums)


class HardAssignment(AssignmentStrategy):
    """Hard (discrete) assignment to nearest center.

    Each point is assigned to exactly one center based on minimum distance,
    lowest index first on ties. Used by every rule in the package.
    """

    def __init__(self, n_jobs: int = 1, chunk_size: Optional[int] = None):
        """
        Args:
            n_jobs: Number of worker threads for the map phase
            chunk_size: Points per chunk (None sizes chunks from memory)
        """
        super().__init__()
        self.n_jobs = n_jobs
        self.chunk_size = chunk_size

    def _assign_chunk(self, points: Tensor, centers: Tensor,
                      metric: DistanceMetric, start: int, stop: int) -> PartialAssignment:
        chunk = points[start:stop]
        labels, min_distances = nearest_centers(chunk, centers, metric)

        n_clusters = centers.shape[0]
        counts = torch.bincount(labels, minlength=n_clusters)
        sums = torch.zeros(n_clusters, points.shape[1], dtype=points.dtype, device=points.device)
        sums.index_add_(0, labels, chunk)

        return PartialAssignment(start=start,
                                 segments=((start, labels, min_distances),),
                                 counts=counts,
                                 sums=sums)

    def compute_assignments(self, points: Tensor, centers: Tensor,
                            metric: DistanceMetric) -> AssignmentMatrix:
        """Assign each point to nearest center.

        Args:
            points: (n, d) data points
            centers: (K, d) current centers
            metric: Distance metric

        Returns:
            AssignmentMatrix with labels, distances, counts and sums
        """
        n_points, dimension = points.shape
        n_clusters = centers.shape[0]

        chunk_size = self.chunk_size or get_chunk_size(
            n_points, dimension, n_clusters, element_size=points.element_size()
        )
        bounds = [(start, min(start + chunk_size, n_points))
                  for start in range(0, n_points, chunk_size)]

        if self.n_jobs == 1 or len(bounds) == 1:
            partials = [self._assign_chunk(points, centers, metric, start, stop)
                        for start, stop in bounds]
        else:
            with ThreadPoolExecutor(max_workers=self.n_jobs) as executor:
                futures = [executor.submit(self._assign_chunk, points, centers, metric, start, stop)
                           for start, stop in bounds]
                partials = [future.result() for future in futures]

        merged = reduce(PartialAssignment.merge, sorted(partials, key=lambda p: p.start))
        return merged.to_matrix(n_points, n_clusters)
