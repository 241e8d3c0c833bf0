"""
Core data structures for the partitional clustering engine.

This module provides the immutable point type, the per-iteration assignment
container and the records the engine produces: seeding and update results,
per-iteration snapshots and the final, read-only clustering result.
"""

from typing import Optional, List, Tuple, Any, Iterator
import torch
from torch import Tensor
from dataclasses import dataclass, field


@dataclass(frozen=True, eq=False)
class Point:
    """Immutable fixed-dimension coordinate vector.

    Equality is element-wise over the coordinates; the optional ``data``
    payload travels with the point but does not take part in comparisons.
    """

    coordinates: Tuple[float, ...]
    data: Any = None

    def __post_init__(self):
        coordinates = tuple(float(c) for c in self.coordinates)
        if len(coordinates) == 0:
            raise ValueError("A point needs at least one coordinate")
        object.__setattr__(self, 'coordinates', coordinates)

    @property
    def dimension(self) -> int:
        return len(self.coordinates)

    def as_tensor(self, dtype: torch.dtype = torch.float64,
                  device: Optional[torch.device] = None) -> Tensor:
        """Coordinates as a 1D tensor."""
        return torch.tensor(self.coordinates, dtype=dtype, device=device)

    def __len__(self) -> int:
        return len(self.coordinates)

    def __iter__(self) -> Iterator[float]:
        return iter(self.coordinates)

    def __getitem__(self, index):
        return self.coordinates[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self.coordinates == other.coordinates

    def __hash__(self) -> int:
        return hash(self.coordinates)

    def __repr__(self) -> str:
        return f"Point({list(self.coordinates)})"


@dataclass
class SeedResult:
    """Initial centers chosen by a seeding strategy."""
    centers: Tensor                   # (K, d)
    indices: Optional[Tensor] = None  # (K,) input indices when centers are input points


@dataclass
class UpdateResult:
    """New centers produced by an update rule."""
    centers: Tensor                          # (K, d)
    updated: Tensor                          # (K,) bool, False for retained centers
    medoid_indices: Optional[Tensor] = None  # (K,) for medoid rules

    @property
    def empty_clusters(self) -> List[int]:
        return torch.nonzero(~self.updated).flatten().tolist()


class AssignmentMatrix:
    """Hard assignment of every point to exactly one center.

    Besides the labels it carries the aggregates computed during the
    parallel reduce: per-cluster counts and coordinate sums, and each
    point's distance to its assigned center.
    """

    def __init__(self,
                 labels: Tensor,
                 n_clusters: int,
                 min_distances: Optional[Tensor] = None,
                 counts: Optional[Tensor] = None,
                 sums: Optional[Tensor] = None):
        """
        Args:
            labels: (n,) center index per point
            n_clusters: Number of clusters K
            min_distances: Optional (n,) distance of each point to its center
            counts: Optional (K,) number of points per cluster
            sums: Optional (K, d) coordinate sums per cluster
        """
        assert labels.dim() == 1
        if labels.numel() > 0:
            assert labels.min() >= 0
            assert labels.max() < n_clusters
        self.n_clusters = n_clusters
        self._labels = labels.long()
        self._min_distances = min_distances
        self._counts = counts
        self._sums = sums

    @property
    def n_points(self) -> int:
        """Number of data points."""
        return self._labels.shape[0]

    def get_hard(self) -> Tensor:
        """(n,) center index per point."""
        return self._labels

    def get_cluster_indices(self, cluster_idx: int) -> Tensor:
        """Indices of points assigned to a specific cluster, ascending."""
        return torch.where(self._labels == cluster_idx)[0]

    def count_per_cluster(self) -> Tensor:
        """Count points per cluster."""
        if self._counts is None:
            self._counts = torch.bincount(self._labels, minlength=self.n_clusters)
        return self._counts

    def cluster_sums(self) -> Optional[Tensor]:
        """(K, d) coordinate sums per cluster, if computed during assignment."""
        return self._sums

    @property
    def min_distances(self) -> Optional[Tensor]:
        return self._min_distances

    def empty_clusters(self) -> List[int]:
        """Clusters that received no point."""
        return torch.nonzero(self.count_per_cluster() == 0).flatten().tolist()

    @property
    def inertia(self) -> float:
        """Sum of distances from each point to its assigned center."""
        if self._min_distances is None:
            raise ValueError("Assignment was built without distances")
        return self._min_distances.sum().item()


@dataclass
class AlgorithmState:
    """Snapshot of one engine iteration.

    ``inertia`` is measured for the assignment made at the start of the
    iteration (None for rules that skip the full assignment step).
    """
    iteration: int
    centers: Tensor
    max_displacement: float
    inertia: Optional[float] = None
    empty_clusters: List[int] = field(default_factory=list)
    elapsed: float = 0.0


@dataclass(frozen=True)
class ClusteringResult:
    """Terminal, read-only outcome of a clustering run."""
    centers: Tensor                          # (K, d)
    labels: Tensor                           # (n,)
    n_iter: int
    converged: bool
    inertia: float
    medoid_indices: Optional[Tensor] = None  # (K,) for medoid rules
    history: Tuple[AlgorithmState, ...] = ()

    @property
    def n_clusters(self) -> int:
        return self.centers.shape[0]

    def cluster_sizes(self) -> Tensor:
        """Number of points per cluster."""
        return torch.bincount(self.labels, minlength=self.n_clusters)

    def center_points(self) -> List[Point]:
        """Centers as Point objects."""
        return [Point(tuple(row.tolist())) for row in self.centers.cpu()]
