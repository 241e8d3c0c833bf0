"""
Core interfaces for the partitional clustering engine.

Every algorithm in the package is assembled from the same five pieces:
a distance metric, a seeding strategy, an assignment strategy, an update
rule and a convergence criterion. This module defines the abstract base
classes each piece must implement.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any, Sequence, Union
import torch
from torch import Tensor

from .exceptions import DimensionMismatchError


class DistanceMetric(ABC):
    """Abstract base class for pairwise distance functions.

    Subclasses implement :meth:`_pairwise` on validated 2D tensors. The
    public entry points check dimensions first and never truncate to the
    shorter vector.
    """

    name: str = ''

    @abstractmethod
    def _pairwise(self, points: Tensor, centers: Tensor) -> Tensor:
        """Compute distances between validated point and center sets.

        Args:
            points: (n, d) tensor of points
            centers: (k, d) tensor of centers

        Returns:
            (n, k) tensor of distances
        """
        pass

    def pairwise(self, points: Tensor, centers: Tensor) -> Tensor:
        """Compute the (n, k) distance matrix between points and centers.

        Args:
            points: (n, d) tensor of points
            centers: (k, d) tensor of centers

        Returns:
            (n, k) tensor of distances

        Raises:
            DimensionMismatchError: If the two sets have different dimensions
        """
        if points.dim() != 2 or centers.dim() != 2:
            raise ValueError(f"Expected 2D tensors, got {points.dim()}D and {centers.dim()}D")
        if points.shape[1] != centers.shape[1]:
            raise DimensionMismatchError(
                f"Points have dimension {points.shape[1]}, "
                f"centers have dimension {centers.shape[1]}"
            )
        return self._pairwise(points, centers)

    def distance(self, a: Union[Tensor, Sequence[float]],
                 b: Union[Tensor, Sequence[float]]) -> float:
        """Distance between two single vectors."""
        a = torch.as_tensor(a, dtype=torch.float64)
        b = torch.as_tensor(b, dtype=torch.float64)
        if a.dim() != 1 or b.dim() != 1:
            raise ValueError(f"Expected 1D vectors, got {a.dim()}D and {b.dim()}D")
        if a.shape[0] != b.shape[0]:
            raise DimensionMismatchError(
                f"Cannot compare vectors of dimension {a.shape[0]} and {b.shape[0]}"
            )
        return float(self._pairwise(a.unsqueeze(0), b.unsqueeze(0))[0, 0])

    def __call__(self, a, b) -> float:
        return self.distance(a, b)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class InitializationStrategy(ABC):
    """Abstract base class for seeding strategies."""

    @abstractmethod
    def initialize(self, points: Tensor, n_clusters: int,
                   metric: Optional[DistanceMetric] = None,
                   generator: Optional[torch.Generator] = None):
        """Choose the initial centers.

        Args:
            points: (n, d) tensor of data points
            n_clusters: Number of centers to produce
            metric: Run metric (used by distance-weighted strategies)
            generator: The run's single random source

        Returns:
            SeedResult with (k, d) centers and, where the centers are input
            points, their (k,) indices
        """
        pass


class AssignmentStrategy(ABC):
    """Abstract base class for point-to-center assignment strategies."""

    @abstractmethod
    def compute_assignments(self, points: Tensor, centers: Tensor,
                            metric: DistanceMetric):
        """Label every point with its nearest center.

        Args:
            points: (n, d) tensor of data points
            centers: (k, d) tensor of current centers
            metric: Run metric

        Returns:
            AssignmentMatrix covering all n points
        """
        pass


class ParameterUpdater(ABC):
    """Abstract base class for center update rules."""

    @property
    def requires_assignment(self) -> bool:
        """Whether the engine must run a full assignment step before update."""
        return True

    @property
    def uses_medoids(self) -> bool:
        """Whether centers are input points addressed by index."""
        return False

    def reset(self, n_clusters: int) -> None:
        """Clear any per-run state before a new run starts."""
        pass

    @abstractmethod
    def update(self, points: Tensor, assignment, centers: Tensor,
               metric: DistanceMetric, **kwargs):
        """Recompute the centers from the current assignment.

        Args:
            points: (n, d) tensor of all data points
            assignment: AssignmentMatrix from this iteration (None when
                ``requires_assignment`` is False)
            centers: (k, d) centers the assignment was computed against
            metric: Run metric
            **kwargs: Rule-specific state (``generator``, ``medoid_indices``)

        Returns:
            UpdateResult with the new centers and a per-cluster updated mask
        """
        pass


class ConvergenceCriterion(ABC):
    """Abstract base class for convergence checking."""

    def __init__(self):
        self.history = []

    @abstractmethod
    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if algorithm has converged.

        Args:
            current_state: Dictionary containing current algorithm state

        Returns:
            True if converged, False otherwise
        """
        pass

    def reset(self):
        """Reset convergence history."""
        self.history = []
