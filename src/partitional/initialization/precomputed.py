"""
Initialization from caller-supplied centers.

Useful for warm starts from a previous result or when you have good initial
guesses. No randomness is consumed.
"""

from typing import Union, Optional
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy, DistanceMetric
from ..base.data_structures import SeedResult, ClusteringResult
from ..base.exceptions import ConfigurationError
from ..utils.validation import validate_init_centers, validate_init_indices


class PrecomputedInit(InitializationStrategy):
    """Initialize from given centers or a previous clustering result.

    Accepts either:
    - (n_clusters, dimension) center coordinates
    - (n_clusters,) point indices, when ``as_indices`` is set (medoid rule)
    - A ClusteringResult from a previous run
    """

    def __init__(self, initial_state: Union[Tensor, list, ClusteringResult],
                 as_indices: bool = False):
        """
        Args:
            initial_state: Centers, medoid indices or a previous result
            as_indices: Interpret ``initial_state`` as indices into the data
        """
        self.initial_state = initial_state
        self.as_indices = as_indices

    def initialize(self, points: Tensor, n_clusters: int,
                   metric: Optional[DistanceMetric] = None,
                   generator: Optional[torch.Generator] = None) -> SeedResult:
        """Validate and return the supplied centers.

        Args:
            points: (n, d) data points (used for validation)
            n_clusters: Expected number of clusters

        Returns:
            SeedResult with the supplied centers
        """
        n_points, dimension = points.shape
        state = self.initial_state

        if isinstance(state, ClusteringResult):
            if self.as_indices:
                if state.medoid_indices is None:
                    raise ConfigurationError("Previous result has no medoid indices to start from")
                state = state.medoid_indices
            else:
                state = state.centers

        if self.as_indices:
            indices = validate_init_indices(state, n_clusters, n_points).to(points.device)
            return SeedResult(centers=points[indices].clone(), indices=indices)

        centers = validate_init_centers(state, n_clusters, dimension, dtype=points.dtype)
        return SeedResult(centers=centers.to(points.device).clone())
