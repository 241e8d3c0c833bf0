"""
CLARANS: Clustering Large Applications based on RANdomized Search.

A medoid search that treats every set of k medoids as a node in a graph
whose neighbors differ by one swapped medoid. Each local search walks from a
random node, moving to a random neighbor whenever the swap lowers the total
cost, and stops after ``max_neighbor`` consecutive rejected neighbors. The
best of ``num_local`` local searches is returned.
"""

from typing import Optional, Union, Any, Dict, Tuple
import threading
import time
import torch
from torch import Tensor

from ..base.clustering_base import BaseClusteringAlgorithm, finalize_result, check_cancellation
from ..base.config import ClusteringConfig, UpdateRule
from ..base.data_structures import ClusteringResult
from ..base.exceptions import ClusteringCancelled, ConfigurationError
from ..base.interfaces import DistanceMetric
from ..utils.validation import validate_data, check_n_clusters, check_random_state


def nearest_two(distances: Tensor) -> Tuple[Tensor, Tensor, Tensor]:
    """Nearest medoid slot, its distance and the second-nearest distance.

    Args:
        distances: (n, k) point-to-medoid distances

    Returns:
        nearest: (n,) slot of the nearest medoid (lowest slot on ties)
        first: (n,) distance to it
        second: (n,) distance to the next nearest medoid (inf when k == 1)
    """
    nearest = torch.argmin(distances, dim=1)
    first = torch.gather(distances, 1, nearest.unsqueeze(1)).squeeze(1)
    if distances.shape[1] == 1:
        second = torch.full_like(first, float('inf'))
    else:
        second = torch.topk(distances, 2, dim=1, largest=False).values[:, 1]
    return nearest, first, second


def swap_cost_delta(distances: Tensor, slot: int, candidate_distances: Tensor) -> float:
    """Change in total cost when medoid ``slot`` is replaced by a candidate.

    Args:
        distances: (n, k) distances from every point to the current medoids
        slot: Medoid slot to vacate
        candidate_distances: (n,) distances from every point to the candidate

    Returns:
        New total cost minus current total cost (negative is an improvement)
    """
    nearest, first, second = nearest_two(distances)
    remaining = torch.where(nearest == slot, second, first)
    return (torch.minimum(remaining, candidate_distances) - first).sum().item()


def run_clarans(X, config: ClusteringConfig, num_local: int = 2,
                max_neighbor: int = 100) -> ClusteringResult:
    """Run a CLARANS medoid search.

    Args:
        X: (n, d) data
        config: Run configuration (n_clusters, metric, random_state,
            deadline, cancel_event, verbose)
        num_local: Number of independent local searches
        max_neighbor: Consecutive rejected swaps that end a local search

    Returns:
        ClusteringResult of the cheapest local search, with medoid indices

    Raises:
        ClusteringCancelled: Deadline or cancel event hit between local
            searches; carries the best result found so far, if any
    """
    started = time.monotonic()
    points = validate_data(X, dtype=config.dtype, device=config.device)
    n_points = points.shape[0]
    n_clusters = config.n_clusters
    check_n_clusters(n_clusters, n_points)

    generator = check_random_state(config.random_state)
    metric = config.metric

    best_indices: Optional[Tensor] = None
    best_cost = float('inf')

    for restart in range(num_local):
        reason = check_cancellation(config, started)
        if reason is not None:
            last_result = None
            if best_indices is not None:
                last_result = finalize_result(points, points[best_indices].clone(), best_indices,
                                              restart, False, [], config)
            raise ClusteringCancelled(f"CLARANS cancelled before local search {restart}: {reason}",
                                      last_result=last_result)

        medoids = torch.randperm(n_points, generator=generator)[:n_clusters].to(points.device)
        distances = metric.pairwise(points, points[medoids])

        is_medoid = torch.zeros(n_points, dtype=torch.bool, device=points.device)
        is_medoid[medoids] = True

        n_swaps = 0
        n_rejected = 0
        # With n == k every point is a medoid and there is no neighbor to try
        while n_rejected < max_neighbor and n_points > n_clusters:
            slot = int(torch.randint(n_clusters, (1,), generator=generator).item())
            candidates = torch.nonzero(~is_medoid).flatten()
            pick = int(torch.randint(candidates.shape[0], (1,), generator=generator).item())
            candidate = int(candidates[pick])

            candidate_distances = metric.pairwise(points, points[candidate:candidate + 1]).squeeze(1)
            delta = swap_cost_delta(distances, slot, candidate_distances)

            if delta < 0:
                is_medoid[medoids[slot]] = False
                is_medoid[candidate] = True
                medoids[slot] = candidate
                distances[:, slot] = candidate_distances
                n_swaps += 1
                n_rejected = 0
            else:
                n_rejected += 1

        cost = distances.min(dim=1).values.sum().item()

        if config.verbose:
            print(f"Local search {restart:3d}: cost = {cost:.6f}, swaps = {n_swaps}")

        if cost < best_cost:
            best_cost = cost
            best_indices = medoids.clone()

    if config.verbose:
        print(f"Best cost {best_cost:.6f} after {num_local} local searches "
              f"({time.monotonic() - started:.3f}s)")

    return finalize_result(points, points[best_indices].clone(), best_indices,
                           num_local, True, [], config)


class Clarans(BaseClusteringAlgorithm):
    """CLARANS randomized medoid search.

    Parameters
    ----------
    n_clusters : int
        Number of clusters
    num_local : int, default=2
        Number of local searches (restarts)
    max_neighbor : int, default=100
        Consecutive rejected neighbors after which a local search stops
    metric : str or DistanceMetric, default='sqeuclidean'
        Distance defining the cost of a medoid set
    verbose, random_state, device, deadline, cancel_event, n_jobs
        As for :class:`KMeans` (n_jobs affects the final labelling only)

    Attributes
    ----------
    cluster_centers_ : Tensor of shape (n_clusters, n_features)
        The medoids
    medoid_indices_ : Tensor of shape (n_clusters,)
        Index of each medoid in the training data
    labels_, inertia_, n_iter_, converged_
        n_iter_ equals num_local and converged_ is always True
    """

    def __init__(self,
                 n_clusters: int,
                 num_local: int = 2,
                 max_neighbor: int = 100,
                 metric: Union[str, DistanceMetric] = 'sqeuclidean',
                 n_jobs: int = 1,
                 verbose: int = 0,
                 random_state: Optional[int] = None,
                 device: Optional[torch.device] = None,
                 deadline: Optional[float] = None,
                 cancel_event: Optional[threading.Event] = None):
        super().__init__(
            n_clusters=n_clusters,
            n_jobs=n_jobs,
            verbose=verbose,
            random_state=random_state,
            device=device,
            deadline=deadline,
            cancel_event=cancel_event
        )
        self.num_local = num_local
        self.max_neighbor = max_neighbor
        self.metric = metric

    def _make_config(self) -> ClusteringConfig:
        for name in ('num_local', 'max_neighbor'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ConfigurationError(f"{name} must be a positive int, got {value!r}")
        return ClusteringConfig(init='random',
                                metric=self.metric,
                                update_rule=UpdateRule.MEDOID,
                                **self._common_config())

    def _run(self, X, config: ClusteringConfig) -> ClusteringResult:
        return run_clarans(X, config, num_local=self.num_local, max_neighbor=self.max_neighbor)

    @property
    def medoid_indices_(self) -> Tensor:
        self._check_fitted()
        return self.result_.medoid_indices

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        params = super().get_params(deep)
        del params['max_iter'], params['tol']
        params.update(num_local=self.num_local, max_neighbor=self.max_neighbor,
                      metric=self.metric)
        return params
