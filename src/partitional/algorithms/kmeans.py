"""
K-means clustering algorithm.

The classic K-means algorithm: nearest-center assignment followed by a
per-cluster mean update, repeated until the centers stop moving.
"""

from typing import Optional, Union, Any, Dict
import threading
import torch

from ..base.clustering_base import BaseClusteringAlgorithm
from ..base.config import ClusteringConfig, UpdateRule
from ..base.interfaces import DistanceMetric


class KMeans(BaseClusteringAlgorithm):
    """K-means clustering algorithm.

    Classic K-means that partitions data into K clusters by minimizing
    within-cluster sum of squared distances.

    Parameters
    ----------
    n_clusters : int
        Number of clusters
    init : str or array-like, default='k-means++'
        Initialization method:
        - 'k-means++' : K-means++ initialization
        - 'random' : Random initialization
        - array of shape (n_clusters, n_features) : Use as initial centers
    metric : str or DistanceMetric, default='sqeuclidean'
        Distance used for seeding and assignment
    max_iter : int, default=100
        Maximum number of iterations
    tol : float, default=1e-4
        Convergence tolerance on the largest center displacement
    n_jobs : int, default=1
        Worker threads for the assignment step
    verbose : int, default=0
        Verbosity level
    random_state : int, optional
        Random seed for reproducibility
    device : torch.device, optional
        Device for computation (CPU by default)
    deadline : float, optional
        Wall-clock budget in seconds
    cancel_event : threading.Event, optional
        Set from another thread to stop the run

    Attributes
    ----------
    cluster_centers_ : Tensor of shape (n_clusters, n_features)
        Cluster centroids
    labels_ : Tensor of shape (n_samples,)
        Cluster assignments for training data
    inertia_ : float
        Sum of distances to nearest cluster center
    n_iter_ : int
        Number of iterations run
    converged_ : bool
        Whether the centers settled before max_iter
    """

    update_rule = UpdateRule.MEAN

    def __init__(self,
                 n_clusters: int,
                 init: Union[str, Any] = 'k-means++',
                 metric: Union[str, DistanceMetric] = 'sqeuclidean',
                 max_iter: int = 100,
                 tol: float = 1e-4,
                 n_jobs: int = 1,
                 verbose: int = 0,
                 random_state: Optional[int] = None,
                 device: Optional[torch.device] = None,
                 deadline: Optional[float] = None,
                 cancel_event: Optional[threading.Event] = None):
        """Initialize K-means algorithm."""
        super().__init__(
            n_clusters=n_clusters,
            max_iter=max_iter,
            tol=tol,
            n_jobs=n_jobs,
            verbose=verbose,
            random_state=random_state,
            device=device,
            deadline=deadline,
            cancel_event=cancel_event
        )
        self.init = init
        self.metric = metric

    def _make_config(self) -> ClusteringConfig:
        return ClusteringConfig(init=self.init,
                                metric=self.metric,
                                update_rule=self.update_rule,
                                **self._common_config())

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        params = super().get_params(deep)
        params.update(init=self.init, metric=self.metric)
        return params
