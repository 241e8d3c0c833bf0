"""
K-medoids clustering algorithm.

Centers are restricted to input points. Each iteration assigns points to
their nearest medoid, then replaces a cluster's medoid with the member that
has the lowest total distance to the other members whenever that member is
strictly cheaper.
"""

from typing import Optional, Union, Any
import threading
import torch
from torch import Tensor

from .kmeans import KMeans
from ..base.config import UpdateRule
from ..base.interfaces import DistanceMetric


class KMedoids(KMeans):
    """K-medoids clustering algorithm.

    Parameters
    ----------
    n_clusters : int
        Number of clusters
    init : str or array-like, default='k-means++'
        'k-means++', 'random', or an array of n_clusters point indices
    metric : str or DistanceMetric, default='manhattan'
        Distance for assignment and medoid costs
    max_iter, tol, n_jobs, verbose, random_state, device, deadline, cancel_event
        As for :class:`KMeans`

    Attributes
    ----------
    medoid_indices_ : Tensor of shape (n_clusters,)
        Index of each medoid in the training data
    """

    update_rule = UpdateRule.MEDOID

    def __init__(self,
                 n_clusters: int,
                 init: Union[str, Any] = 'k-means++',
                 metric: Union[str, DistanceMetric] = 'manhattan',
                 max_iter: int = 100,
                 tol: float = 1e-4,
                 n_jobs: int = 1,
                 verbose: int = 0,
                 random_state: Optional[int] = None,
                 device: Optional[torch.device] = None,
                 deadline: Optional[float] = None,
                 cancel_event: Optional[threading.Event] = None):
        super().__init__(
            n_clusters=n_clusters,
            init=init,
            metric=metric,
            max_iter=max_iter,
            tol=tol,
            n_jobs=n_jobs,
            verbose=verbose,
            random_state=random_state,
            device=device,
            deadline=deadline,
            cancel_event=cancel_event
        )

    @property
    def medoid_indices_(self) -> Tensor:
        self._check_fitted()
        return self.result_.medoid_indices
