"""
Mini-batch K-means clustering algorithm.

Each iteration samples ``batch_size`` points with replacement and moves the
nearest center of each sample toward it with a per-center learning rate of
1 / (number of samples the center has absorbed).
"""

from typing import Optional, Union, Any, Dict
import threading
import torch

from .kmeans import KMeans
from ..base.config import ClusteringConfig, UpdateRule
from ..base.interfaces import DistanceMetric


class MiniBatchKMeans(KMeans):
    """Mini-batch K-means clustering algorithm.

    Parameters
    ----------
    n_clusters : int
        Number of clusters
    batch_size : int, default=1024
        Samples drawn per iteration
    init, metric, max_iter, tol, n_jobs, verbose, random_state, device,
    deadline, cancel_event
        As for :class:`KMeans`

    Notes
    -----
    ``n_jobs`` only affects the final labelling pass; the per-sample center
    updates are inherently sequential.
    """

    update_rule = UpdateRule.ONLINE_MEAN

    def __init__(self,
                 n_clusters: int,
                 batch_size: int = 1024,
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
        self.batch_size = batch_size

    def _make_config(self) -> ClusteringConfig:
        return super()._make_config().replace(batch_size=self.batch_size)

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        params = super().get_params(deep)
        params['batch_size'] = self.batch_size
        return params
