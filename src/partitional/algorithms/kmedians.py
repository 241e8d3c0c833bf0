"""
K-medians clustering algorithm.

Replaces the mean update with the coordinate-wise median, which makes the
centers robust to outliers. Paired with the Manhattan distance by default,
under which the coordinate-wise median minimizes the within-cluster cost.
"""

from typing import Optional, Union, Any
import threading
import torch

from .kmeans import KMeans
from ..base.config import UpdateRule
from ..base.interfaces import DistanceMetric


class KMedians(KMeans):
    """K-medians clustering algorithm.

    Parameters are those of :class:`KMeans`; ``metric`` defaults to
    'manhattan'. Centers are coordinate-wise medians of their members (the
    average of the two middle values for an even member count).
    """

    update_rule = UpdateRule.MEDIAN

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
