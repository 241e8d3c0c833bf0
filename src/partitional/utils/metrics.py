"""
Clustering evaluation metrics.

Internal quality (inertia) and external agreement with ground-truth labels.
"""

from typing import Union
import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric
from ..distances import get_metric


def inertia(X: Tensor, labels: Tensor, centers: Tensor,
            metric: Union[str, DistanceMetric] = 'sqeuclidean') -> float:
    """Sum of distances from each point to its assigned center.

    Args:
        X: (n, d) data points
        labels: (n,) cluster labels
        centers: (k, d) cluster centers
        metric: Distance metric (squared Euclidean gives classic inertia)

    Returns:
        Total inertia (lower is better)
    """
    metric = get_metric(metric)
    total = 0.0
    n_clusters = centers.shape[0]

    for k in range(n_clusters):
        mask = labels == k
        if mask.sum() > 0:
            distances = metric.pairwise(X[mask], centers[k:k + 1])
            total += distances.sum().item()

    return total


def contingency_matrix(labels_true: Tensor, labels_pred: Tensor) -> Tensor:
    """Build contingency matrix for comparing clusterings.

    Args:
        labels_true: (n,) true labels
        labels_pred: (n,) predicted labels

    Returns:
        Contingency matrix C where C[i,j] is the number of samples
        with true label i and predicted label j
    """
    labels_true = torch.as_tensor(labels_true).long().flatten()
    labels_pred = torch.as_tensor(labels_pred).long().flatten()
    if labels_true.shape != labels_pred.shape:
        raise ValueError(f"Label arrays differ in length: {labels_true.numel()} "
                         f"vs {labels_pred.numel()}")

    n_true = labels_true.max().item() + 1
    n_pred = labels_pred.max().item() + 1

    flat = labels_true * n_pred + labels_pred
    counts = torch.bincount(flat, minlength=n_true * n_pred)
    return counts.reshape(n_true, n_pred)


def adjusted_rand_score(labels_true: Tensor, labels_pred: Tensor) -> float:
    """Compute Adjusted Rand Index.

    ARI is 1.0 for identical partitions (up to label permutation) and about
    0.0 for random labeling.

    Args:
        labels_true: (n,) ground truth labels
        labels_pred: (n,) predicted labels

    Returns:
        ARI score in [-1, 1]
    """
    contingency = contingency_matrix(labels_true, labels_pred).double()

    row_sum = contingency.sum(dim=1)
    col_sum = contingency.sum(dim=0)
    n = contingency.sum()

    sum_comb = torch.sum(contingency * (contingency - 1)) / 2
    sum_comb_rows = torch.sum(row_sum * (row_sum - 1)) / 2
    sum_comb_cols = torch.sum(col_sum * (col_sum - 1)) / 2

    expected_index = sum_comb_rows * sum_comb_cols / (n * (n - 1) / 2)
    max_index = (sum_comb_rows + sum_comb_cols) / 2

    if max_index - expected_index == 0:
        return 1.0

    ari = (sum_comb - expected_index) / (max_index - expected_index)
    return ari.item()
