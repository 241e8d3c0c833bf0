# tests/data_gen.py
"""
Tiny synthetic-data generators reused across the partitional test suite.

    >>> X, y, C = make_blobs(n_per=50, centers=[[0, 0], [5, 5]], seed=0)
    >>> X.shape, y.shape, C.shape
    ((100, 2), (100,), (2, 2))
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple
import numpy as np

NDArray = np.ndarray


def make_blobs(
    n_per: int = 100,
    centers: Optional[Sequence[Sequence[float]]] = None,
    scale: float = 0.3,
    seed: Optional[int] = None,
) -> Tuple[NDArray, NDArray, NDArray]:
    """
    Isotropic Gaussian blobs around the given centers.

    Parameters
    ----------
    n_per : int, default=100
        Number of points per blob.
    centers : (K, d) array-like, optional
        Blob centers; defaults to three well separated 2D centers.
    scale : float, default=0.3
        Standard deviation of each blob.
    seed : int or None
        RNG seed for reproducibility.

    Returns
    -------
    X : (K*n_per, d) ndarray, float64
        Data matrix, blobs stacked in center order.
    y : (K*n_per,) ndarray, int64
        Ground-truth labels.
    C : (K, d) ndarray, float64
        The true centers.
    """
    rng = np.random.default_rng(seed)
    if centers is None:
        centers = [[0.0, 0.0], [6.0, 0.0], [0.0, 6.0]]
    C = np.asarray(centers, dtype=np.float64)
    K, d = C.shape

    X = np.vstack([C[k] + scale * rng.normal(size=(n_per, d)) for k in range(K)])
    y = np.repeat(np.arange(K, dtype=np.int64), n_per)
    return X, y, C


def make_blobs_with_outliers(
    n_per: int = 100,
    n_outliers: int = 5,
    seed: Optional[int] = None,
) -> Tuple[NDArray, NDArray]:
    """
    Two 2D blobs at (0, 0) and (8, 8) plus far outliers attached to the first.

    Returns
    -------
    X : (2*n_per + n_outliers, 2) ndarray
        Blob 0, then its outliers, then blob 1.
    y : (2*n_per + n_outliers,) ndarray
        Ground-truth labels (outliers belong to blob 0).
    """
    rng = np.random.default_rng(seed)
    A = 0.3 * rng.normal(size=(n_per, 2))
    outliers = np.tile([[0.0, -40.0]], (n_outliers, 1)) + rng.normal(size=(n_outliers, 2))
    B = np.array([8.0, 8.0]) + 0.3 * rng.normal(size=(n_per, 2))

    X = np.vstack([A, outliers, B])
    y = np.concatenate([np.zeros(n_per + n_outliers, dtype=np.int64),
                        np.ones(n_per, dtype=np.int64)])
    return X, y
