"""
Cluster visualization utilities.

Scatter plots of 2D clustering results. Colors are indexed by cluster id,
so a center and its members always share a color, and a center whose
cluster came out empty is still drawn.
"""

from typing import Optional, List
from torch import Tensor
import matplotlib.pyplot as plt
from matplotlib.colors import to_rgba_array
import numpy as np

from ..base.data_structures import ClusteringResult
from ..utils.validation import validate_data


def _as_plane(X, what: str) -> np.ndarray:
    array = validate_data(X).cpu().numpy()
    if array.shape[1] != 2:
        raise ValueError(f"plot_clusters_2d needs 2D {what}, got dimension {array.shape[1]}")
    return array


def cluster_palette(n_clusters: int, colors: Optional[List[str]] = None) -> np.ndarray:
    """(n_clusters, 4) RGBA rows; user colors are cycled if too few."""
    if colors is None:
        cmap = plt.get_cmap('tab10' if n_clusters <= 10 else 'tab20')
        colors = [cmap(k % cmap.N) for k in range(n_clusters)]
    rgba = to_rgba_array(colors)
    return rgba[np.arange(n_clusters) % len(rgba)]


def plot_clusters_2d(X,
                     labels: Tensor,
                     centers: Optional[Tensor] = None,
                     ax: Optional[plt.Axes] = None,
                     n_clusters: Optional[int] = None,
                     colors: Optional[List[str]] = None,
                     alpha: float = 0.7,
                     center_marker: str = 'X',
                     center_size: int = 200,
                     point_size: int = 30,
                     show_legend: bool = True,
                     title: Optional[str] = None) -> plt.Axes:
    """Plot 2D clustering results.

    Args:
        X: (n, 2) data points (tensor, array, list or Points)
        labels: (n,) cluster ids in [0, n_clusters)
        centers: Optional (k, 2) centers, row k belonging to cluster k
        ax: Matplotlib axes (created if None)
        n_clusters: Number of clusters; defaults to the number of centers,
            else to the largest label plus one
        colors: Colors per cluster id
        alpha: Point transparency
        center_marker: Marker for centers
        center_size: Size of center markers
        point_size: Size of data points
        show_legend: Whether to show legend
        title: Plot title

    Returns:
        Matplotlib axes
    """
    points = _as_plane(X, 'points')
    labels_np = np.asarray(labels.cpu() if isinstance(labels, Tensor) else labels).astype(int)
    if labels_np.shape != (points.shape[0],):
        raise ValueError(f"Got {labels_np.size} labels for {points.shape[0]} points")
    centers_np = _as_plane(centers, 'centers') if centers is not None else None

    if n_clusters is None:
        n_clusters = len(centers_np) if centers_np is not None else int(labels_np.max()) + 1
    palette = cluster_palette(n_clusters, colors)

    if ax is None:
        _, ax = plt.subplots(figsize=(8, 6))

    for k in range(n_clusters):
        members = points[labels_np == k]
        if len(members) == 0:
            continue
        ax.scatter(members[:, 0], members[:, 1],
                   color=palette[k],
                   s=point_size,
                   alpha=alpha,
                   linewidths=0,
                   label=f'Cluster {k} (n={len(members)})')

    if centers_np is not None:
        ax.scatter(centers_np[:, 0], centers_np[:, 1],
                   c=palette[:len(centers_np)],
                   marker=center_marker,
                   s=center_size,
                   edgecolors='black',
                   linewidths=1.5,
                   label='Centers',
                   zorder=3)

    ax.set_xlabel('x[0]')
    ax.set_ylabel('x[1]')
    if title:
        ax.set_title(title)
    if show_legend:
        ax.legend(loc='best', fontsize='small')

    return ax


def plot_result(X, result: ClusteringResult, ax: Optional[plt.Axes] = None,
                title: Optional[str] = None, **kwargs) -> plt.Axes:
    """Plot a ClusteringResult over its 2D input data."""
    if title is None:
        status = 'converged' if result.converged else 'not converged'
        title = f"{result.n_clusters} clusters, {result.n_iter} iterations ({status})"
    return plot_clusters_2d(X, result.labels, centers=result.centers, ax=ax,
                            n_clusters=result.n_clusters, title=title, **kwargs)
