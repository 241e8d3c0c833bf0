"""
Input validation utilities.

Provides functions for validating data, cluster counts, random state and
precomputed centers before a run starts. Every check here fails fast:
nothing is silently coerced into a different shape.
"""

from typing import Optional, Union, Sequence
import torch
from torch import Tensor
import numpy as np

from ..base.data_structures import Point
from ..base.exceptions import ConfigurationError, DimensionMismatchError


def _points_to_tensor(points: Sequence[Point], dtype: torch.dtype,
                      device: Optional[torch.device]) -> Tensor:
    dimension = points[0].dimension
    for i, point in enumerate(points):
        if point.dimension != dimension:
            raise DimensionMismatchError(f"Point {i} has dimension {point.dimension}, "
                                         f"expected {dimension}")
    return torch.tensor([p.coordinates for p in points], dtype=dtype, device=device)


def _rows_to_tensor(rows: list, dtype: torch.dtype,
                    device: Optional[torch.device]) -> Tensor:
    if len(rows) == 0 or np.ndim(rows[0]) != 1:
        return torch.tensor(rows, dtype=dtype, device=device)

    # Rows may be lists, tuples, arrays or tensors, mixed freely
    dimension = len(rows[0])
    for i, row in enumerate(rows):
        row_dimension = len(row) if np.ndim(row) == 1 else np.ndim(row)
        if np.ndim(row) != 1 or row_dimension != dimension:
            raise DimensionMismatchError(f"Row {i} has dimension {row_dimension}, "
                                         f"expected {dimension}")
    return torch.stack([torch.as_tensor(row, dtype=dtype, device=device) for row in rows])


def validate_data(X: Union[Tensor, np.ndarray, list, Sequence[Point]],
                  dtype: torch.dtype = torch.float64,
                  device: Optional[torch.device] = None,
                  ensure_2d: bool = True,
                  ensure_finite: bool = True,
                  ensure_min_samples: int = 1,
                  ensure_min_features: int = 1) -> Tensor:
    """Validate and convert input data to tensor.

    Args:
        X: Input data (tensor, numpy array, nested list or sequence of Points)
        dtype: Target data type
        device: Target device
        ensure_2d: Whether to ensure 2D shape
        ensure_finite: Whether to check for inf/nan
        ensure_min_samples: Minimum number of samples required
        ensure_min_features: Minimum number of features required

    Returns:
        Validated tensor

    Raises:
        ConfigurationError: If there are too few samples or features
        DimensionMismatchError: If rows have different dimensions
        ValueError: If values are not finite
    """
    if isinstance(X, Tensor):
        X = X.to(dtype=dtype, device=device)
    elif isinstance(X, np.ndarray):
        X = torch.from_numpy(np.ascontiguousarray(X)).to(dtype=dtype, device=device)
    elif isinstance(X, (list, tuple)):
        if len(X) > 0 and isinstance(X[0], Point):
            X = _points_to_tensor(X, dtype, device)
        else:
            X = _rows_to_tensor(list(X), dtype, device)
    else:
        raise TypeError(f"Cannot convert {type(X)} to tensor")

    if ensure_2d:
        if X.dim() == 1:
            X = X.unsqueeze(1)
        elif X.dim() != 2:
            raise ValueError(f"Expected 2D array, got {X.dim()}D")

        n_samples, n_features = X.shape

        if n_samples < ensure_min_samples:
            raise ConfigurationError(f"Found {n_samples} samples, but need at least "
                                     f"{ensure_min_samples}")

        if n_features < ensure_min_features:
            raise ConfigurationError(f"Found {n_features} features, but need at least "
                                     f"{ensure_min_features}")

    if ensure_finite:
        if torch.isnan(X).any():
            raise ValueError("Input contains NaN values")
        if torch.isinf(X).any():
            raise ValueError("Input contains infinite values")

    return X


def check_n_clusters(n_clusters: int, n_samples: int) -> None:
    """Validate number of clusters.

    Args:
        n_clusters: Number of clusters
        n_samples: Number of samples

    Raises:
        ConfigurationError: If invalid
    """
    if isinstance(n_clusters, bool) or not isinstance(n_clusters, (int, np.integer)):
        raise ConfigurationError(f"n_clusters must be int, got {type(n_clusters)}")

    if n_clusters <= 0:
        raise ConfigurationError(f"n_clusters must be positive, got {n_clusters}")

    if n_clusters > n_samples:
        raise ConfigurationError(f"n_clusters ({n_clusters}) cannot be larger than "
                                 f"n_samples ({n_samples})")


def check_random_state(random_state: Optional[Union[int, torch.Generator]]) -> torch.Generator:
    """Create the run's random source.

    Args:
        random_state: Seed, generator, or None for a non-deterministic seed.
            A generator is copied, so the same config replays the same run.

    Returns:
        Generator shared by every randomized step of one run
    """
    if random_state is None:
        generator = torch.Generator()
        generator.seed()
        return generator
    elif isinstance(random_state, torch.Generator):
        # Copy so the caller's generator (and any config holding it) is never advanced
        generator = torch.Generator(device=random_state.device)
        generator.set_state(random_state.get_state())
        return generator
    elif isinstance(random_state, (int, np.integer)) and not isinstance(random_state, bool):
        generator = torch.Generator()
        generator.manual_seed(int(random_state))
        return generator
    else:
        raise ConfigurationError(f"random_state must be int or Generator, got {type(random_state)}")


def validate_init_centers(init: Union[Tensor, np.ndarray, list],
                          n_clusters: int,
                          n_features: Optional[int] = None,
                          dtype: torch.dtype = torch.float64) -> Tensor:
    """Validate precomputed initial centers.

    Args:
        init: (n_clusters, n_features) centers as tensor, array or list of rows
        n_clusters: Number of clusters
        n_features: Expected dimension, if known

    Returns:
        (n_clusters, n_features) tensor of centers
    """
    if isinstance(init, (list, tuple)) and len(init) == 0:
        raise ConfigurationError("Precomputed centers must not be empty")

    centers = validate_data(init, dtype=dtype, ensure_2d=True)

    if centers.shape[0] != n_clusters:
        raise ConfigurationError(f"Got {centers.shape[0]} precomputed centers, "
                                 f"but n_clusters={n_clusters}")
    if n_features is not None and centers.shape[1] != n_features:
        raise DimensionMismatchError(f"Precomputed centers have dimension {centers.shape[1]}, "
                                     f"but data has dimension {n_features}")
    return centers


def validate_init_indices(init: Union[Tensor, np.ndarray, list],
                          n_clusters: int,
                          n_samples: Optional[int] = None) -> Tensor:
    """Validate precomputed medoid indices.

    Args:
        init: (n_clusters,) integer indices into the data
        n_clusters: Number of clusters
        n_samples: Number of data points, if known

    Returns:
        (n_clusters,) long tensor
    """
    indices = torch.as_tensor(np.asarray(init) if not isinstance(init, Tensor) else init)

    if indices.numel() == 0:
        raise ConfigurationError("Precomputed medoid indices must not be empty")
    if indices.dim() != 1 or indices.dtype.is_floating_point or indices.dtype == torch.bool:
        raise ConfigurationError("Precomputed medoids must be a 1D sequence of integer indices")
    if indices.shape[0] != n_clusters:
        raise ConfigurationError(f"Got {indices.shape[0]} precomputed medoids, "
                                 f"but n_clusters={n_clusters}")
    if n_samples is not None and ((indices < 0).any() or (indices >= n_samples).any()):
        raise ConfigurationError(f"Medoid indices must lie in [0, {n_samples})")
    return indices.long()
