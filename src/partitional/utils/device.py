"""
Device selection and work-splitting utilities.

The engine runs single-process on one device; these helpers resolve the
device specification and size the point chunks handed to assignment
workers.
"""

from typing import Optional, Union
import torch
import warnings


def get_default_device() -> torch.device:
    """Default device for clustering runs.

    Runs are CPU-bound batch computations over an in-memory snapshot, so the
    CPU is the default even when an accelerator is present.
    """
    return torch.device('cpu')


def parse_device(device: Optional[Union[str, torch.device]] = None) -> torch.device:
    """Parse device specification.

    Args:
        device: Device specification
            - None: Use default (cpu)
            - 'auto': Use best available
            - 'cpu': Use CPU
            - 'cuda': Use default CUDA device
            - 'cuda:X': Use CUDA device X
            - 'mps': Use Apple Metal Performance Shaders
            - torch.device: Use as-is

    Returns:
        Parsed device
    """
    if device is None:
        return get_default_device()

    if isinstance(device, torch.device):
        return device

    if isinstance(device, str):
        if device == 'auto':
            if torch.cuda.is_available():
                return torch.device('cuda')
            if hasattr(torch.backends, 'mps') and torch.backends.mps.is_available():
                return torch.device('mps')
            return torch.device('cpu')
        elif device == 'cpu':
            return torch.device('cpu')
        elif device.startswith('cuda'):
            if not torch.cuda.is_available():
                warnings.warn("CUDA not available, falling back to CPU")
                return torch.device('cpu')
            return torch.device(device)
        elif device == 'mps':
            if hasattr(torch.backends, 'mps') and torch.backends.mps.is_available():
                return torch.device('mps')
            else:
                warnings.warn("MPS not available, falling back to CPU")
                return torch.device('cpu')
        else:
            raise ValueError(f"Unknown device: {device}")
    else:
        raise TypeError(f"Device must be str or torch.device, got {type(device)}")


def get_chunk_size(n_samples: int, n_features: int, n_clusters: int,
                   element_size: int = 8,
                   target_memory_mb: float = 64) -> int:
    """Number of points per assignment chunk.

    Each point in a chunk materialises a (n_clusters, n_features) difference
    block, so the chunk is sized to keep that intermediate under the memory
    target. The result depends only on the problem shape, never on the
    worker count, so chunk boundaries (and reduce order) are identical for
    any number of workers.

    Args:
        n_samples: Total number of points
        n_features: Point dimension
        n_clusters: Number of centers
        element_size: Bytes per scalar
        target_memory_mb: Target intermediate size in MB

    Returns:
        Chunk size in [1, n_samples]
    """
    bytes_per_sample = max(1, n_clusters * n_features * element_size)
    target_bytes = target_memory_mb * 1024 * 1024

    chunk_size = int(target_bytes / bytes_per_sample)
    chunk_size = max(1, min(chunk_size, n_samples))

    # Round to nice number
    if chunk_size > 1000:
        chunk_size = (chunk_size // 1000) * 1000
    elif chunk_size > 100:
        chunk_size = (chunk_size // 100) * 100

    return chunk_size
