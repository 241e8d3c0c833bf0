# tests/utils.py
"""
Small, reusable helpers used across the partitional test suite.

Functions:
- to_numpy(x): tensor or array-like to numpy.
- same_partition(labels, groups): every group of indices shares one label, groups differ.
- time_block(label, meta=None): context manager that prints wall-clock time with optional metadata.
- print_timing(label, seconds, **meta): convenience printer for timings (used by time_block).
"""

from __future__ import annotations

import json
import time
from contextlib import contextmanager
from typing import Any, Dict, Sequence

import numpy as np
import torch


def to_numpy(x: Any) -> np.ndarray:
    if isinstance(x, torch.Tensor):
        return x.detach().cpu().numpy()
    return np.asarray(x)


def same_partition(labels: Any, groups: Sequence[Sequence[int]]) -> bool:
    """True if each group is labeled uniformly and no two groups share a label."""
    labels = to_numpy(labels)
    group_labels = []
    for group in groups:
        values = set(labels[list(group)].tolist())
        if len(values) != 1:
            return False
        group_labels.append(values.pop())
    return len(set(group_labels)) == len(group_labels)


@contextmanager
def time_block(label: str, meta: Dict[str, Any] | None = None):
    """
    Context manager to time a block and print a single-line summary.

    Example
    -------
    >>> with time_block("fit", {"n": 400, "d": 3, "K": 2}):
    ...     model.fit(X)

    Output
    ------
    [timing] fit {"n":400,"d":3,"K":2} 0.123s
    """
    t0 = time.perf_counter()
    try:
        yield
    finally:
        dt = time.perf_counter() - t0
        print_timing(label, dt, **(meta or {}))


def print_timing(label: str, seconds: float, **meta: Any) -> None:
    """
    Print timing in a compact, machine-readable single line.
    """
    meta_str = ""
    if meta:
        meta_str = " " + json.dumps(meta, separators=(",", ":"), default=repr)
    print(f"[timing] {label}{meta_str} {seconds:.3f}s")
