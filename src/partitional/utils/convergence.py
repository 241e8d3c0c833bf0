"""
Convergence criteria for clustering algorithms.

All update rules share one convention: the loop stops once the largest
squared displacement of any center between two iterations is at most tol².
"""

from typing import Dict, Any
import torch
from torch import Tensor

from ..base.interfaces import ConvergenceCriterion


def max_displacement(previous: Tensor, current: Tensor) -> float:
    """Largest squared Euclidean shift between corresponding centers.

    Each row's shift is independent; the rows are combined with a max
    reduction, which is associative, so no running accumulator is shared.
    """
    if previous.shape != current.shape:
        raise ValueError(f"Center sets differ in shape: {tuple(previous.shape)} "
                         f"vs {tuple(current.shape)}")
    diff = previous - current
    shifts = torch.sum(diff * diff, dim=1)
    return shifts.max().item()


class CenterDisplacement(ConvergenceCriterion):
    """Convergence based on the maximum squared center displacement."""

    def __init__(self, tol: float = 1e-4):
        """
        Args:
            tol: Displacement tolerance in distance units; compared squared
        """
        super().__init__()
        self.tol = tol
        self.threshold = tol * tol

    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if the centers have stopped moving."""
        change = max_displacement(current_state['previous_centers'],
                                  current_state['centers'])
        converged = change <= self.threshold

        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'max_displacement': change,
            'converged': converged
        })

        return converged

    @property
    def last_displacement(self) -> float:
        if not self.history:
            return float('inf')
        return self.history[-1]['max_displacement']
