"""
Exceptions raised by the partitional clustering engine.
"""


class ConfigurationError(ValueError):
    """Invalid clustering configuration, detected before any iteration runs."""


class DimensionMismatchError(ValueError):
    """Two vectors (or point sets) with different dimensions were compared."""


class NotFittedError(RuntimeError):
    """Estimator used before ``fit`` was called."""


class ClusteringCancelled(RuntimeError):
    """Run aborted by its deadline or cancel event.

    The ``last_result`` attribute holds a result built from the last
    completed iteration (the partially computed iteration is discarded).
    """

    def __init__(self, message: str, last_result=None):
        super().__init__(message)
        self.last_result = last_result
