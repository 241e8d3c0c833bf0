"""
Run configuration for the partitional clustering engine.

A ``ClusteringConfig`` is built once, validated completely in
``__post_init__`` and then passed unchanged into ``run_clustering``.
Strategy choices are closed sets of tags resolved at configuration time.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Union, Any
import numbers
import torch

from .exceptions import ConfigurationError
from .interfaces import DistanceMetric
from .data_structures import ClusteringResult
from ..distances import get_metric
from ..utils.device import parse_device


class SeedingMethod(str, Enum):
    """How the initial centers are chosen."""
    RANDOM = 'random'
    KMEANS_PLUSPLUS = 'k-means++'
    PRECOMPUTED = 'precomputed'


class UpdateRule(str, Enum):
    """How centers are recomputed from an assignment."""
    MEAN = 'mean'
    MEDIAN = 'median'
    MEDOID = 'medoid'
    ONLINE_MEAN = 'online-mean'


def _coerce_enum(enum_cls, value, field_name: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        valid = [member.value for member in enum_cls]
        raise ConfigurationError(f"{field_name} must be one of {valid}, got {value!r}") from None


@dataclass(frozen=True)
class ClusteringConfig:
    """Validated options for one clustering run.

    Parameters
    ----------
    n_clusters : int
        Number of clusters k, at least 1 (checked against N at run time)
    init : str, SeedingMethod or array-like, default='k-means++'
        'random', 'k-means++' or 'precomputed'. Passing an array directly
        selects 'precomputed' with that array as ``init_centers``.
    init_centers : array-like, optional
        Precomputed centers: (k, d) coordinates for centroid rules, (k,)
        point indices for the medoid rule.
    metric : str or DistanceMetric, default='sqeuclidean'
        The single metric used for seeding, assignment and medoid costs.
    update_rule : str or UpdateRule, default='mean'
    max_iter : int, default=100
    tol : float, default=1e-4
        Center displacement tolerance; the loop compares squared
        displacements against tol².
    batch_size : int, default=1024
        Draws per iteration for the online-mean rule.
    n_jobs : int, default=1
        Worker threads for the assignment step.
    random_state : int or torch.Generator, optional
    deadline : float, optional
        Wall-clock budget in seconds, checked once per iteration.
    cancel_event : threading.Event-like, optional
        Anything with ``is_set()``; checked once per iteration.
    verbose : int, default=0
        0 silent, 1 progress, 2 per-iteration detail.
    device : str or torch.device, optional
        Defaults to CPU.
    dtype : torch.dtype, default=torch.float64
    """

    n_clusters: int
    init: Union[str, SeedingMethod, Any] = SeedingMethod.KMEANS_PLUSPLUS
    init_centers: Optional[Any] = None
    metric: Union[str, DistanceMetric] = 'sqeuclidean'
    update_rule: Union[str, UpdateRule] = UpdateRule.MEAN
    max_iter: int = 100
    tol: float = 1e-4
    batch_size: int = 1024
    n_jobs: int = 1
    random_state: Optional[Union[int, torch.Generator]] = None
    deadline: Optional[float] = None
    cancel_event: Optional[Any] = None
    verbose: int = 0
    device: Optional[Union[str, torch.device]] = None
    dtype: torch.dtype = torch.float64

    def __post_init__(self):
        init = self.init
        init_centers = self.init_centers
        if not isinstance(init, (str, SeedingMethod)):
            # Array passed as init, as in KMeans(init=centers)
            if init_centers is not None:
                raise ConfigurationError("Pass precomputed centers either as init or as "
                                         "init_centers, not both")
            init_centers = init
            init = SeedingMethod.PRECOMPUTED
        init = _coerce_enum(SeedingMethod, init, 'init')

        if init is SeedingMethod.PRECOMPUTED:
            if init_centers is None:
                raise ConfigurationError("init='precomputed' requires init_centers")
            n_given = (init_centers.n_clusters if isinstance(init_centers, ClusteringResult)
                       else len(init_centers))
            if n_given == 0:
                raise ConfigurationError("Precomputed centers must not be empty")
            if n_given != self.n_clusters:
                raise ConfigurationError(f"Got {n_given} precomputed centers, "
                                         f"but n_clusters={self.n_clusters}")
        elif init_centers is not None:
            raise ConfigurationError(f"init_centers given but init={init.value!r}")

        object.__setattr__(self, 'init', init)
        object.__setattr__(self, 'init_centers', init_centers)
        object.__setattr__(self, 'update_rule',
                           _coerce_enum(UpdateRule, self.update_rule, 'update_rule'))
        object.__setattr__(self, 'metric', get_metric(self.metric))
        object.__setattr__(self, 'device', parse_device(self.device))

        self._check_int('n_clusters', minimum=1)
        self._check_int('max_iter', minimum=1)
        self._check_int('batch_size', minimum=1)
        self._check_int('n_jobs', minimum=1)
        self._check_int('verbose', minimum=0)

        if not isinstance(self.tol, numbers.Real) or not self.tol > 0:
            raise ConfigurationError(f"tol must be positive, got {self.tol}")

        if self.deadline is not None and (not isinstance(self.deadline, numbers.Real)
                                          or not self.deadline > 0):
            raise ConfigurationError(f"deadline must be a positive number of seconds, "
                                     f"got {self.deadline}")

        if self.cancel_event is not None and not callable(getattr(self.cancel_event, 'is_set', None)):
            raise ConfigurationError("cancel_event must provide is_set()")

        if self.random_state is not None and not isinstance(self.random_state, torch.Generator):
            if isinstance(self.random_state, bool) or not isinstance(self.random_state, numbers.Integral):
                raise ConfigurationError(f"random_state must be int or Generator, "
                                         f"got {type(self.random_state)}")

        if not self.dtype.is_floating_point:
            raise ConfigurationError(f"dtype must be a floating point type, got {self.dtype}")

    def _check_int(self, name: str, minimum: int) -> None:
        value = getattr(self, name)
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise ConfigurationError(f"{name} must be int, got {type(value)}")
        if value < minimum:
            raise ConfigurationError(f"{name} must be >= {minimum}, got {value}")

    @property
    def uses_medoids(self) -> bool:
        return self.update_rule is UpdateRule.MEDOID

    def replace(self, **changes) -> 'ClusteringConfig':
        """Return a new validated config with some fields changed."""
        return replace(self, **changes)
