"""
Engine and estimator base class for partitional clustering.

``run_clustering`` implements the shared skeleton

    Seeding -> {Assignment -> Update -> Convergence check}* -> Result

as a stateless function of the data and a validated ``ClusteringConfig``.
``BaseClusteringAlgorithm`` wraps it in the fit/predict estimator API.
"""

from abc import abstractmethod
from typing import Optional, Dict, Any, List, NamedTuple
import time
import warnings
import torch
from torch import Tensor

from .config import ClusteringConfig, SeedingMethod, UpdateRule
from .data_structures import AlgorithmState, ClusteringResult
from .exceptions import ClusteringCancelled, NotFittedError
from .interfaces import (
    AssignmentStrategy, ParameterUpdater, InitializationStrategy, ConvergenceCriterion
)
from ..assignments.hard import HardAssignment
from ..initialization import RandomInit, KMeansPlusPlusInit, PrecomputedInit
from ..updates import MeanUpdater, MedianUpdater, MedoidUpdater, OnlineMeanUpdater
from ..utils.convergence import CenterDisplacement
from ..utils.validation import validate_data, check_n_clusters, check_random_state


class RunComponents(NamedTuple):
    """Strategies selected for one run."""
    initialization_strategy: InitializationStrategy
    assignment_strategy: AssignmentStrategy
    update_strategy: ParameterUpdater
    convergence_criterion: ConvergenceCriterion


def create_components(config: ClusteringConfig) -> RunComponents:
    """Resolve the config's strategy tags into fresh component instances."""
    if config.init is SeedingMethod.RANDOM:
        initialization = RandomInit()
    elif config.init is SeedingMethod.KMEANS_PLUSPLUS:
        initialization = KMeansPlusPlusInit()
    else:
        initialization = PrecomputedInit(config.init_centers, as_indices=config.uses_medoids)

    if config.update_rule is UpdateRule.MEAN:
        update = MeanUpdater()
    elif config.update_rule is UpdateRule.MEDIAN:
        update = MedianUpdater()
    elif config.update_rule is UpdateRule.MEDOID:
        update = MedoidUpdater()
    else:
        update = OnlineMeanUpdater(batch_size=config.batch_size)

    return RunComponents(
        initialization_strategy=initialization,
        assignment_strategy=HardAssignment(n_jobs=config.n_jobs),
        update_strategy=update,
        convergence_criterion=CenterDisplacement(tol=config.tol)
    )


def finalize_result(points: Tensor, centers: Tensor, medoid_indices: Optional[Tensor],
                    n_iter: int, converged: bool, history: List[AlgorithmState],
                    config: ClusteringConfig,
                    assignment_strategy: Optional[AssignmentStrategy] = None) -> ClusteringResult:
    """Label every point against the final centers and freeze the result."""
    if assignment_strategy is None:
        assignment_strategy = HardAssignment(n_jobs=config.n_jobs)
    assignment = assignment_strategy.compute_assignments(points, centers, config.metric)

    return ClusteringResult(
        centers=centers,
        labels=assignment.get_hard(),
        n_iter=n_iter,
        converged=converged,
        inertia=assignment.inertia,
        medoid_indices=medoid_indices,
        history=tuple(history)
    )


def check_cancellation(config: ClusteringConfig, started: float) -> Optional[str]:
    """Reason to abort the run now, or None to continue."""
    if config.cancel_event is not None and config.cancel_event.is_set():
        return "cancel event set"
    if config.deadline is not None and time.monotonic() - started > config.deadline:
        return f"deadline of {config.deadline}s exceeded"
    return None


def run_clustering(X, config: ClusteringConfig) -> ClusteringResult:
    """Run one partitional clustering job.

    Args:
        X: (n, d) data as tensor, array, nested list or sequence of Points
        config: Validated run configuration

    Returns:
        Frozen ClusteringResult

    Raises:
        ConfigurationError: Invalid input for this config (before iterating)
        DimensionMismatchError: Ragged points or mismatched precomputed centers
        ClusteringCancelled: Deadline or cancel event hit; carries the result
            of the last completed iteration
    """
    started = time.monotonic()
    points = validate_data(X, dtype=config.dtype, device=config.device)
    n_points = points.shape[0]
    n_clusters = config.n_clusters
    check_n_clusters(n_clusters, n_points)

    components = create_components(config)
    generator = check_random_state(config.random_state)
    metric = config.metric

    if config.verbose:
        print(f"Initializing {n_clusters} clusters ({config.init.value}, "
              f"{config.update_rule.value} update, {metric.name})...")

    seed = components.initialization_strategy.initialize(
        points, n_clusters, metric=metric, generator=generator
    )
    centers = seed.centers
    medoid_indices = seed.indices if components.update_strategy.uses_medoids else None

    components.update_strategy.reset(n_clusters)
    components.convergence_criterion.reset()

    history: List[AlgorithmState] = []
    converged = False
    n_iter = 0

    for iteration in range(config.max_iter):
        reason = check_cancellation(config, started)
        if reason is not None:
            last_result = finalize_result(points, centers, medoid_indices, n_iter, False,
                                          history, config, components.assignment_strategy)
            raise ClusteringCancelled(f"Clustering cancelled at iteration {iteration}: {reason}",
                                      last_result=last_result)

        iter_start_time = time.time()

        # Assignment step
        assignment = None
        if components.update_strategy.requires_assignment:
            assignment = components.assignment_strategy.compute_assignments(
                points, centers, metric
            )

        # Update step
        update = components.update_strategy.update(
            points, assignment, centers, metric,
            generator=generator, medoid_indices=medoid_indices
        )

        # Check convergence
        converged = components.convergence_criterion.check({
            'iteration': iteration,
            'previous_centers': centers,
            'centers': update.centers
        })
        displacement = components.convergence_criterion.history[-1]['max_displacement']

        iter_time = time.time() - iter_start_time
        state = AlgorithmState(
            iteration=iteration,
            centers=update.centers,
            max_displacement=displacement,
            inertia=assignment.inertia if assignment is not None else None,
            empty_clusters=update.empty_clusters,
            elapsed=iter_time
        )
        history.append(state)

        # Logging
        if config.verbose >= 2 or (config.verbose >= 1 and iteration % 10 == 0):
            inertia_str = f"{state.inertia:.6f}" if state.inertia is not None else "n/a"
            print(f"Iteration {iteration:3d}: inertia = {inertia_str}, "
                  f"max shift = {displacement:.3e} ({iter_time:.3f}s)")
        if config.verbose >= 2 and state.empty_clusters:
            print(f"Iteration {iteration:3d}: kept previous center for empty clusters "
                  f"{state.empty_clusters}")

        centers = update.centers
        medoid_indices = update.medoid_indices

        if converged:
            if config.verbose:
                print(f"Converged at iteration {iteration}")
            break

        n_iter = iteration + 1

    result = finalize_result(points, centers, medoid_indices, n_iter, converged,
                             history, config, components.assignment_strategy)

    if config.verbose:
        if not converged:
            warnings.warn(f"Failed to converge after {config.max_iter} iterations")
        print(f"Total fitting time: {time.monotonic() - started:.3f}s")

    return result


class BaseClusteringAlgorithm:
    """Base class for the estimator facades.

    Subclasses choose the update rule and defaults by implementing
    :meth:`_make_config`; fitting delegates to :func:`run_clustering`.
    """

    def __init__(self,
                 n_clusters: int,
                 max_iter: int = 100,
                 tol: float = 1e-4,
                 n_jobs: int = 1,
                 verbose: int = 0,
                 random_state: Optional[int] = None,
                 device: Optional[torch.device] = None,
                 deadline: Optional[float] = None,
                 cancel_event: Optional[Any] = None):
        """
        Args:
            n_clusters: Number of clusters K
            max_iter: Maximum iterations
            tol: Convergence tolerance on center displacement
            n_jobs: Worker threads for the assignment step
            verbose: Verbosity level (0=silent, 1=progress, 2=detailed)
            random_state: Random seed for reproducibility
            device: Torch device (None for CPU)
            deadline: Optional wall-clock budget per fit, in seconds
            cancel_event: Optional event checked once per iteration
        """
        self.n_clusters = n_clusters
        self.max_iter = max_iter
        self.tol = tol
        self.n_jobs = n_jobs
        self.verbose = verbose
        self.random_state = random_state
        self.device = device
        self.deadline = deadline
        self.cancel_event = cancel_event

        self.config_: Optional[ClusteringConfig] = None
        self.result_: Optional[ClusteringResult] = None
        self.fitted_ = False

    @abstractmethod
    def _make_config(self) -> ClusteringConfig:
        """Build the validated run configuration from the estimator's params."""
        pass

    def _common_config(self) -> Dict[str, Any]:
        """Config fields shared by every estimator."""
        return {
            'n_clusters': self.n_clusters,
            'max_iter': self.max_iter,
            'tol': self.tol,
            'n_jobs': self.n_jobs,
            'verbose': self.verbose,
            'random_state': self.random_state,
            'device': self.device,
            'deadline': self.deadline,
            'cancel_event': self.cancel_event
        }

    def _run(self, X, config: ClusteringConfig) -> ClusteringResult:
        return run_clustering(X, config)

    def fit(self, X, y=None) -> 'BaseClusteringAlgorithm':
        """Fit the clustering model.

        Args:
            X: (n, d) data
            y: Ignored (for sklearn compatibility)

        Returns:
            Self
        """
        self.config_ = self._make_config()
        self.result_ = self._run(X, self.config_)
        self.fitted_ = True
        return self

    def fit_predict(self, X, y=None) -> Tensor:
        """Fit and return the training labels."""
        return self.fit(X).labels_

    def predict(self, X) -> Tensor:
        """Label new data with the nearest fitted center.

        Args:
            X: (n, d) data

        Returns:
            (n,) tensor of cluster assignments
        """
        self._check_fitted()
        X = validate_data(X, dtype=self.config_.dtype, device=self.config_.device)
        assignment = HardAssignment(n_jobs=self.config_.n_jobs).compute_assignments(
            X, self.result_.centers, self.config_.metric
        )
        return assignment.get_hard()

    def score(self, X, y=None) -> float:
        """Opposite of the total distance of X to its nearest centers."""
        self._check_fitted()
        X = validate_data(X, dtype=self.config_.dtype, device=self.config_.device)
        assignment = HardAssignment(n_jobs=self.config_.n_jobs).compute_assignments(
            X, self.result_.centers, self.config_.metric
        )
        return -assignment.inertia

    def _check_fitted(self) -> None:
        if not self.fitted_:
            raise NotFittedError("Model must be fitted before use")

    @property
    def cluster_centers_(self) -> Tensor:
        """(K, d) final centers."""
        self._check_fitted()
        return self.result_.centers

    @property
    def labels_(self) -> Tensor:
        """(n,) labels of the training data."""
        self._check_fitted()
        return self.result_.labels

    @property
    def inertia_(self) -> float:
        """Total distance of training points to their centers."""
        self._check_fitted()
        return self.result_.inertia

    @property
    def n_iter_(self) -> int:
        self._check_fitted()
        return self.result_.n_iter

    @property
    def converged_(self) -> bool:
        self._check_fitted()
        return self.result_.converged

    @property
    def history_(self) -> List[AlgorithmState]:
        self._check_fitted()
        return list(self.result_.history)

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        """Get parameters (sklearn compatibility)."""
        return self._common_config()

    def set_params(self, **params) -> 'BaseClusteringAlgorithm':
        """Set parameters (sklearn compatibility)."""
        for key, value in params.items():
            setattr(self, key, value)
        return self
