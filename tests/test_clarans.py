# tests/test_clarans.py
"""
CLARANS randomized medoid search.
"""

from __future__ import annotations

import threading

import pytest
import torch

from data_gen import make_blobs
from partitional.algorithms import Clarans
from partitional.algorithms.clarans import nearest_two, swap_cost_delta
from partitional.base.exceptions import ClusteringCancelled, ConfigurationError
from partitional.distances import SquaredEuclideanDistance
from partitional.utils.metrics import adjusted_rand_score


def test_nearest_two_with_single_medoid():
    D = torch.tensor([[3.0], [1.0]], dtype=torch.float64)
    nearest, first, second = nearest_two(D)
    assert nearest.tolist() == [0, 0]
    assert first.tolist() == [3.0, 1.0]
    assert torch.isinf(second).all()


def test_swap_delta_matches_brute_force():
    g = torch.Generator().manual_seed(0)
    X = torch.randn(60, 2, generator=g, dtype=torch.float64)
    metric = SquaredEuclideanDistance()
    medoids = torch.tensor([3, 17, 42])
    distances = metric.pairwise(X, X[medoids])
    before = distances.min(dim=1).values.sum().item()

    for slot in range(3):
        for candidate in (0, 10, 59):
            cand_d = metric.pairwise(X, X[candidate:candidate + 1]).squeeze(1)
            swapped = medoids.clone()
            swapped[slot] = candidate
            after = metric.pairwise(X, X[swapped]).min(dim=1).values.sum().item()
            assert swap_cost_delta(distances, slot, cand_d) == pytest.approx(after - before)


def test_clarans_finds_separated_blobs():
    X, y, _ = make_blobs(n_per=60, seed=1)
    model = Clarans(n_clusters=3, num_local=3, max_neighbor=60, random_state=0)
    model.fit(X)

    assert adjusted_rand_score(y, model.labels_) == pytest.approx(1.0)
    assert model.converged_ is True
    assert model.n_iter_ == 3
    assert len(set(model.medoid_indices_.tolist())) == 3

    points = torch.as_tensor(X, dtype=torch.float64)
    assert torch.equal(model.cluster_centers_, points[model.medoid_indices_])


def test_clarans_is_deterministic_for_a_seed():
    X, _, _ = make_blobs(n_per=30, seed=2)
    a = Clarans(n_clusters=3, random_state=5).fit(X)
    b = Clarans(n_clusters=3, random_state=5).fit(X)
    assert torch.equal(a.medoid_indices_, b.medoid_indices_)


def test_clarans_with_every_point_a_medoid():
    X = [[0.0, 0.0], [1.0, 1.0], [2.0, 0.0], [5.0, 5.0]]
    model = Clarans(n_clusters=4, random_state=0).fit(X)
    assert model.inertia_ == 0.0
    assert sorted(model.medoid_indices_.tolist()) == [0, 1, 2, 3]


def test_clarans_cancelled_before_any_search():
    event = threading.Event()
    event.set()
    X, _, _ = make_blobs(n_per=20, seed=3)
    with pytest.raises(ClusteringCancelled) as info:
        Clarans(n_clusters=3, cancel_event=event).fit(X)
    assert info.value.last_result is None


@pytest.mark.parametrize("params", [{"num_local": 0}, {"max_neighbor": 0},
                                    {"num_local": 1.5}])
def test_clarans_parameter_validation(params):
    X, _, _ = make_blobs(n_per=10, seed=4)
    with pytest.raises(ConfigurationError):
        Clarans(n_clusters=2, **params).fit(X)
