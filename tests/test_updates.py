# tests/test_updates.py
"""
Center update rules: mean, coordinate-wise median, medoid and online mean.
"""

from __future__ import annotations

import pytest
import torch

from partitional.base.data_structures import AssignmentMatrix
from partitional.distances import SquaredEuclideanDistance, ManhattanDistance
from partitional.updates import (
    MeanUpdater,
    MedianUpdater,
    MedoidUpdater,
    OnlineMeanUpdater,
    coordinate_median,
    candidate_costs,
)
from partitional.utils.device import get_chunk_size


def _t(rows):
    return torch.tensor(rows, dtype=torch.float64)


def test_mean_update_and_empty_cluster_retention():
    X = _t([[0.0, 0.0], [2.0, 0.0], [10.0, 10.0], [12.0, 14.0]])
    centers = _t([[1.0, 1.0], [9.0, 9.0], [50.0, 50.0]])
    A = AssignmentMatrix(torch.tensor([0, 0, 1, 1]), n_clusters=3)

    result = MeanUpdater().update(X, A, centers)

    assert torch.allclose(result.centers[0], _t([1.0, 0.0]))
    assert torch.allclose(result.centers[1], _t([11.0, 12.0]))
    assert torch.equal(result.centers[2], centers[2])
    assert result.updated.tolist() == [True, True, False]
    assert result.empty_clusters == [2]
    # Previous centers untouched
    assert torch.equal(centers[0], _t([1.0, 1.0]))


def test_coordinate_median_odd_and_even():
    assert coordinate_median(_t([[1.0, 5.0], [3.0, 1.0], [2.0, 9.0]])).tolist() == [2.0, 5.0]
    # Even count: average of the two middle values per dimension
    even = _t([[1.0, 0.0], [2.0, 10.0], [4.0, 2.0], [10.0, 4.0]])
    assert coordinate_median(even).tolist() == [3.0, 3.0]
    assert coordinate_median(_t([[7.0, -1.0]])).tolist() == [7.0, -1.0]


def test_median_update_is_robust_to_outliers():
    X = _t([[0.0], [1.0], [2.0], [1000.0], [50.0]])
    A = AssignmentMatrix(torch.tensor([0, 0, 0, 0, 1]), n_clusters=3)
    result = MedianUpdater().update(X, A, _t([[0.0], [0.0], [-3.0]]))

    assert result.centers[:, 0].tolist() == [1.5, 50.0, -3.0]
    assert result.empty_clusters == [2]


def test_candidate_costs_blocks_agree():
    g = torch.Generator().manual_seed(0)
    X = torch.randn(30, 2, generator=g, dtype=torch.float64)
    members = torch.arange(0, 30, 2)
    metric = ManhattanDistance()
    full = candidate_costs(X, members, metric, block_size=1024)
    blocked = candidate_costs(X, members, metric, block_size=4)
    assert torch.allclose(full, blocked)
    assert torch.allclose(full, candidate_costs(X, members, metric))

    brute = torch.tensor([metric.pairwise(X[members], X[m:m + 1]).sum().item()
                          for m in members.tolist()],
                         dtype=torch.float64)
    assert torch.allclose(full, brute)



def test_default_candidate_blocks_fit_the_memory_target():
    # Each candidate materialises an (m, d) difference block
    n_members, dimension = 5000, 10
    block = get_chunk_size(n_members, dimension, n_members)
    assert 1 <= block < n_members
    assert block * n_members * dimension * 8 <= 64 * 1024 * 1024

def test_medoid_update_picks_cheapest_member():
    X = _t([[0.0], [1.0], [2.0], [10.0]])
    A = AssignmentMatrix(torch.tensor([0, 0, 0, 0]), n_clusters=1)
    # Costs: 13, 11, 11, 27; the first of the tied cheapest wins
    result = MedoidUpdater().update(X, A, X[[3]], ManhattanDistance(),
                                    medoid_indices=torch.tensor([3]))
    assert result.medoid_indices.tolist() == [1]
    assert torch.equal(result.centers, X[[1]])


def test_medoid_update_keeps_incumbent_on_tie():
    X = _t([[0.0], [1.0], [2.0], [10.0]])
    A = AssignmentMatrix(torch.tensor([0, 0, 0, 0]), n_clusters=1)
    result = MedoidUpdater().update(X, A, X[[2]], ManhattanDistance(),
                                    medoid_indices=torch.tensor([2]))
    assert result.medoid_indices.tolist() == [2]


def test_medoid_update_with_empty_cluster_and_missing_indices():
    X = _t([[0.0], [1.0], [2.0], [10.0]])
    A = AssignmentMatrix(torch.tensor([0, 0, 0, 0]), n_clusters=2)
    result = MedoidUpdater().update(X, A, X[[0, 3]], ManhattanDistance(),
                                    medoid_indices=torch.tensor([0, 3]))
    assert result.medoid_indices.tolist() == [1, 3]
    assert result.empty_clusters == [1]

    with pytest.raises(ValueError):
        MedoidUpdater().update(X, A, X[[0, 3]], ManhattanDistance())


def test_online_mean_first_batch_is_mean_of_draws():
    g = torch.Generator().manual_seed(0)
    X = torch.randn(40, 2, generator=g, dtype=torch.float64)
    updater = OnlineMeanUpdater(batch_size=25)
    updater.reset(1)

    result = updater.update(X, None, _t([[100.0, 100.0]]), SquaredEuclideanDistance(),
                            generator=torch.Generator().manual_seed(5))

    # With a single center, eta = 1/count reproduces the running mean of the draws
    draws = torch.randint(40, (25,), generator=torch.Generator().manual_seed(5))
    assert torch.allclose(result.centers[0], X[draws].mean(dim=0))
    assert updater.counts == [25.0]


def test_online_mean_counts_persist_until_reset():
    X = _t([[0.0], [1.0], [10.0], [11.0]])
    updater = OnlineMeanUpdater(batch_size=10)
    assert updater.requires_assignment is False
    updater.reset(2)

    g = torch.Generator().manual_seed(0)
    centers = _t([[0.5], [10.5]])
    metric = SquaredEuclideanDistance()
    centers = updater.update(X, None, centers, metric, generator=g).centers
    centers = updater.update(X, None, centers, metric, generator=g).centers

    assert sum(updater.counts) == 20.0
    assert 0.0 <= centers[0, 0].item() <= 1.0
    assert 10.0 <= centers[1, 0].item() <= 11.0

    updater.reset(2)
    assert updater.counts == [0.0, 0.0]
