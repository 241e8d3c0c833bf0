import numpy as np
import pytest
import torch

from partitional.utils.metrics import inertia, contingency_matrix, adjusted_rand_score


def test_contingency_matrix():
    C = contingency_matrix(torch.tensor([0, 0, 1, 1, 2]), torch.tensor([1, 1, 0, 1, 0]))
    assert C.tolist() == [[0, 2], [1, 1], [1, 0]]


def test_ari_is_permutation_invariant():
    y = np.array([0, 0, 0, 1, 1, 1, 2, 2])
    relabeled = np.array([2, 2, 2, 0, 0, 0, 1, 1])
    assert adjusted_rand_score(y, relabeled) == pytest.approx(1.0)


def test_ari_known_value():
    assert adjusted_rand_score([0, 0, 1, 1], [0, 0, 1, 2]) == pytest.approx(4.0 / 7.0)


def test_ari_length_mismatch():
    with pytest.raises(ValueError):
        adjusted_rand_score([0, 1], [0, 1, 1])


def test_inertia_uses_metric():
    X = torch.tensor([[0.0, 0.0], [2.0, 0.0], [10.0, 10.0]], dtype=torch.float64)
    centers = torch.tensor([[1.0, 0.0], [10.0, 12.0]], dtype=torch.float64)
    labels = torch.tensor([0, 0, 1])

    assert inertia(X, labels, centers) == pytest.approx(1.0 + 1.0 + 4.0)
    assert inertia(X, labels, centers, metric="manhattan") == pytest.approx(1.0 + 1.0 + 2.0)
