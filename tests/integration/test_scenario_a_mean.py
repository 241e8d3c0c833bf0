"""
Two three-point blobs under the mean rule: the run converges well before
max_iter and each blob ends up in one cluster.
"""

import pytest

from utils import time_block, same_partition
from partitional import ClusteringConfig, KMeans, run_clustering

POINTS = [[0.0, 0.0], [0.0, 1.0], [1.0, 0.0],
          [10.0, 10.0], [10.0, 11.0], [11.0, 10.0]]


@pytest.mark.parametrize("seed", range(10))
def test_mean_rule_separates_the_blobs(seed):
    config = ClusteringConfig(n_clusters=2, update_rule="mean", tol=1e-5, max_iter=15,
                              random_state=seed)
    with time_block("scenario_a", {"seed": seed}):
        result = run_clustering(POINTS, config)

    assert result.converged is True
    assert result.n_iter < 15
    assert same_partition(result.labels, [[0, 1, 2], [3, 4, 5]])

    centers = sorted(tuple(round(v, 9) for v in row) for row in result.centers.tolist())
    assert centers == [(round(1.0 / 3.0, 9), round(1.0 / 3.0, 9)),
                       (round(31.0 / 3.0, 9), round(31.0 / 3.0, 9))]


def test_estimator_facade_agrees_with_engine():
    config = ClusteringConfig(n_clusters=2, tol=1e-5, max_iter=15, random_state=0)
    result = run_clustering(POINTS, config)

    km = KMeans(n_clusters=2, tol=1e-5, max_iter=15, random_state=0).fit(POINTS)
    assert km.labels_.tolist() == result.labels.tolist()
    assert km.inertia_ == pytest.approx(result.inertia)
