import logging

import pytest

from reco_engine.domain.services.kmeans_svc import k_means

TWO_GROUPS = [[0, 0], [0, 1], [10, 10], [10, 11]]


def test_two_separated_groups_converge():
    result = k_means(TWO_GROUPS, k=2)
    assert result.assignments == [0, 0, 1, 1]
    assert result.centroids == [[0.0, 0.5], [10.0, 10.5]]
    assert result.converged is True
    assert result.iterations == 3


def test_iteration_cap_is_respected():
    result = k_means(TWO_GROUPS, k=2, max_iterations=1)
    assert result.iterations == 1
    assert result.converged is False
    assert len(result.assignments) == len(TWO_GROUPS)


def test_assignments_aligned_and_in_range():
    vectors = [[i * 3.0 % 17, i % 5, i % 2, (i * 7) % 5] for i in range(40)]
    result = k_means(vectors, k=3, max_iterations=100)
    assert len(result.assignments) == len(vectors)
    assert all(0 <= a < 3 for a in result.assignments)
    assert result.iterations <= 100


def test_deterministic_for_same_input():
    vectors = [[5, 1, 1, 4], [500, 3, 0, 2], [7, 9, 1, 5], [480, 1, 1, 0], [1000, 0, 0, 1]]
    assert k_means(vectors, k=3) == k_means(vectors, k=3)


def test_fewer_vectors_than_k(caplog):
    with caplog.at_level(logging.WARNING, logger="reco_engine"):
        result = k_means([[1, 2, 3, 4], [100, 0, 0, 0]], k=3)
    assert len(result.centroids) <= 3
    assert set(result.assignments) <= {0, 1}
    assert result.assignments == [0, 1]
    assert "some clusters will stay empty" in caplog.text


def test_ties_go_to_lowest_cluster_and_empty_cluster_has_empty_centroid():
    result = k_means([[1], [1]], k=2)
    assert result.assignments == [0, 0]
    assert result.centroids == [[1.0], []]


def test_ragged_vectors_are_zero_padded():
    result = k_means([[1, 2], [1, 2, 0, 0]], k=1)
    assert result.centroids == [[1.0, 2.0, 0.0, 0.0]]
    assert result.assignments == [0, 0]


def test_empty_input():
    result = k_means([], k=3)
    assert result.centroids == []
    assert result.assignments == []


@pytest.mark.parametrize("k, max_iterations", [(0, 10), (3, 0)])
def test_invalid_arguments(k, max_iterations):
    with pytest.raises(ValueError):
        k_means([[1, 2]], k=k, max_iterations=max_iterations)
