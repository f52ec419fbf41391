from __future__ import annotations
from typing import List, Sequence
import logging

import numpy as np

from reco_engine.domain.models.cluster import KMeansResult
from reco_engine.domain.services.constants import DEFAULT_K, DEFAULT_MAX_ITERATIONS
from reco_engine.domain.services.scoring import euclidean

logger = logging.getLogger(__name__)


def _pad(vectors: Sequence[Sequence[float]]) -> List[List[float]]:
    width = max((len(v) for v in vectors), default=0)
    return [list(map(float, v)) + [0.0] * (width - len(v)) for v in vectors]


def _nearest(vec: List[float], centroids: List[List[float]]) -> int:
    # strict "<" keeps the lowest index on ties
    best_index, best_dist = 0, float("inf")
    for i, c in enumerate(centroids):
        dist = euclidean(vec, c)
        if dist < best_dist:
            best_index, best_dist = i, dist
    return best_index


def _mean(members: List[List[float]]) -> List[float]:
    if not members:
        return []
    return np.mean(np.asarray(members, dtype=float), axis=0).tolist()


def k_means(
    vectors: Sequence[Sequence[float]],
    k: int = DEFAULT_K,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> KMeansResult:
    """
    Deterministic k-means.

    - Seeds: the first `k` vectors, in input order (no random sampling).
    - Each round assigns every vector to its nearest centroid, then replaces each
      of the `k` centroids with the mean of its members. A cluster with no members
      gets an empty centroid, which euclidean() treats as the origin.
    - Stops when the centroids no longer change, or after `max_iterations` rounds.
    - Assignments come from one more pass against the final centroids.

    With fewer than `k` vectors there are fewer seeds than clusters; this is logged,
    not raised. Features are used as-is (no scaling).
    """
    if k < 1:
        raise ValueError(f"k must be >= 1, got {k}")
    if max_iterations < 1:
        raise ValueError(f"max_iterations must be >= 1, got {max_iterations}")

    data = _pad(vectors)
    if not data:
        return KMeansResult(centroids=[], assignments=[], iterations=0, converged=True)
    if len(data) < k:
        logger.warning(f"k-means: {len(data)} vectors for k={k}; some clusters will stay empty")

    centroids = [list(v) for v in data[:k]]
    iterations = 0
    converged = False

    for _ in range(max_iterations):
        iterations += 1
        clusters: List[List[List[float]]] = [[] for _ in range(k)]
        for vec in data:
            clusters[_nearest(vec, centroids)].append(vec)

        new_centroids = [_mean(members) for members in clusters]
        if new_centroids == centroids:
            converged = True
            break
        centroids = new_centroids

    assignments = [_nearest(vec, centroids) for vec in data]
    logger.debug(f"k-means done: n={len(data)} k={k} iterations={iterations} converged={converged}")

    return KMeansResult(
        centroids=centroids,
        assignments=assignments,
        iterations=iterations,
        converged=converged,
    )
