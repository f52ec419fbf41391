import logging
import random
import time
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Set

from reco_engine.core.config import Settings, get_settings
from reco_engine.domain.models.product import (
    OrderLike,
    Product,
    ProductLike,
    RecommendationRecord,
    as_order,
    as_product,
)
from reco_engine.domain.services.featurizer import product_to_vector
from reco_engine.domain.services.kmeans_svc import k_means
from reco_engine.domain.services.ranker_svc import rank_for_order
from reco_engine.domain.services.scoring import SimilarityScorer, get_scorer
from reco_engine.domain.services.trending_svc import make_rng, mark_trending

logger = logging.getLogger(__name__)


def recommend_products(
    products: Iterable[ProductLike],
    orders: Iterable[OrderLike],
    *,
    settings: Optional[Settings] = None,
    trending: Optional[bool] = None,
    scorer: Optional[SimilarityScorer] = None,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> List[RecommendationRecord]:
    """
    Rank catalogue products against historical orders.

    High-level flow:
      1) Validate inputs into Product / Order models (bad orders raise InvalidOrderError).
      2) Trending mode only: flag products as trending (random, recency boosted).
      3) Cluster product vectors with k-means and tag each product copy with its cluster.
      4) For each order, in order: score products not recommended yet, sort
         (trending first in trending mode), take top_n, remember their ids.
      5) Return all records; no product id appears twice.

    Notes:
      - Inputs are never mutated; records carry annotated copies of the products.
      - Fewer than top_n * len(orders) records come back once the catalogue runs out.
      - `trending`, `scorer`, `rng` and `now` override settings for this call.
    """
    settings = settings or get_settings()
    trending = settings.trending_enabled if trending is None else trending
    now = now or datetime.now(timezone.utc)
    scorer = scorer or get_scorer(settings.scorer, now=now)
    t0 = time.perf_counter()

    # ---- 1) Inputs ----------------------------------------------------------
    catalogue: List[Product] = [as_product(p) for p in products]
    order_models = [as_order(o) for o in orders]
    logger.info(
        f"Starting recommend pipeline: products={len(catalogue)}, orders={len(order_models)}, "
        f"trending={trending}, scorer={scorer.name}"
    )

    # ---- 2) Trending flags --------------------------------------------------
    if trending:
        catalogue = mark_trending(catalogue, rng=rng or make_rng(settings), now=now, settings=settings)

    # ---- 3) Clustering --------------------------------------------------------
    result = k_means(
        [product_to_vector(p) for p in catalogue],
        k=settings.k,
        max_iterations=settings.max_iterations,
    )
    clustered = [
        p.model_copy(update={"cluster": cluster})
        for p, cluster in zip(catalogue, result.assignments)
    ]

    # ---- 4) Per-order ranking ---------------------------------------------------
    seen: Set[str] = set()
    recommendations: List[RecommendationRecord] = []
    for i, order in enumerate(order_models):
        if len(seen) >= len(clustered):
            logger.info(f"Product pool exhausted after {i} of {len(order_models)} orders")
            break
        recommendations.extend(
            rank_for_order(
                order,
                clustered,
                seen,
                scorer=scorer,
                top_n=settings.top_n,
                prioritize_trending=trending,
            )
        )

    logger.info(
        "recommend done records=%s iterations=%s converged=%s time=%.3fs",
        len(recommendations), result.iterations, result.converged, time.perf_counter() - t0,
    )
    return recommendations


def top_products(
    records: Iterable[RecommendationRecord],
    limit: Optional[int] = None,
    *,
    settings: Optional[Settings] = None,
) -> List[Product]:
    """Products of the first `limit` records (default settings.featured_limit), as a section renders them."""
    if limit is None:
        limit = (settings or get_settings()).featured_limit
    return [r.product for r in records][:limit]
