from __future__ import annotations
from datetime import datetime, timezone
from typing import Callable, Dict, Optional, Protocol, Sequence
import inspect
import logging

import numpy as np

from reco_engine.domain.models.product import Order, Product
from reco_engine.domain.services.constants import (
    MAX_REVIEW,
    SCORER_EUCLIDEAN,
    SCORER_WEIGHTED,
    SECONDS_PER_DAY,
    STOCK_SCALE,
    WEIGHT_PRICE,
    WEIGHT_RECENCY,
    WEIGHT_REVIEWS,
    WEIGHT_STOCK,
)
from reco_engine.domain.services.featurizer import order_to_vector, product_to_vector

logger = logging.getLogger(__name__)

# ---------- Distance ---------------------------------------------------------

def euclidean(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Euclidean distance; the shorter vector is zero-padded to the longer one's length,
    so euclidean([1, 2], [1, 2, 0, 0]) == 0 and an empty vector is the origin.
    """
    va = np.asarray(a, dtype=float)
    vb = np.asarray(b, dtype=float)
    n = max(va.size, vb.size)
    va = np.pad(va, (0, n - va.size))
    vb = np.pad(vb, (0, n - vb.size))
    return float(np.sqrt(np.sum((va - vb) ** 2)))


def age_in_days(product: Product, now: Optional[datetime] = None) -> float:
    """Days since created_at; products without a timestamp (or at epoch 0) count as brand new."""
    ts = product.created_at
    if ts is None or not ts.seconds:
        return 0.0
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    age =(now.timestamp() - ts.seconds) / SECONDS_PER_DAY
    return max(age, 0.0)

# ---------- Scorer strategies --------------------------------------------------

class SimilarityScorer(Protocol):
    """How well a product matches an order. The ranker sorts by `score`, honoring `higher_is_better`."""
    name: str
    higher_is_better: bool

    def score(self, product: Product, order: Order) -> float: ...


class EuclideanScorer:
    """
    Positional distance between the product vector and the order's aggregate vector.
    Lower is better. Features are not normalized, so price/total dominate.
    """
    name = SCORER_EUCLIDEAN
    higher_is_better = False

    def score(self, product: Product, order: Order) -> float:
        return euclidean(product_to_vector(product), order_to_vector(order))


class WeightedRecencyScorer:
    """
    Blend of price match against the order's average item spend, product freshness,
    stock depth (per STOCK_SCALE units) and review average. Higher is better.
    """
    name = SCORER_WEIGHTED
    higher_is_better = True

    def __init__(self, now: Optional[datetime] = None):
        self.now = now or datetime.now(timezone.utc)

    def score(self, product: Product, order: Order) -> float:
        avg_spend = order.total / (order.item_count or 1)
        price_match = 1 / (1 + abs(product.price - avg_spend))
        recency = 1 / (1 + age_in_days(product, self.now))
        stock = product.stock_quantity / STOCK_SCALE
        reviews = product.review_average / MAX_REVIEW
        return (
            WEIGHT_PRICE * price_match
            + WEIGHT_RECENCY * recency
            + WEIGHT_STOCK * stock
            + WEIGHT_REVIEWS * reviews
        )


# You can extend this registry with future scorers (e.g., a normalized same-space metric)
SCORERS: Dict[str, Callable[..., SimilarityScorer]] = {
    SCORER_EUCLIDEAN: EuclideanScorer,
    SCORER_WEIGHTED: WeightedRecencyScorer,
}


def get_scorer(name: str, *, now: Optional[datetime] = None) -> SimilarityScorer:
    try:
        factory = SCORERS[name]
    except KeyError:
        raise ValueError(f"Unknown scorer: {name!r} (known: {sorted(SCORERS)})") from None
    logger.debug(f"Using scorer={name}")
    if "now" in inspect.signature(factory).parameters:
        return factory(now=now)
    return factory()
