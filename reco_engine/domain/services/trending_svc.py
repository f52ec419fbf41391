import logging
import random
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from reco_engine.core.config import Settings, get_settings
from reco_engine.domain.models.product import Product, ProductLike, as_product
from reco_engine.domain.services.scoring import age_in_days

logger = logging.getLogger(__name__)


def make_rng(settings: Settings) -> random.Random:
    """Per-call generator; seeded from settings.random_seed when set (None = system entropy)."""
    return random.Random(settings.random_seed)


def trending_probability(product: Product, *, settings: Settings, now: Optional[datetime] = None) -> float:
    boost = settings.trending_recency_boost if age_in_days(product, now) < settings.recency_window_days else 0.0
    return min(settings.trending_base_probability + boost, 1.0)


def mark_trending(
    products: Iterable[ProductLike],
    *,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
    settings: Optional[Settings] = None,
) -> List[Product]:
    """
    Return copies of `products` with `is_trending` drawn at random:
    P(trending) = base probability, plus the recency boost for products younger
    than the recency window. The result is random by nature; pass a seeded `rng`
    to make it reproducible.
    """
    settings = settings or get_settings()
    rng = rng or make_rng(settings)
    now = now or datetime.now(timezone.utc)

    out: List[Product] = []
    for raw in products:
        p = as_product(raw)
        prob = trending_probability(p, settings=settings, now=now)
        out.append(p.model_copy(update={"is_trending": rng.random() < prob}))

    logger.info("trending marked=%s total=%s", sum(1 for p in out if p.is_trending), len(out))
    return out
