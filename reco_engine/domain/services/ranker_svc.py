import logging
from typing import List, Sequence, Set

from reco_engine.domain.models.product import Order, Product, RecommendationRecord
from reco_engine.domain.services.scoring import SimilarityScorer

logger = logging.getLogger(__name__)


def _sort_key(scorer: SimilarityScorer, prioritize_trending: bool):
    sign = -1.0 if scorer.higher_is_better else 1.0

    def key(rec: RecommendationRecord):
        if prioritize_trending:
            # trending first regardless of score, then best score
            return (not rec.is_trending, sign * rec.score)
        return sign * rec.score

    return key


def rank_for_order(
    order: Order,
    candidates: Sequence[Product],
    seen: Set[str],
    *,
    scorer: SimilarityScorer,
    top_n: int,
    prioritize_trending: bool = False,
) -> List[RecommendationRecord]:
    """
    Score every candidate not yet in `seen` against `order`, sort, and take `top_n`.
    Ids of the taken products are added to `seen` (the caller owns the set for the
    whole run). Sorting is stable, so equal keys keep catalogue order.
    """
    scored = [
        RecommendationRecord(
            product=p,
            score=scorer.score(p, order),
            cluster=p.cluster,
            is_trending=p.is_trending,
        )
        for p in candidates
        if p.id not in seen
    ]
    scored.sort(key=_sort_key(scorer, prioritize_trending))

    taken: List[RecommendationRecord] = []
    for rec in scored:
        if len(taken) >= top_n:
            break
        # duplicate ids in the catalogue must not both make the cut
        if rec.product.id in seen:
            continue
        seen.add(rec.product.id)
        taken.append(rec)

    logger.debug(
        "rank_for_order eligible=%s taken=%s ids=%s",
        len(scored), len(taken), [r.product.id for r in taken],
    )
    return taken
