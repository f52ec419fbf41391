"""
Numeric featurization of storefront documents.

Product vector: [price, stock_quantity, in_stock (1/0), review average]
Order vector:   [total, item count, shipping, tax]

The two vectors live on different axes but are compared positionally by the
euclidean scorer; "distance" is a heuristic match, not a same-space metric.
"""
from typing import List

from reco_engine.domain.models.product import OrderLike, ProductLike, as_order, as_product


def product_to_vector(product: ProductLike) -> List[float]:
    p = as_product(product)
    return [
        float(p.price),
        float(p.stock_quantity),
        1.0 if p.in_stock else 0.0,
        float(p.review_average),
    ]


def order_to_vector(order: OrderLike) -> List[float]:
    """Raises InvalidOrderError when `items` is missing rather than counting zero items."""
    o = as_order(order)
    return [
        float(o.total),
        float(o.item_count),
        float(o.shipping),
        float(o.tax),
    ]
