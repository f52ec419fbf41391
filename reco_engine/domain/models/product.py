from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from typing import Any, List, Mapping, Optional, Union
from datetime import datetime, timezone

from reco_engine.domain.errors import InvalidOrderError, InvalidProductError

# Storefront documents use camelCase keys; both spellings are accepted.
_DOC_CONFIG = ConfigDict(frozen=True, extra="allow", populate_by_name=True)


class Timestamp(BaseModel):
    """Firestore-style timestamp wrapper: {seconds, nanoseconds}."""
    seconds: float = 0
    nanoseconds: int = 0
    model_config = {"frozen": True}


class Reviews(BaseModel):
    average: Optional[float] = Field(None, ge=0, le=5)
    model_config = ConfigDict(frozen=True, extra="allow")


class Product(BaseModel):
    id: str
    price: float = Field(ge=0)
    stock_quantity: int = Field(0, ge=0, alias="stockQuantity")
    in_stock: bool = Field(False, alias="inStock")
    reviews: Optional[Reviews] = None
    created_at: Optional[Timestamp] = Field(None, alias="createdAt")

    # Set by the engine on the copies it returns
    cluster: Optional[int] = None
    is_trending: Optional[bool] = Field(None, alias="isTrending")

    model_config = _DOC_CONFIG  # immuable = safe

    @field_validator("created_at", mode="before")
    @classmethod
    def _coerce_timestamp(cls, v):
        """
        Accept the shapes storefront documents carry:
          - {seconds, nanoseconds} wrapper or Timestamp
          - datetime (server-side SDKs), naive read as UTC
          - ISO-8601 string
          - epoch milliseconds (as JS Date stores them)
        Anything else becomes None, i.e. "created now".
        """
        if v is None or isinstance(v, Timestamp):
            return v
        if isinstance(v, str):
            try:
                v = datetime.fromisoformat(v.strip().replace("Z", "+00:00"))
            except ValueError:
                return None
        if isinstance(v, datetime):
            if v.tzinfo is None:
                v = v.replace(tzinfo=timezone.utc)
            return {"seconds": v.timestamp()}
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return {"seconds": v / 1000}
        if isinstance(v, Mapping) and isinstance(v.get("seconds"), (int, float)) \
                and not isinstance(v.get("seconds"), bool):
            return v
        return None

    @property
    def review_average(self) -> float:
        if self.reviews is None or self.reviews.average is None:
            return 0.0
        return self.reviews.average


class Order(BaseModel):
    total: float = Field(ge=0)
    items: List[Any]
    shipping: float = Field(0, ge=0)
    tax: float = Field(0, ge=0)

    model_config = _DOC_CONFIG

    @property
    def item_count(self) -> int:
        return len(self.items)


class RecommendationRecord(BaseModel):
    product: Product
    score: float = Field(ge=0)
    cluster: Optional[int] = None
    is_trending: Optional[bool] = None
    model_config = {"frozen": True} # immuable = safe


ProductLike = Union[Product, Mapping[str, Any]]
OrderLike = Union[Order, Mapping[str, Any]]


def as_product(raw: ProductLike) -> Product:
    if isinstance(raw, Product):
        return raw
    try:
        return Product.model_validate(raw)
    except ValidationError as e:
        pid = raw.get("id") if isinstance(raw, Mapping) else None
        raise InvalidProductError(f"Invalid product id={pid}: {e}") from e


def as_order(raw: OrderLike) -> Order:
    if isinstance(raw, Order):
        return raw
    try:
        return Order.model_validate(raw)
    except ValidationError as e:
        raise InvalidOrderError(f"Invalid order: {e}") from e
