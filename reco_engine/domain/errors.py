class RecommendationError(Exception):
    """Base error for the recommendation engine."""


class InvalidOrderError(RecommendationError, ValueError):
    """An order record cannot be featurized (e.g. it has no `items`)."""


class InvalidProductError(RecommendationError, ValueError):
    """A product record is missing a field the engine reads, or holds a bad value."""
