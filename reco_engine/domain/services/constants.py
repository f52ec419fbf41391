# Defaults for the clustering / ranking pipeline (mirrored by core.config.Settings).
DEFAULT_K = 3  # Number of product clusters
DEFAULT_MAX_ITERATIONS = 100  # K-means reassignment rounds cap
DEFAULT_TOP_N = 3  # Records taken per order

# Trending draw: P(trending) = base + boost when the product is recent
RECENCY_WINDOW_DAYS = 30
TRENDING_BASE_PROBABILITY = 0.2
TRENDING_RECENCY_BOOST = 0.3

# Weighted scorer blend (price match, recency, stock, reviews)
WEIGHT_PRICE = 0.25
WEIGHT_RECENCY = 0.25
WEIGHT_STOCK = 0.25
WEIGHT_REVIEWS = 0.25
STOCK_SCALE = 100  # stock units mapped to 1.0
MAX_REVIEW = 5

SECONDS_PER_DAY = 60 * 60 * 24

# Scorer names
SCORER_EUCLIDEAN = "euclidean"  # Positional distance product vs order vector (lower = better)
SCORER_WEIGHTED = "weighted"  # Price/recency/stock/review blend (higher = better)
