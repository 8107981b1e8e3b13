"""Review Registry bounded context — purchase-verified customer reviews.

Keeps an append-mostly registry of reviews tied to single-use purchase
tokens. Enforces per-business review caps, one review per reviewer per
business, rating bounds, and a review fee payable to the registry
authority. Maintains the running rating summary for every business.
"""

import structlog
from protean.domain import Domain

registry = Domain(name="review_registry")

logger = structlog.get_logger(__name__)
