"""ReviewRegistry — caller-facing surface of the registry.

Every operation runs under one lock, so operations are totally ordered and
none observes another half-applied. Commands are processed synchronously;
each accepted command commits all of its effects in a single unit of work.

Callers identify themselves with a principal and supply the current logical
height; the registry never advances time on its own.
"""

import threading
from contextlib import contextmanager

from protean.utils.globals import current_domain

from review_registry.results import RegistryResult
from review_registry.review import queries
from review_registry.review.submission import SubmitReview
from review_registry.review.updating import UpdateReview
from review_registry.settings.authority import SetAuthorityContract, SetReviewFee
from review_registry.utils.logging import bound_context, get_logger

logger = get_logger(__name__)


class ReviewRegistry:
    def __init__(self) -> None:
        self._lock = threading.RLock()

    @contextmanager
    def _serialized(self, **context):
        with self._lock, bound_context(**context):
            yield

    def _process(self, command) -> RegistryResult:
        result = current_domain.process(command, asynchronous=False)
        logger.debug(
            "Registry command processed",
            command=command.__class__.__name__,
            ok=result.ok,
            error=result.error.value if result.error else None,
        )
        return result

    # -------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------
    def set_authority_contract(self, caller: str, principal: str) -> RegistryResult:
        with self._serialized(caller=caller, operation="set_authority_contract"):
            return self._process(SetAuthorityContract(caller=caller, principal=principal))

    def set_review_fee(self, caller: str, amount: int) -> RegistryResult:
        with self._serialized(caller=caller, operation="set_review_fee"):
            return self._process(SetReviewFee(caller=caller, amount=amount))

    # -------------------------------------------------------------------
    # Reviews
    # -------------------------------------------------------------------
    def submit_review(
        self,
        caller: str,
        purchase_token_id: int,
        business_id: int,
        rating: int,
        comment: str,
        block_height: int = 0,
    ) -> RegistryResult:
        with self._serialized(caller=caller, operation="submit_review"):
            return self._process(
                SubmitReview(
                    caller=caller,
                    block_height=block_height,
                    purchase_token_id=purchase_token_id,
                    business_id=business_id,
                    rating=rating,
                    comment=comment,
                )
            )

    def update_review(
        self,
        caller: str,
        review_id: int,
        rating: int,
        comment: str,
        block_height: int = 0,
    ) -> RegistryResult:
        with self._serialized(caller=caller, operation="update_review"):
            return self._process(
                UpdateReview(
                    caller=caller,
                    block_height=block_height,
                    review_id=review_id,
                    rating=rating,
                    comment=comment,
                )
            )

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def get_review(self, review_id: int):
        with self._lock:
            return queries.get_review(review_id)

    def get_review_update(self, review_id: int):
        with self._lock:
            return queries.get_review_update(review_id)

    def get_review_count(self) -> int:
        with self._lock:
            return queries.get_review_count()

    def check_review_existence(self, purchase_token_id: int) -> bool:
        with self._lock:
            return queries.check_review_existence(purchase_token_id)

    def get_business_rating(self, business_id: int) -> queries.BusinessRatingSummary:
        with self._lock:
            return queries.get_business_rating(business_id)

    def get_registry_settings(self) -> queries.RegistrySettings:
        with self._lock:
            return queries.get_registry_settings()


_registry_service: ReviewRegistry | None = None


def get_registry_service() -> ReviewRegistry:
    """Return the process-wide registry service."""
    global _registry_service
    if _registry_service is None:
        _registry_service = ReviewRegistry()
    return _registry_service
