"""Permanent uniqueness records written alongside every new review.

PurchaseRedemption: one review per purchase token, ever.
ReviewerBusinessIndex: one review per reviewer per business, ever, even if
the review later stops being active.
"""

from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from review_registry.domain import registry


def reviewer_business_key(reviewer, business_id) -> str:
    """Stable composite key for a (reviewer, business) pair."""
    return f"{reviewer}::{business_id}"


@registry.aggregate
class PurchaseRedemption:
    purchase_token_id = Integer(identifier=True, required=True)
    review_id = Integer(required=True)


@registry.aggregate
class ReviewerBusinessIndex:
    entry_key = Identifier(identifier=True, required=True)  # "reviewer::business_id"
    reviewer = String(required=True, max_length=255)
    business_id = Integer(required=True)
    review_id = Integer(required=True)

    @classmethod
    def for_review(cls, reviewer, business_id, review_id):
        return cls(
            entry_key=reviewer_business_key(reviewer, business_id),
            reviewer=reviewer,
            business_id=business_id,
            review_id=review_id,
        )


def token_redeemed(purchase_token_id) -> bool:
    try:
        current_domain.repository_for(PurchaseRedemption).get(purchase_token_id)
        return True
    except ObjectNotFoundError:
        return False


def reviewer_has_reviewed(reviewer, business_id) -> bool:
    try:
        current_domain.repository_for(ReviewerBusinessIndex).get(reviewer_business_key(reviewer, business_id))
        return True
    except ObjectNotFoundError:
        return False
