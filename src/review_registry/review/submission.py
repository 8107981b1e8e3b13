"""SubmitReview — redeem a purchase token for a new review.

Checks run in a fixed order and the first failure is reported:

    1. business review cap          MaxReviewsExceeded
    2. rating bounds                InvalidRating
    3. comment length               InvalidCommentLength
    4. token valid and owned        InvalidPurchaseToken
    5. business registered          BusinessNotRegistered
    6. token not yet redeemed       PurchaseTokenAlreadyUsed
    7. first review of the pair     ReviewAlreadyExists
    8. authority configured         NotAuthorized

A rejected submission changes nothing. An accepted one assigns the next
review id and records the review, its redemption, its reviewer index entry,
and the new business rating together. The review fee is charged as a
ReviewFeeCharged event; the ledger debit follows the commit (see fees.py).
"""

import structlog
from protean.fields import Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from review_registry.business.business_rating import BusinessRating, load_business_rating
from review_registry.collaborators import get_business_directory, get_token_oracle
from review_registry.domain import registry
from review_registry.results import RegistryError, RegistryResult
from review_registry.review.redemption import (
    PurchaseRedemption,
    ReviewerBusinessIndex,
    reviewer_has_reviewed,
    token_redeemed,
)
from review_registry.review.review import Review, comment_fits, rating_in_bounds
from review_registry.settings.config import RegistryConfig, load_config

logger = structlog.get_logger(__name__)


@registry.command(part_of="Review")
class SubmitReview:
    caller = String(required=True, max_length=255)
    block_height = Integer(default=0)
    purchase_token_id = Integer(required=True)
    business_id = Integer(required=True)
    rating = Integer(required=True)
    comment = Text()


def _rejection(command, config, business_rating):
    """Return the first failed check for a submission, or None."""
    if business_rating.review_count >= config.max_reviews_per_business:
        return RegistryError.MAX_REVIEWS_EXCEEDED
    if not rating_in_bounds(command.rating):
        return RegistryError.INVALID_RATING
    if not comment_fits(command.comment):
        return RegistryError.INVALID_COMMENT_LENGTH
    if not get_token_oracle().verify(command.purchase_token_id, command.caller):
        return RegistryError.INVALID_PURCHASE_TOKEN
    if not get_business_directory().is_registered(command.business_id):
        return RegistryError.BUSINESS_NOT_REGISTERED
    if token_redeemed(command.purchase_token_id):
        return RegistryError.PURCHASE_TOKEN_ALREADY_USED
    if reviewer_has_reviewed(command.caller, command.business_id):
        return RegistryError.REVIEW_ALREADY_EXISTS
    if not config.has_authority:
        return RegistryError.NOT_AUTHORIZED
    return None


@registry.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        config = load_config()
        business_rating = load_business_rating(command.business_id)

        error = _rejection(command, config, business_rating)
        if error is not None:
            logger.info(
                "Review submission rejected",
                error=error.value,
                caller=command.caller,
                purchase_token_id=command.purchase_token_id,
                business_id=command.business_id,
            )
            return RegistryResult.failure(error)

        height = command.block_height or 0
        fee = config.review_fee

        review_id = config.next_review_id()
        review = Review.submit(
            review_id=review_id,
            purchase_token_id=command.purchase_token_id,
            business_id=command.business_id,
            reviewer=command.caller,
            rating=command.rating,
            comment=command.comment,
            height=height,
        )
        review.record_fee(fee, config.authority, height)
        business_rating.add_rating(command.rating)

        current_domain.repository_for(RegistryConfig).add(config)
        current_domain.repository_for(Review).add(review)
        current_domain.repository_for(PurchaseRedemption).add(
            PurchaseRedemption(purchase_token_id=command.purchase_token_id, review_id=review_id)
        )
        current_domain.repository_for(ReviewerBusinessIndex).add(
            ReviewerBusinessIndex.for_review(command.caller, command.business_id, review_id)
        )
        current_domain.repository_for(BusinessRating).add(business_rating)

        logger.info(
            "Review submitted",
            review_id=review_id,
            reviewer=command.caller,
            business_id=command.business_id,
            rating=command.rating,
            fee=fee,
        )
        return RegistryResult.success(review_id)
