"""UpdateReview — the original reviewer replaces rating and comment.

Checks, in order: review exists (ReviewNotFound), caller is the original
reviewer (NotAuthorized), review is active (InvalidStatus), rating bounds
(InvalidRating), comment length (InvalidCommentLength).

The purchase token and business are not re-verified. The business rating
keeps its count; only the sum and average move.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.fields import Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from review_registry.business.business_rating import BusinessRating, load_business_rating
from review_registry.domain import registry
from review_registry.results import RegistryError, RegistryResult
from review_registry.review.review import Review, ReviewUpdate, comment_fits, rating_in_bounds

logger = structlog.get_logger(__name__)


@registry.command(part_of="Review")
class UpdateReview:
    caller = String(required=True, max_length=255)
    block_height = Integer(default=0)
    review_id = Integer(required=True)
    rating = Integer(required=True)
    comment = Text()


def _rejection(command, review):
    if review is None:
        return RegistryError.REVIEW_NOT_FOUND
    if review.reviewer != command.caller:
        return RegistryError.NOT_AUTHORIZED
    if not review.is_active:
        return RegistryError.INVALID_STATUS
    if not rating_in_bounds(command.rating):
        return RegistryError.INVALID_RATING
    if not comment_fits(command.comment):
        return RegistryError.INVALID_COMMENT_LENGTH
    return None


@registry.command_handler(part_of=Review)
class UpdateReviewHandler:
    @handle(UpdateReview)
    def update_review(self, command):
        repo = current_domain.repository_for(Review)
        try:
            review = repo.get(command.review_id)
        except ObjectNotFoundError:
            review = None

        error = _rejection(command, review)
        if error is not None:
            logger.info(
                "Review update rejected",
                error=error.value,
                caller=command.caller,
                review_id=command.review_id,
            )
            return RegistryResult.failure(error, value=False)

        height = command.block_height or 0
        previous_rating = review.revise(command.rating, command.comment, height, command.caller)

        business_rating = load_business_rating(review.business_id)
        business_rating.replace_rating(previous_rating, command.rating)

        update_repo = current_domain.repository_for(ReviewUpdate)
        try:
            update = update_repo.get(command.review_id)
            update.overwrite(command.rating, command.comment, height, command.caller)
        except ObjectNotFoundError:
            update = ReviewUpdate(
                review_id=command.review_id,
                updated_rating=command.rating,
                updated_comment=command.comment or "",
                updated_at=height,
                updater=command.caller,
            )

        repo.add(review)
        current_domain.repository_for(BusinessRating).add(business_rating)
        update_repo.add(update)

        logger.info(
            "Review updated",
            review_id=command.review_id,
            business_id=review.business_id,
            previous_rating=previous_rating,
            rating=command.rating,
        )
        return RegistryResult.success(True)
