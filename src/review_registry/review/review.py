"""Review aggregate — the core record of the Review Registry.

A Review is created once per redeemed purchase token and never deleted.
Only its rating, comment, and timestamp change afterwards, and only through
an update by the original reviewer. Every update is mirrored into a
ReviewUpdate record holding the most recent change.

State Machine:
    ACTIVE → ACTIVE (update)
    INACTIVE (no in-registry transition leads here or out of here)
"""

import hashlib
import json
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Integer, String, Text, ValueObject

from review_registry.domain import registry
from review_registry.review.events import ReviewFeeCharged, ReviewSubmitted, ReviewUpdated

MIN_RATING = 1
MAX_RATING = 5
MAX_COMMENT_LENGTH = 500


class ReviewStatus(Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


def rating_in_bounds(rating) -> bool:
    return MIN_RATING <= rating <= MAX_RATING


def comment_fits(comment) -> bool:
    return len(comment or "") <= MAX_COMMENT_LENGTH


def content_hash(purchase_token_id, business_id, reviewer, rating, comment) -> str:
    """SHA-256 digest over the review's submitted content."""
    payload = json.dumps(
        {
            "purchase_token_id": purchase_token_id,
            "business_id": business_id,
            "reviewer": reviewer,
            "rating": rating,
            "comment": comment or "",
        },
        sort_keys=True,
    )
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@registry.value_object(part_of="Review")
class Rating:
    """A star rating from 1 to 5."""

    score = Integer(required=True)

    @invariant.post
    def score_must_be_in_range(self):
        if self.score is not None and not rating_in_bounds(self.score):
            raise ValidationError({"score": ["Rating must be between 1 and 5"]})


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@registry.aggregate
class Review:
    """A purchase-verified review of a business."""

    review_id = Integer(identifier=True, required=True)
    purchase_token_id = Integer(required=True)
    business_id = Integer(required=True)
    reviewer = String(required=True, max_length=255)

    rating = ValueObject(Rating, required=True)
    comment = Text(default="")
    content_hash = String(required=True, max_length=64)

    status = String(choices=ReviewStatus, default=ReviewStatus.ACTIVE.value)
    timestamp = Integer(required=True)  # Logical height of creation or last update

    @invariant.post
    def comment_within_limit(self):
        if not comment_fits(self.comment):
            raise ValidationError({"comment": [f"Comment cannot exceed {MAX_COMMENT_LENGTH} characters"]})

    @classmethod
    def submit(cls, review_id, purchase_token_id, business_id, reviewer, rating, comment, height):
        """Create an active review stamped with the current logical height."""
        digest = content_hash(purchase_token_id, business_id, reviewer, rating, comment)

        review = cls(
            review_id=review_id,
            purchase_token_id=purchase_token_id,
            business_id=business_id,
            reviewer=reviewer,
            rating=Rating(score=rating),
            comment=comment or "",
            content_hash=digest,
            status=ReviewStatus.ACTIVE.value,
            timestamp=height,
        )

        review.raise_(
            ReviewSubmitted(
                review_id=review_id,
                purchase_token_id=purchase_token_id,
                business_id=business_id,
                reviewer=reviewer,
                rating=rating,
                comment=comment or "",
                content_hash=digest,
                submitted_at=height,
            )
        )

        return review

    @property
    def is_active(self) -> bool:
        return ReviewStatus(self.status) == ReviewStatus.ACTIVE

    def record_fee(self, amount, authority, height):
        self.raise_(
            ReviewFeeCharged(
                review_id=self.review_id,
                amount=amount,
                payer=self.reviewer,
                authority=authority,
                charged_at=height,
            )
        )

    def revise(self, rating, comment, height, updater):
        """Replace rating and comment in place. Returns the previous rating."""
        if not self.is_active:
            raise ValidationError({"status": ["Only active reviews can be updated"]})

        previous = self.rating.score

        with atomic_change(self):
            self.rating = Rating(score=rating)
            self.comment = comment or ""
            self.timestamp = height

        self.raise_(
            ReviewUpdated(
                review_id=self.review_id,
                business_id=self.business_id,
                previous_rating=previous,
                rating=rating,
                comment=comment or "",
                updater=updater,
                updated_at=height,
            )
        )

        return previous


@registry.aggregate
class ReviewUpdate:
    """Most recent update made to a review. Overwritten on every update."""

    review_id = Integer(identifier=True, required=True)
    updated_rating = Integer(required=True)
    updated_comment = Text(default="")
    updated_at = Integer(required=True)
    updater = String(required=True, max_length=255)

    def overwrite(self, rating, comment, height, updater):
        with atomic_change(self):
            self.updated_rating = rating
            self.updated_comment = comment or ""
            self.updated_at = height
            self.updater = updater
