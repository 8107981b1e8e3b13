"""Domain events for the Review aggregate.

Immutable facts describing accepted registry operations. Rejected
operations raise nothing.
"""

from protean.fields import Integer, String, Text

from review_registry.domain import registry


@registry.event(part_of="Review")
class ReviewSubmitted:
    """A reviewer redeemed a purchase token for a new review."""

    __version__ = 1

    review_id = Integer(required=True)
    purchase_token_id = Integer(required=True)
    business_id = Integer(required=True)
    reviewer = String(required=True)
    rating = Integer(required=True)
    comment = Text()
    content_hash = String(required=True, max_length=64)
    submitted_at = Integer(required=True)  # Logical height


@registry.event(part_of="Review")
class ReviewFeeCharged:
    """A review fee is owed by the reviewer to the registry authority."""

    __version__ = 1

    review_id = Integer(required=True)
    amount = Integer(required=True)
    payer = String(required=True)
    authority = String(required=True)
    charged_at = Integer(required=True)


@registry.event(part_of="Review")
class ReviewUpdated:
    """The original reviewer changed the rating and comment."""

    __version__ = 1

    review_id = Integer(required=True)
    business_id = Integer(required=True)
    previous_rating = Integer(required=True)
    rating = Integer(required=True)
    comment = Text()
    updater = String(required=True)
    updated_at = Integer(required=True)
