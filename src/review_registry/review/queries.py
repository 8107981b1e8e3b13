"""Read-only lookups over the registry. None of these mutate state."""

from dataclasses import dataclass

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from review_registry.business.business_rating import load_business_rating
from review_registry.review.redemption import token_redeemed
from review_registry.review.review import Review, ReviewUpdate
from review_registry.settings.config import load_config


@dataclass(frozen=True)
class BusinessRatingSummary:
    business_id: int
    review_count: int
    average_rating: int


@dataclass(frozen=True)
class RegistrySettings:
    authority: str | None
    review_fee: int
    max_reviews_per_business: int
    review_count: int


def get_review(review_id) -> Review | None:
    try:
        return current_domain.repository_for(Review).get(review_id)
    except ObjectNotFoundError:
        return None


def get_review_update(review_id) -> ReviewUpdate | None:
    try:
        return current_domain.repository_for(ReviewUpdate).get(review_id)
    except ObjectNotFoundError:
        return None


def get_review_count() -> int:
    """Number of reviews ever created, which is also the next id to assign."""
    return load_config().review_counter


def check_review_existence(purchase_token_id) -> bool:
    """Whether the purchase token has been redeemed. Does not reveal the review."""
    return token_redeemed(purchase_token_id)


def get_business_rating(business_id) -> BusinessRatingSummary:
    rating = load_business_rating(business_id)
    return BusinessRatingSummary(
        business_id=business_id,
        review_count=rating.review_count,
        average_rating=rating.average_rating,
    )


def get_registry_settings() -> RegistrySettings:
    config = load_config()
    return RegistrySettings(
        authority=config.authority or None,
        review_fee=config.review_fee,
        max_reviews_per_business=config.max_reviews_per_business,
        review_count=config.review_counter,
    )
