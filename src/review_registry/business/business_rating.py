"""BusinessRating aggregate — running review count and average per business.

Maintained incrementally on every submission and every update; never
rebuilt by scanning reviews. The running sum of current ratings is kept
next to the count so the floored average stays exact:

    average_rating == rating_sum // review_count
"""

from protean import atomic_change, invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Integer
from protean.utils.globals import current_domain

from review_registry.domain import registry


@registry.aggregate
class BusinessRating:
    business_id = Integer(identifier=True, required=True)
    review_count = Integer(default=0, min_value=0)
    rating_sum = Integer(default=0, min_value=0)
    average_rating = Integer(default=0, min_value=0)

    @invariant.post
    def average_matches_sum(self):
        expected = self.rating_sum // self.review_count if self.review_count else 0
        if self.average_rating != expected:
            raise ValidationError({"average_rating": ["Average rating is out of step with the rating sum"]})

    def add_rating(self, rating):
        with atomic_change(self):
            self.review_count = self.review_count + 1
            self.rating_sum = self.rating_sum + rating
            self.average_rating = self.rating_sum // self.review_count

    def replace_rating(self, old_rating, new_rating):
        """Swap one current rating for another at constant count."""
        if not self.review_count:
            raise ValidationError({"review_count": ["Business has no ratings to replace"]})

        with atomic_change(self):
            self.rating_sum = self.rating_sum - old_rating + new_rating
            self.average_rating = self.rating_sum // self.review_count


def load_business_rating(business_id) -> BusinessRating:
    """Fetch the summary for a business, or a zeroed one if it has no reviews yet."""
    try:
        return current_domain.repository_for(BusinessRating).get(business_id)
    except ObjectNotFoundError:
        return BusinessRating(business_id=business_id, review_count=0, rating_sum=0, average_rating=0)
