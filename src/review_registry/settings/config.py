"""RegistryConfig aggregate — process-wide registry settings.

A single record holds the review counter, the per-business review cap, the
review fee, and the authority principal. The authority can be set exactly
once, and only by the bootstrap principal.

Defaults come from the environment:
    REGISTRY_BOOTSTRAP_PRINCIPAL        principal allowed to set the authority
    REGISTRY_DEFAULT_REVIEW_FEE         fee charged per submitted review
    REGISTRY_MAX_REVIEWS_PER_BUSINESS   review cap per business
    REGISTRY_RESTRICT_FEE_TO_AUTHORITY  "true" to let only the authority change the fee
"""

import os

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from review_registry.domain import registry
from review_registry.settings.events import AuthorityContractSet, ReviewFeeChanged

CONFIG_ID = "registry"

DEFAULT_BOOTSTRAP_PRINCIPAL = "ST1TEST"
DEFAULT_REVIEW_FEE = 10
DEFAULT_MAX_REVIEWS_PER_BUSINESS = 10000


def bootstrap_principal() -> str:
    return os.environ.get("REGISTRY_BOOTSTRAP_PRINCIPAL", DEFAULT_BOOTSTRAP_PRINCIPAL)


def fee_change_restricted_to_authority() -> bool:
    return os.environ.get("REGISTRY_RESTRICT_FEE_TO_AUTHORITY", "false").lower() in ("1", "true", "yes")


@registry.aggregate
class RegistryConfig:
    """Singleton settings record for the registry."""

    config_id = Identifier(identifier=True, required=True)
    review_counter = Integer(default=0, min_value=0)
    max_reviews_per_business = Integer(default=DEFAULT_MAX_REVIEWS_PER_BUSINESS, min_value=0)
    review_fee = Integer(default=DEFAULT_REVIEW_FEE)
    authority = String(max_length=255)

    @classmethod
    def create_default(cls):
        return cls(
            config_id=CONFIG_ID,
            review_counter=0,
            max_reviews_per_business=int(
                os.environ.get("REGISTRY_MAX_REVIEWS_PER_BUSINESS", DEFAULT_MAX_REVIEWS_PER_BUSINESS)
            ),
            review_fee=int(os.environ.get("REGISTRY_DEFAULT_REVIEW_FEE", DEFAULT_REVIEW_FEE)),
        )

    @property
    def has_authority(self) -> bool:
        return bool(self.authority)

    def can_set_authority(self, caller) -> bool:
        return caller == bootstrap_principal() and not self.has_authority

    def can_set_fee(self, caller) -> bool:
        if not self.has_authority:
            return False
        if fee_change_restricted_to_authority():
            return caller == self.authority
        return True

    def assign_authority(self, caller, principal):
        if not principal:
            raise ValidationError({"authority": ["Authority principal cannot be empty"]})
        if not self.can_set_authority(caller):
            raise ValidationError({"authority": ["Authority can only be set once, by the bootstrap principal"]})

        self.authority = principal
        self.raise_(AuthorityContractSet(config_id=CONFIG_ID, authority=principal, set_by=caller))

    def change_fee(self, caller, amount):
        if not self.can_set_fee(caller):
            raise ValidationError({"review_fee": ["Review fee cannot be changed by this caller"]})

        previous = self.review_fee
        self.review_fee = amount
        self.raise_(
            ReviewFeeChanged(
                config_id=CONFIG_ID,
                previous_fee=previous,
                new_fee=amount,
                changed_by=caller,
            )
        )

    def next_review_id(self) -> int:
        """Hand out the current counter value and advance it."""
        review_id = self.review_counter
        self.review_counter = review_id + 1
        return review_id


def load_config() -> RegistryConfig:
    """Fetch the settings record.

    Before anything has been persisted a fresh default record is returned;
    it is stored the first time a handler adds it back to the repository.
    """
    try:
        return current_domain.repository_for(RegistryConfig).get(CONFIG_ID)
    except ObjectNotFoundError:
        return RegistryConfig.create_default()
