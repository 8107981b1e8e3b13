"""Domain events for the RegistryConfig aggregate."""

from protean.fields import Identifier, Integer, String

from review_registry.domain import registry


@registry.event(part_of="RegistryConfig")
class AuthorityContractSet:
    """The registry authority was bootstrapped."""

    __version__ = 1

    config_id = Identifier(required=True)
    authority = String(required=True)
    set_by = String(required=True)


@registry.event(part_of="RegistryConfig")
class ReviewFeeChanged:
    """The fee charged per submitted review changed."""

    __version__ = 1

    config_id = Identifier(required=True)
    previous_fee = Integer(required=True)
    new_fee = Integer(required=True)
    changed_by = String(required=True)
