"""SetAuthorityContract / SetReviewFee — registry configuration commands.

The authority is bootstrapped exactly once by the bootstrap principal.
The review fee can be changed once an authority exists; whether any
caller or only the authority may change it depends on
REGISTRY_RESTRICT_FEE_TO_AUTHORITY.

Both handlers answer with a RegistryResult carrying a boolean value.
Refusals, including an empty authority principal, leave the configuration
untouched.
"""

import structlog
from protean.fields import Integer, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from review_registry.domain import registry
from review_registry.results import RegistryError, RegistryResult
from review_registry.settings.config import RegistryConfig, load_config

logger = structlog.get_logger(__name__)


@registry.command(part_of="RegistryConfig")
class SetAuthorityContract:
    caller = String(required=True, max_length=255)
    principal = String(max_length=255)


@registry.command(part_of="RegistryConfig")
class SetReviewFee:
    caller = String(required=True, max_length=255)
    amount = Integer(required=True)


@registry.command_handler(part_of=RegistryConfig)
class RegistryConfigHandler:
    @handle(SetAuthorityContract)
    def set_authority_contract(self, command):
        config = load_config()

        if not command.principal or not config.can_set_authority(command.caller):
            logger.warning(
                "Authority bootstrap refused",
                caller=command.caller,
                principal=command.principal,
                authority_already_set=config.has_authority,
            )
            return RegistryResult.failure(RegistryError.NOT_AUTHORIZED, value=False)

        config.assign_authority(command.caller, command.principal)
        current_domain.repository_for(RegistryConfig).add(config)

        logger.info("Registry authority set", authority=command.principal)
        return RegistryResult.success(True)

    @handle(SetReviewFee)
    def set_review_fee(self, command):
        config = load_config()

        if not config.can_set_fee(command.caller):
            logger.warning("Review fee change refused", caller=command.caller, amount=command.amount)
            return RegistryResult.failure(RegistryError.NOT_AUTHORIZED, value=False)

        config.change_fee(command.caller, command.amount)
        current_domain.repository_for(RegistryConfig).add(config)

        logger.info("Review fee changed", fee=command.amount, changed_by=command.caller)
        return RegistryResult.success(True)
