"""Review fee settlement.

Fee debits are sent to the ledger from the ReviewFeeCharged event, which is
only dispatched once the submission's unit of work has committed. A
submission that fails partway never reaches the ledger.
"""

import structlog
from protean.utils.mixins import handle

from review_registry.collaborators import get_fee_ledger
from review_registry.domain import registry
from review_registry.review.events import ReviewFeeCharged
from review_registry.review.review import Review

logger = structlog.get_logger(__name__)


@registry.event_handler(part_of=Review)
class ReviewFeeSettlement:
    @handle(ReviewFeeCharged)
    def debit_review_fee(self, event: ReviewFeeCharged) -> None:
        get_fee_ledger().debit(event.amount, event.payer, event.authority)
        logger.info(
            "Review fee debited",
            review_id=event.review_id,
            amount=event.amount,
            payer=event.payer,
            authority=event.authority,
        )
