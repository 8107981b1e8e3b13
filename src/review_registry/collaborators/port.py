"""Collaborator ports (abstract interfaces) used by the Review Registry.

The registry asks two yes/no questions of the outside world and emits one
side-effecting instruction. Adapters implementing these contracts can be
swapped without touching any domain or application code.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class FeeDebit:
    """A fee-transfer instruction handed to the ledger."""

    amount: int
    sender: str
    recipient: str


class PurchaseTokenOracle(ABC):
    """Answers whether a purchase token may be redeemed by a principal."""

    @abstractmethod
    def verify(self, token_id: int, principal: str) -> bool:
        """Return False for unknown, invalidated, or wrongly-owned tokens."""
        ...


class BusinessDirectory(ABC):
    """Answers whether a business is registered."""

    @abstractmethod
    def is_registered(self, business_id: int) -> bool: ...


class FeeLedger(ABC):
    """Receives fee-transfer instructions. Outcomes are not reported back."""

    @abstractmethod
    def debit(self, amount: int, sender: str, recipient: str) -> None: ...
