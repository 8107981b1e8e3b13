"""In-memory collaborator adapters for development and testing.

Tokens and businesses are registered at runtime, and every debit
instruction is recorded so tests can assert on the exact transfers
the registry asked for.
"""

from review_registry.collaborators.port import (
    BusinessDirectory,
    FeeDebit,
    FeeLedger,
    PurchaseTokenOracle,
)


class InMemoryTokenOracle(PurchaseTokenOracle):
    """Purchase tokens held in a dictionary: token_id -> (owner, valid)."""

    def __init__(self) -> None:
        self.tokens: dict[int, tuple[str, bool]] = {}

    def issue(self, token_id: int, owner: str, valid: bool = True) -> None:
        self.tokens[token_id] = (owner, valid)

    def invalidate(self, token_id: int) -> None:
        owner, _ = self.tokens[token_id]
        self.tokens[token_id] = (owner, False)

    def verify(self, token_id: int, principal: str) -> bool:
        token = self.tokens.get(token_id)
        if token is None:
            return False
        owner, valid = token
        return valid and owner == principal


class InMemoryBusinessDirectory(BusinessDirectory):
    def __init__(self) -> None:
        self.businesses: set[int] = set()

    def register(self, business_id: int) -> None:
        self.businesses.add(business_id)

    def is_registered(self, business_id: int) -> bool:
        return business_id in self.businesses


class RecordingFeeLedger(FeeLedger):
    """Keeps every debit instruction in order of arrival."""

    def __init__(self) -> None:
        self.debits: list[FeeDebit] = []

    def debit(self, amount: int, sender: str, recipient: str) -> None:
        self.debits.append(FeeDebit(amount=amount, sender=sender, recipient=recipient))
