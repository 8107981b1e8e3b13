"""Collaborator adapter factory.

Provides get_*/set_* accessors so adapters can be swapped:
- in-memory fakes for development and testing (default)
- real oracles and ledgers in deployments, installed with set_*()
"""

from review_registry.collaborators.fake_adapter import (
    InMemoryBusinessDirectory,
    InMemoryTokenOracle,
    RecordingFeeLedger,
)
from review_registry.collaborators.port import BusinessDirectory, FeeLedger, PurchaseTokenOracle

_token_oracle: PurchaseTokenOracle | None = None
_business_directory: BusinessDirectory | None = None
_fee_ledger: FeeLedger | None = None


def get_token_oracle() -> PurchaseTokenOracle:
    """Return the current purchase-token oracle. Defaults to InMemoryTokenOracle."""
    global _token_oracle
    if _token_oracle is None:
        _token_oracle = InMemoryTokenOracle()
    return _token_oracle


def set_token_oracle(oracle: PurchaseTokenOracle) -> None:
    global _token_oracle
    _token_oracle = oracle


def get_business_directory() -> BusinessDirectory:
    """Return the current business directory. Defaults to InMemoryBusinessDirectory."""
    global _business_directory
    if _business_directory is None:
        _business_directory = InMemoryBusinessDirectory()
    return _business_directory


def set_business_directory(directory: BusinessDirectory) -> None:
    global _business_directory
    _business_directory = directory


def get_fee_ledger() -> FeeLedger:
    """Return the current fee ledger. Defaults to RecordingFeeLedger."""
    global _fee_ledger
    if _fee_ledger is None:
        _fee_ledger = RecordingFeeLedger()
    return _fee_ledger


def set_fee_ledger(ledger: FeeLedger) -> None:
    global _fee_ledger
    _fee_ledger = ledger


def reset_collaborators() -> None:
    """Drop all installed adapters; the next get_*() call builds fresh defaults."""
    global _token_oracle, _business_directory, _fee_ledger
    _token_oracle = None
    _business_directory = None
    _fee_ledger = None
