"""Tagged outcomes for Review Registry operations.

Business-rule rejections are expected outcomes, not exceptional ones, so
every operation answers with a ``RegistryResult``: either a success payload
or one of the enumerated ``RegistryError`` kinds.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class RegistryError(Enum):
    NOT_AUTHORIZED = "NotAuthorized"
    INVALID_RATING = "InvalidRating"
    INVALID_COMMENT_LENGTH = "InvalidCommentLength"
    INVALID_PURCHASE_TOKEN = "InvalidPurchaseToken"
    BUSINESS_NOT_REGISTERED = "BusinessNotRegistered"
    PURCHASE_TOKEN_ALREADY_USED = "PurchaseTokenAlreadyUsed"
    REVIEW_ALREADY_EXISTS = "ReviewAlreadyExists"
    REVIEW_NOT_FOUND = "ReviewNotFound"
    MAX_REVIEWS_EXCEEDED = "MaxReviewsExceeded"
    INVALID_STATUS = "InvalidStatus"

    @property
    def code(self) -> int:
        """Numeric code used by deployed clients on the wire."""
        return ERROR_CODES[self]


ERROR_CODES = {
    RegistryError.NOT_AUTHORIZED: 100,
    RegistryError.INVALID_RATING: 101,
    RegistryError.INVALID_COMMENT_LENGTH: 102,
    RegistryError.INVALID_PURCHASE_TOKEN: 103,
    RegistryError.REVIEW_ALREADY_EXISTS: 105,
    RegistryError.REVIEW_NOT_FOUND: 106,
    RegistryError.BUSINESS_NOT_REGISTERED: 110,
    RegistryError.PURCHASE_TOKEN_ALREADY_USED: 111,
    RegistryError.MAX_REVIEWS_EXCEEDED: 114,
    RegistryError.INVALID_STATUS: 115,
}


@dataclass(frozen=True)
class RegistryResult:
    """Outcome of a registry operation."""

    ok: bool
    value: Any = None
    error: RegistryError | None = None

    @classmethod
    def success(cls, value: Any = True) -> "RegistryResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: RegistryError, value: Any = None) -> "RegistryResult":
        return cls(ok=False, value=value, error=error)

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "value": self.value,
            "error": self.error.value if self.error else None,
            "code": self.error.code if self.error else None,
        }
