"""Pydantic request/response schemas for the Review Registry API.

These are separate from Protean commands (anti-corruption pattern).
The API layer is the external contract; commands are internal domain concepts.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class SetAuthorityRequest(BaseModel):
    caller: str
    principal: str


class SetReviewFeeRequest(BaseModel):
    caller: str
    amount: int = Field(ge=0)


class SubmitReviewRequest(BaseModel):
    caller: str
    block_height: int = Field(default=0, ge=0)
    purchase_token_id: int
    business_id: int
    # Rating and comment bounds are enforced by the registry so that rejections
    # carry the registry's own error kinds.
    rating: int
    comment: str = ""


class UpdateReviewRequest(BaseModel):
    caller: str
    block_height: int = Field(default=0, ge=0)
    rating: int
    comment: str = ""


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ResultResponse(BaseModel):
    ok: bool
    value: int | bool | None = None
    error: str | None = None
    code: int | None = None


class ReviewResponse(BaseModel):
    review_id: int
    purchase_token_id: int
    business_id: int
    reviewer: str
    rating: int
    comment: str
    timestamp: int
    content_hash: str
    status: str


class ReviewCountResponse(BaseModel):
    count: int


class ReviewExistenceResponse(BaseModel):
    purchase_token_id: int
    exists: bool


class BusinessRatingResponse(BaseModel):
    business_id: int
    review_count: int
    average_rating: int
