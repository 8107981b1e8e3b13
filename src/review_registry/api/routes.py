"""FastAPI routes for the Review Registry.

Each route translates between Pydantic schemas (external contract) and the
ReviewRegistry service. Rejected operations become HTTP errors whose detail
carries the registry error kind and its numeric wire code.
"""

from fastapi import APIRouter, HTTPException

from review_registry.api.schemas import (
    BusinessRatingResponse,
    ResultResponse,
    ReviewCountResponse,
    ReviewExistenceResponse,
    ReviewResponse,
    SetAuthorityRequest,
    SetReviewFeeRequest,
    SubmitReviewRequest,
    UpdateReviewRequest,
)
from review_registry.results import RegistryError, RegistryResult
from review_registry.service import get_registry_service

registry_router = APIRouter(prefix="/registry", tags=["registry"])

_STATUS_CODES = {
    RegistryError.NOT_AUTHORIZED: 403,
    RegistryError.REVIEW_NOT_FOUND: 404,
    RegistryError.PURCHASE_TOKEN_ALREADY_USED: 409,
    RegistryError.REVIEW_ALREADY_EXISTS: 409,
    RegistryError.MAX_REVIEWS_EXCEEDED: 409,
    RegistryError.INVALID_STATUS: 409,
}


def _respond(result: RegistryResult) -> ResultResponse:
    if not result.ok:
        raise HTTPException(
            status_code=_STATUS_CODES.get(result.error, 422),
            detail=result.to_dict(),
        )
    return ResultResponse(**result.to_dict())


@registry_router.put("/authority", response_model=ResultResponse)
async def set_authority_contract(body: SetAuthorityRequest) -> ResultResponse:
    """Bootstrap the registry authority (once)."""
    return _respond(get_registry_service().set_authority_contract(body.caller, body.principal))


@registry_router.put("/fee", response_model=ResultResponse)
async def set_review_fee(body: SetReviewFeeRequest) -> ResultResponse:
    """Change the fee charged per submitted review."""
    return _respond(get_registry_service().set_review_fee(body.caller, body.amount))


@registry_router.post("/reviews", status_code=201, response_model=ResultResponse)
async def submit_review(body: SubmitReviewRequest) -> ResultResponse:
    """Redeem a purchase token for a new review."""
    result = get_registry_service().submit_review(
        caller=body.caller,
        purchase_token_id=body.purchase_token_id,
        business_id=body.business_id,
        rating=body.rating,
        comment=body.comment,
        block_height=body.block_height,
    )
    return _respond(result)


@registry_router.get("/reviews/count", response_model=ReviewCountResponse)
async def get_review_count() -> ReviewCountResponse:
    return ReviewCountResponse(count=get_registry_service().get_review_count())


@registry_router.get("/reviews/{review_id}", response_model=ReviewResponse)
async def get_review(review_id: int) -> ReviewResponse:
    review = get_registry_service().get_review(review_id)
    if review is None:
        raise HTTPException(status_code=404, detail=RegistryResult.failure(RegistryError.REVIEW_NOT_FOUND).to_dict())

    return ReviewResponse(
        review_id=review.review_id,
        purchase_token_id=review.purchase_token_id,
        business_id=review.business_id,
        reviewer=review.reviewer,
        rating=review.rating.score,
        comment=review.comment or "",
        timestamp=review.timestamp,
        content_hash=review.content_hash,
        status=review.status,
    )


@registry_router.put("/reviews/{review_id}", response_model=ResultResponse)
async def update_review(review_id: int, body: UpdateReviewRequest) -> ResultResponse:
    """Replace the rating and comment of one's own review."""
    result = get_registry_service().update_review(
        caller=body.caller,
        review_id=review_id,
        rating=body.rating,
        comment=body.comment,
        block_height=body.block_height,
    )
    return _respond(result)


@registry_router.get("/redemptions/{purchase_token_id}", response_model=ReviewExistenceResponse)
async def check_review_existence(purchase_token_id: int) -> ReviewExistenceResponse:
    exists = get_registry_service().check_review_existence(purchase_token_id)
    return ReviewExistenceResponse(purchase_token_id=purchase_token_id, exists=exists)


@registry_router.get("/businesses/{business_id}/rating", response_model=BusinessRatingResponse)
async def get_business_rating(business_id: int) -> BusinessRatingResponse:
    summary = get_registry_service().get_business_rating(business_id)
    return BusinessRatingResponse(
        business_id=summary.business_id,
        review_count=summary.review_count,
        average_rating=summary.average_rating,
    )
