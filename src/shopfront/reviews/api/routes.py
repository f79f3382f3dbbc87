"""FastAPI routes for the Reviews context."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from shopfront.api.auth import Principal, current_principal, require_admin
from shopfront.reviews.api.schemas import (
    EditReviewRequest,
    ModerateReviewRequest,
    ReviewIdResponse,
    StatusResponse,
    SubmitReviewRequest,
)
from shopfront.reviews.review.editing import EditReview, RemoveReview
from shopfront.reviews.review.moderation import ModerateReview
from shopfront.reviews.review.rating import approved_reviews_of
from shopfront.reviews.review.review import Review
from shopfront.reviews.review.submission import SubmitReview

review_router = APIRouter(prefix="/reviews", tags=["reviews"])


@review_router.post("", status_code=201, response_model=ReviewIdResponse)
async def submit_review(body: SubmitReviewRequest, principal: Principal = Depends(current_principal)) -> ReviewIdResponse:
    command = SubmitReview(
        product_id=body.product_id,
        user_id=principal.user_id,
        rating=body.rating,
        comment=body.comment,
    )
    result = current_domain.process(command, asynchronous=False)
    return ReviewIdResponse(review_id=result)


@review_router.get("/product/{product_id}")
async def product_reviews(product_id: str) -> list[dict]:
    return [review.to_dict() for review in approved_reviews_of(product_id)]


@review_router.get("")
async def all_reviews(principal: Principal = Depends(require_admin)) -> list[dict]:
    reviews = current_domain.repository_for(Review)._dao.query.order_by("-created_at").all().items
    return [review.to_dict() for review in reviews]


@review_router.put("/{review_id}", response_model=StatusResponse)
async def edit_review(
    review_id: str, body: EditReviewRequest, principal: Principal = Depends(current_principal)
) -> StatusResponse:
    command = EditReview(review_id=review_id, user_id=principal.user_id, rating=body.rating, comment=body.comment)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@review_router.delete("/{review_id}", response_model=StatusResponse)
async def delete_review(review_id: str, principal: Principal = Depends(current_principal)) -> StatusResponse:
    command = RemoveReview(review_id=review_id, user_id=principal.user_id, is_admin=principal.is_admin)
    current_domain.process(command, asynchronous=False)
    return StatusResponse(status="deleted")


@review_router.put("/{review_id}/approve", response_model=StatusResponse)
async def moderate_review(
    review_id: str, body: ModerateReviewRequest, principal: Principal = Depends(require_admin)
) -> StatusResponse:
    current_domain.process(ModerateReview(review_id=review_id, approved=body.approved), asynchronous=False)
    return StatusResponse(status="approved" if body.approved else "hidden")
