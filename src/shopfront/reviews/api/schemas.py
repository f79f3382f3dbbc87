"""Pydantic request/response schemas for the Reviews API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SubmitReviewRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "5b1e0c4a-3a52-4f6f-8c39-2f2f0c0b7d10",
                    "rating": 4,
                    "comment": "Keeps water cold all day.",
                }
            ]
        }
    }

    product_id: str
    rating: int = Field(..., ge=1, le=5)
    comment: str | None = None


class EditReviewRequest(BaseModel):
    rating: int | None = Field(None, ge=1, le=5)
    comment: str | None = None


class ModerateReviewRequest(BaseModel):
    approved: bool = True


class ReviewIdResponse(BaseModel):
    review_id: str


class StatusResponse(BaseModel):
    status: str = "ok"
