"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Steel Water Bottle",
                    "price": 499.0,
                    "discount": 10,
                    "stock": 25,
                    "category_id": "5b0f6f2a-6a3c-4a55-9a5e-0c8f7f0d9f21",
                    "images": ["https://cdn.example.com/bottle.jpg"],
                    "tags": ["steel", "eco"],
                }
            ]
        }
    }

    name: str = Field(..., max_length=255)
    price: float = Field(..., ge=0)
    discount: float = Field(0.0, ge=0, le=100)
    stock: int = Field(0, ge=0)
    description: str | None = None
    category_id: str | None = None
    images: list[str] | None = None
    tags: list[str] | None = None


class UpdateProductRequest(BaseModel):
    name: str | None = Field(None, max_length=255)
    description: str | None = None
    category_id: str | None = None
    price: float | None = Field(None, ge=0)
    discount: float | None = Field(None, ge=0, le=100)
    stock: int | None = Field(None, ge=0)
    status: str | None = Field(None, max_length=20)
    images: list[str] | None = None
    tags: list[str] | None = None


class CreateCategoryRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    slug: str | None = Field(None, max_length=120)
    description: str | None = None
    image_url: str | None = Field(None, max_length=500)


class UpdateCategoryRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    slug: str | None = Field(None, max_length=120)
    description: str | None = None
    image_url: str | None = Field(None, max_length=500)


class CategoryIdResponse(BaseModel):
    category_id: str


class ProductIdResponse(BaseModel):
    product_id: str


class StatusResponse(BaseModel):
    status: str = "ok"
