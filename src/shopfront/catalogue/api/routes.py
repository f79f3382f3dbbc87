"""FastAPI endpoints for the product catalog."""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from shopfront.api.auth import Principal, require_admin
from shopfront.catalogue.api.schemas import (
    CategoryIdResponse,
    CreateCategoryRequest,
    CreateProductRequest,
    ProductIdResponse,
    StatusResponse,
    UpdateCategoryRequest,
    UpdateProductRequest,
)
from shopfront.catalogue.category.category import Category
from shopfront.catalogue.category.management import CreateCategory, DeleteCategory, UpdateCategory
from shopfront.catalogue.product.creation import AddProduct
from shopfront.catalogue.product.details import RemoveProduct, UpdateProduct
from shopfront.catalogue.product.product import Product

product_router = APIRouter(prefix="/products", tags=["products"])
category_router = APIRouter(prefix="/categories", tags=["categories"])

PRODUCTS_PER_CATEGORY_CARD = 4


def _json_or_none(value):
    return json.dumps(value) if value is not None else None


@product_router.get("")
async def list_products(category_id: str | None = None, status: str | None = None, q: str | None = None) -> list[dict]:
    products = current_domain.repository_for(Product).search(category_id=category_id, status=status, q=q)
    return [product.to_dict() for product in products]


@product_router.get("/{product_id}")
async def get_product(product_id: str) -> dict:
    return current_domain.repository_for(Product).find(product_id).to_dict()


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(
    body: CreateProductRequest, principal: Principal = Depends(require_admin)
) -> ProductIdResponse:
    command = AddProduct(
        name=body.name,
        price=body.price,
        discount=body.discount,
        stock=body.stock,
        description=body.description,
        category_id=body.category_id,
        images=_json_or_none(body.images),
        tags=_json_or_none(body.tags),
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.put("/{product_id}", response_model=StatusResponse)
async def update_product(
    product_id: str, body: UpdateProductRequest, principal: Principal = Depends(require_admin)
) -> StatusResponse:
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        description=body.description,
        category_id=body.category_id,
        price=body.price,
        discount=body.discount,
        stock=body.stock,
        status=body.status,
        images=_json_or_none(body.images),
        tags=_json_or_none(body.tags),
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str, principal: Principal = Depends(require_admin)) -> StatusResponse:
    current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)
    return StatusResponse(status="deleted")


def _product_card(product: Product) -> dict:
    images = product.image_list
    return {
        "id": str(product.id),
        "name": product.name,
        "price": product.final_price,
        "mrp": product.price,
        "discount": product.discount,
        "thumbnail": images[0] if images else None,
        "avg_rating": product.avg_rating,
        "rating_count": product.rating_count,
    }


@category_router.get("")
async def list_categories() -> list[dict]:
    """Every category, each with a few of its products for storefront cards."""
    products = current_domain.repository_for(Product)
    listing = []
    for category in current_domain.repository_for(Category).everything():
        filed = products.search(category_id=category.id)[:PRODUCTS_PER_CATEGORY_CARD]
        listing.append({**category.to_dict(), "products": [_product_card(p) for p in filed]})
    return listing


@category_router.get("/{category_id}")
async def get_category(category_id: str) -> dict:
    return current_domain.repository_for(Category).find(category_id).to_dict()


@category_router.get("/{category_id}/products")
async def list_category_products(category_id: str) -> dict:
    category = current_domain.repository_for(Category).find(category_id)
    products = current_domain.repository_for(Product).search(category_id=category.id)
    return {"category": category.to_dict(), "products": [product.to_dict() for product in products]}


@category_router.post("", status_code=201, response_model=CategoryIdResponse)
async def create_category(
    body: CreateCategoryRequest, principal: Principal = Depends(require_admin)
) -> CategoryIdResponse:
    command = CreateCategory(
        name=body.name,
        slug=body.slug,
        description=body.description,
        image_url=body.image_url,
    )
    result = current_domain.process(command, asynchronous=False)
    return CategoryIdResponse(category_id=result)


@category_router.put("/{category_id}", response_model=StatusResponse)
async def update_category(
    category_id: str, body: UpdateCategoryRequest, principal: Principal = Depends(require_admin)
) -> StatusResponse:
    command = UpdateCategory(
        category_id=category_id,
        name=body.name,
        slug=body.slug,
        description=body.description,
        image_url=body.image_url,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@category_router.delete("/{category_id}", response_model=StatusResponse)
async def delete_category(category_id: str, principal: Principal = Depends(require_admin)) -> StatusResponse:
    current_domain.process(DeleteCategory(category_id=category_id), asynchronous=False)
    return StatusResponse(status="deleted")
