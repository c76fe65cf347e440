"""
Product API — Product Route Handlers
======================================

What:  POST /products, GET/PUT/DELETE /products/{product_id}.
Why:   The HTTP surface of the product resource.
How:   Handlers take the validated body and the raw path id, delegate to
       ProductService, and return the response model. Failures propagate as
       ProductAPIError subclasses to the handlers registered in main.py.

The path id is declared as a string on purpose: it is an opaque lookup key
handed to storage unchanged, so a key that matches nothing is a 404 rather
than a framework validation error.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from product_api.database import get_db_session
from product_api.schemas.product import (
    ErrorResponse,
    MessageResponse,
    ProductIn,
    ProductOut,
)
from product_api.services.product_service import product_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["Products"])

ProductID = Annotated[str, Path(description="Product ID", examples=["1"])]

_BAD_REQUEST = {400: {"description": "Bad request", "model": ErrorResponse}}
_NOT_FOUND = {404: {"description": "Product not found", "model": ErrorResponse}}
_SERVER_ERROR = {500: {"description": "Internal server error", "model": ErrorResponse}}


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ProductOut,
    responses={
        201: {"description": "Product created successfully", "model": ProductOut},
        **_BAD_REQUEST,
        **_SERVER_ERROR,
    },
    summary="Create a new product",
)
async def create_product(
    body: ProductIn,
    db: AsyncSession = Depends(get_db_session),
) -> ProductOut:
    return await product_service.create_product(db, body)


@router.get(
    "/{product_id}",
    response_model=ProductOut,
    responses={
        200: {"description": "Success", "model": ProductOut},
        **_NOT_FOUND,
        **_SERVER_ERROR,
    },
    summary="Get a product by ID",
)
async def get_product(
    product_id: ProductID,
    db: AsyncSession = Depends(get_db_session),
) -> ProductOut:
    return await product_service.get_product(db, product_id)


@router.put(
    "/{product_id}",
    response_model=ProductOut,
    responses={
        200: {"description": "Product updated successfully", "model": ProductOut},
        **_BAD_REQUEST,
        **_NOT_FOUND,
        **_SERVER_ERROR,
    },
    summary="Update a product by ID",
    description="Replaces both name and price; there is no partial update.",
)
async def update_product(
    body: ProductIn,
    product_id: ProductID,
    db: AsyncSession = Depends(get_db_session),
) -> ProductOut:
    return await product_service.update_product(db, product_id, body)


@router.delete(
    "/{product_id}",
    response_model=MessageResponse,
    responses={
        200: {"description": "Product deleted successfully", "model": MessageResponse},
        **_NOT_FOUND,
        **_SERVER_ERROR,
    },
    summary="Delete a product by ID",
)
async def delete_product(
    product_id: ProductID,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await product_service.delete_product(db, product_id)
