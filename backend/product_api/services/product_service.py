"""
Product API — Product Service (HTTP-to-Storage Mapping)
=========================================================

What:  Business logic for the four product operations.
Why:   Keeps storage calls and error classification out of the route
       handlers, so the mapping can be tested with a mocked session.
How:   Each method runs its storage calls, commits its own transaction, and
       converts failures through classify_storage_error().
Who:   Called by the handlers in routes/products.py.

Error Handling Strategy:
    - Missing row            → NotFoundError      (404 "Product not found")
    - Any storage exception  → StorageError       (500, fixed per operation)
    The original exception is logged with its type; the client only ever
    sees the fixed message.

Concurrency:
    Two requests updating the same id are not coordinated; whichever commits
    last wins. Deleting a row another request is about to save makes that
    save fail, which surfaces as "Unable to update product".
"""

import logging
from typing import Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from product_api.exceptions import NotFoundError, ProductAPIError, classify_storage_error
from product_api.models.product import Product
from product_api.schemas.product import MessageResponse, ProductIn, ProductOut

logger = logging.getLogger(__name__)

ProductKey = Union[int, str]


class ProductService:
    """
    Stateless service layer for product CRUD.

    Every method receives the request's AsyncSession. Path ids are handed to
    the backend exactly as received; a key that matches no row is a 404,
    whatever its shape.
    """

    async def create_product(self, db: AsyncSession, data: ProductIn) -> ProductOut:
        """
        Persist a new product and return it with its assigned id.

        Raises:
            StorageError("create"): insert or commit failed
        """
        try:
            product = Product(name=data.name, price=data.price)
            db.add(product)
            await db.commit()
        except Exception as e:
            raise self._failure("create", e) from e

        logger.info("Product %s created", product.id)
        return ProductOut.model_validate(product)

    async def get_product(self, db: AsyncSession, product_id: ProductKey) -> ProductOut:
        """
        Fetch one product by id.

        Raises:
            NotFoundError: no row for product_id
            StorageError("retrieve"): lookup failed
        """
        product = await self._find(db, product_id, operation="retrieve")
        return ProductOut.model_validate(product)

    async def update_product(
        self,
        db: AsyncSession,
        product_id: ProductKey,
        data: ProductIn,
    ) -> ProductOut:
        """
        Overwrite name and price of an existing product.

        This is a full replacement: both fields are always written.

        Raises:
            NotFoundError: no row for product_id
            StorageError("update"): lookup or save failed
        """
        product = await self._find(db, product_id, operation="update")

        try:
            product.name = data.name
            product.price = data.price
            await db.commit()
        except Exception as e:
            raise self._failure("update", e, product_id) from e

        logger.info("Product %s updated", product.id)
        return ProductOut.model_validate(product)

    async def delete_product(self, db: AsyncSession, product_id: ProductKey) -> MessageResponse:
        """
        Permanently remove a product.

        Raises:
            NotFoundError: no row for product_id
            StorageError("delete"): lookup or delete failed
        """
        product = await self._find(db, product_id, operation="delete")

        try:
            await db.delete(product)
            await db.commit()
        except Exception as e:
            raise self._failure("delete", e, product_id) from e

        logger.info("Product %s deleted", product_id)
        return MessageResponse(message="Product deleted successfully")

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _find(self, db: AsyncSession, product_id: ProductKey, operation: str) -> Product:
        """Primary-key lookup shared by read, update and delete."""
        try:
            product = await db.get(Product, product_id)
        except Exception as e:
            raise self._failure(operation, e, product_id) from e

        if product is None:
            raise NotFoundError(resource_id=str(product_id))
        return product

    def _failure(
        self, operation: str, exc: Exception, product_id: Optional[ProductKey] = None
    ) -> ProductAPIError:
        error = classify_storage_error(operation, exc)
        if product_id is not None:
            error.context.setdefault("product_id", str(product_id))
        logger.error(
            "Storage error during %s: %s: %s",
            operation,
            type(exc).__name__,
            exc,
        )
        return error


# ── Singleton Instance ────────────────────────────────────────────────────
product_service = ProductService()
