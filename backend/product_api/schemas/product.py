"""
Product API — Pydantic Request/Response Schemas
=================================================

What:  Pydantic models defining the HTTP contract of the product endpoints.
Why:   Typed input validation, serialization, and OpenAPI doc generation.
How:   FastAPI validates request bodies against ProductIn, serializes
       ProductOut from ORM objects, and documents error bodies from
       ErrorResponse / MessageResponse.

Schemas are separate from the SQLAlchemy model: the table carries
bookkeeping timestamps that the API never returns.
"""

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ProductIn(BaseModel):
    """
    Body of POST /products and PUT /products/{id}.

    Both fields are required and non-null, and price must be finite (JSON
    output has no encoding for inf or NaN). PUT is a full replacement, so it
    uses the same model. Unknown keys (an `id` in a PUT body, for instance)
    are ignored.
    """
    name: str = Field(description="Product name", examples=["Sample Product"])
    price: float = Field(description="Product price", examples=[10], allow_inf_nan=False)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ProductOut(BaseModel):
    """Full representation of a persisted product."""
    id: int = Field(description="Product ID")
    name: str = Field(description="Product name")
    price: float = Field(description="Product price")

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    """Confirmation body, e.g. after a delete."""
    message: str = Field(description="Human-readable confirmation")


class ErrorResponse(BaseModel):
    """
    Error body shared by every failure path.

    The text is fixed per failure kind and operation; internal error detail
    is never included.
    """
    error: str = Field(description="Fixed error message", examples=["Product not found"])


class HealthResponse(BaseModel):
    """Health check response showing service and storage status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
