"""
Product API — Product SQLAlchemy Model
========================================

What:  ORM model representing the `products` table.
Why:   Maps Python objects to database rows for type-safe storage operations.
How:   Inherits from the shared DeclarativeBase; init_database() creates the
       table from this metadata at startup.
Who:   Used by ProductService for create/find/save/delete.

Table Design:
    - id: INTEGER PRIMARY KEY AUTOINCREMENT. sqlite_autoincrement makes SQLite
      keep a high-water mark in sqlite_sequence, so deleting the newest row
      never frees its id for the next insert.
    - name / price: NOT NULL, the only client-supplied columns.
    - created_at / updated_at: bookkeeping timestamps (UTC), not exposed in
      the API contract.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from product_api.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Product(Base):
    """
    A product record.

    Lifecycle:
        1. Created by POST /products (storage assigns id)
        2. Overwritten in place by PUT /products/{id}
        3. Removed permanently by DELETE /products/{id}
    """

    __tablename__ = "products"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    price: Mapped[float] = mapped_column(
        Float,
        nullable=False,
    )

    # ── Timestamps ────────────────────────────────────────────────────────
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name={self.name!r}, price={self.price})>"
