"""
Product API — Database Session Management
===========================================

What:  Async SQLAlchemy engine, session factory, schema lifecycle and the
       FastAPI session dependency.
Why:   Centralizes all storage connection logic in one place.
How:   Creates an async engine over the SQLite file, provides a session
       dependency that rolls back on error and always closes.
Who:   Used by route handlers via FastAPI's dependency injection system and
       by the application lifespan (init_database / dispose_engine).
When:  Engine is created at module import; sessions are created per-request.

Storage lifecycle:
    The product store does not survive restarts. init_database(reset=True)
    drops every mapped table and recreates the schema from the ORM metadata.
    It is an explicit call made by the lifespan handler, never an import side
    effect, so tests decide for themselves whether to reset or keep state.
"""

import logging
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from product_api.config import settings

logger = logging.getLogger(__name__)


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(
    settings.database_url,
    pool_pre_ping=True,
    # Echo SQL queries in DEBUG mode for development visibility
    echo=settings.log_level == "DEBUG",
)

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay readable after commit, so the
# committed Product can be serialized without another round trip
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    The service layer commits its own writes so that a failed commit maps
    to the operation's error response. This dependency only guarantees
    cleanup: any exception escaping the handler rolls the session back, and
    the session is always closed.

    Example usage in a route:
        @router.get("/products/{product_id}")
        async def get_product(product_id: str, db: AsyncSession = Depends(get_db_session)):
            return await product_service.get_product(db, product_id)
    """
    async with async_session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def init_database(reset: bool = True) -> None:
    """
    Establish the product schema, optionally wiping existing data first.

    Args:
        reset: When True, drop all mapped tables before creating them, so the
               store starts empty and AUTOINCREMENT counters restart.
    """
    # Models must be imported so they are registered on Base.metadata
    from product_api.models.product import Product  # noqa: F401

    async with engine.begin() as conn:
        if reset:
            await conn.run_sync(Base.metadata.drop_all)
            logger.info("Product store reset")
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Product schema ready (%s)", engine.url.render_as_string(hide_password=True))


async def dispose_engine() -> None:
    """Gracefully closes all connections in the pool (app shutdown)."""
    await engine.dispose()
