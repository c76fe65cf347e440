"""
Product API — Application Package
===================================

A single-resource CRUD service over HTTP:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← status codes, request bodies
    ├─────────────────────────────────────┤
    │         Services (ProductService)   │  ← storage calls, error mapping
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← async SQLite sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
