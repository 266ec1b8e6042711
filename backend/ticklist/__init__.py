"""
Ticklist Backend — Application Package Initializer
====================================================

What:  Record-keeping service for climbing crags, routes, and ascents.
Who:   Served by uvicorn (`uvicorn ticklist.main:app`), imported by Alembic and pytest.

Architecture Note:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← list / create per resource, liveness
    ├─────────────────────────────────────┤
    │      TableResource (Services)       │  ← one generic SELECT / INSERT implementation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async engine owned by the app instance
    └─────────────────────────────────────┘

    Every endpoint is either a full-table scan or a single-row insert.
"""

__version__ = "1.0.0"
