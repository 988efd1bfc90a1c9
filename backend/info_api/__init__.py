"""
Info API — Application Package Initializer
==========================================

What: Marks the `info_api` directory as a Python package.
Who:  Imported by uvicorn (`info_api.main:app`), Alembic, and pytest.

Layering:

    ┌─────────────────────────────────────┐
    │        Routes (ThemaResource)       │  ← status codes, headers, validation of ids
    ├─────────────────────────────────────┤
    │     Repositories (AsyncRepository)  │  ← save / find / exists / page / delete
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic DTOs
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never build SQL; repositories never know about HTTP.
"""

__version__ = "1.0.0"
