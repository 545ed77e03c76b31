"""
Journal Backend — Application Package Initializer
=================================================

What: Marks the `journal` directory as a Python package.
Why:  Enables module imports like `from journal.config import Settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    This backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │   Routes + Dependencies (API Layer) │  ← HTTP concerns, auth gate
    ├─────────────────────────────────────┤
    │   Services (Business Logic)         │  ← Validation, credentials, CRUD
    ├─────────────────────────────────────┤
    │   Models & Schemas (Data)           │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │   Database (Persistence)            │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    The engine, session factory and credential service are built from an
    explicit Settings object inside create_app() and hung off app.state,
    so tests can build isolated apps with their own database and secret.
"""

__version__ = "1.0.0"
