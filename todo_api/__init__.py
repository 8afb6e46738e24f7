"""
Todo API — Application Package Initializer
===========================================

What: Marks the `todo_api` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend is split into layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Validation, error translation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    - Routes map requests to service calls and pick status codes
    - Services own the todo rules and can be tested without HTTP
    - Models represent the `todos` table; Schemas represent the wire contract
    - The database layer manages the engine and per-request sessions
"""

__version__ = "1.0.0"
