"""
ScholarThynk Backend — Application Package Initializer
======================================================

What: Marks the `scholarthynk` directory as a Python package.
Why:  Enables module imports like `from scholarthynk.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Tree & Note Logic)      │  ← Path resolution, invariants
    ├─────────────────────────────────────┤
    │  Document Store / Models / Schemas  │  ← Flat `items` collection + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Services never touch SQLAlchemy directly; they talk to the DocumentStore,
    which exposes equality-predicate find/insert/update/delete over a single
    flat table of folder and note items.
"""

__version__ = "1.0.0"
