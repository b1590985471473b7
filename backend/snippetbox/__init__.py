"""
Snippetbox Backend — Application Package Initializer
=====================================================

What: Marks the `snippetbox` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    ┌─────────────────────────────────────┐
    │     Routes (handlers + templates)   │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (UserService)      │  ← Hashing, sentinel errors
    ├─────────────────────────────────────┤
    │        Models (User, Snippet)       │  ← SQLAlchemy ORM
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
