"""
PawMart Backend — Application Package Initializer
==================================================

What: Marks the `pawmart` directory as a Python package.
Who:  Imported by uvicorn (pawmart.main:app), Alembic, and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │    Services (Resource CRUD rules)   │  ← Dedup, outcomes, error wrapping
    ├─────────────────────────────────────┤
    │   Document Store (Collections API)  │  ← insert_one / find / update_one ...
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy engine + sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
