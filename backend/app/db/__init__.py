"""Database Infrastructure — SQLAlchemy Base.

Invariants:
    - All sessions are async (AsyncSession), asyncpg driver for PostgreSQL
"""
