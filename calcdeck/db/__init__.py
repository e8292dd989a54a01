"""Database Infrastructure — async session factory and SQLAlchemy Base.

Invariants:
    - Single async engine per process for the web app (initialized via init_db)
    - All sessions are async (AsyncSession)

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for tests
"""
