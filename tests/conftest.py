"""Root conftest — shared test configuration."""

import os

# Settings are read once (lru_cache); set test values before anything imports them
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("ADMIN_API_TOKEN", "test-admin-token")
os.environ.setdefault("LOG_FORMAT", "text")
