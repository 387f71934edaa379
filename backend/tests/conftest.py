"""Root conftest — shared test configuration."""

import os

# Settings are read once (lru_cache); set test values before the app is imported
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("ALLOW_DIRECT_WRITES", "true")
os.environ.setdefault("SESSION_SECRET", "test-session-secret")
os.environ.setdefault("ENTERPRISE_CACHE_CONTROL", "600")
