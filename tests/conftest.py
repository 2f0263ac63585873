"""Root test fixtures shared across all test types.

Environment variables are set before any application import: settings are
read (and cached) the first time a module asks for them.
Database-specific fixtures are in tests/integration/conftest.py.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-at-least-32-characters-long")
# Cheap hashing keeps the suite fast
os.environ.setdefault("ARGON2_TIME_COST", "1")
os.environ.setdefault("ARGON2_MEMORY_COST", "1024")
os.environ.setdefault("ARGON2_PARALLELISM", "1")

# ruff: noqa: E402 - Imports must be after env var setup
from src.taskhub.core.config import get_settings

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()
