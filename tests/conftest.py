"""Root conftest — shared test configuration."""

import os

os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
# Fast bcrypt work factor for any code path that reads settings
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")
