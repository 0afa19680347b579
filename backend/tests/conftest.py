"""Root conftest: shared test configuration."""

import os

# Tests never reach a real PostgreSQL world state
os.environ.setdefault(
    "WORLD_STATE_URL",
    "sqlite+aiosqlite:///:memory:",
)
os.environ.setdefault("LOG_FORMAT", "text")
