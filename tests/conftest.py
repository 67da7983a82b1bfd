"""Root conftest — shared test configuration."""

import os

# Tests never reach a real database server or enrichment endpoint
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)
os.environ.pop("ENRICHMENT_URL", None)
os.environ.setdefault("LOG_FORMAT", "text")
