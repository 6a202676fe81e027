"""Root conftest — shared test configuration."""

import os

# Settings are cached on first use; pin test values before any thryv import
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("AUTH_ENABLED", "true")
os.environ.setdefault("DYNAMODB_ENDPOINT", "http://localhost:8000")
