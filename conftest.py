"""Root conftest: override DB to SQLite for tests."""

import os

os.environ.setdefault("LIGHTBNB_DB_URL", "sqlite:///:memory:")
