"""Shared test setup — points the app at a throwaway SQLite database before it is imported."""

import os
import tempfile
from pathlib import Path

_TEST_DIR = Path(tempfile.mkdtemp(prefix="inkwell-tests-"))

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{_TEST_DIR / 'inkwell.db'}")
os.environ.setdefault("UPLOAD_DIR", str(_TEST_DIR / "uploads"))
os.environ.setdefault("SECRET_KEY", "test-secret")
