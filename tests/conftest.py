import os
from datetime import datetime, timezone

import pytest

# Ensure settings are deterministic before biohost imports
os.environ.setdefault("LOG_JSON", "false")
os.environ.setdefault("TIMEZONE", "UTC")

# Wednesday
FIXED_NOW = datetime(2024, 6, 12, 12, 0, tzinfo=timezone.utc)

CHROME_WINDOWS = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
SAFARI_IPHONE = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1"
)
FIREFOX_LINUX = "Mozilla/5.0 (X11; Linux x86_64; rv:121.0) Gecko/20100101 Firefox/121.0"


@pytest.fixture
def db_session(tmp_path, monkeypatch):
    db_path = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+pysqlite:///{db_path}")

    from biohost.config import get_settings
    from biohost.database import reset_engine, init_db, get_sessionmaker

    get_settings.cache_clear()
    reset_engine()
    init_db()

    SessionLocal = get_sessionmaker()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
        reset_engine()


@pytest.fixture
def client(db_session):
    from fastapi.testclient import TestClient

    from biohost.dependencies import get_context_extractor
    from biohost.main import create_app
    from biohost.services.request_context import RequestContextExtractor

    app = create_app()
    app.dependency_overrides[get_context_extractor] = lambda: RequestContextExtractor(
        clock=lambda: FIXED_NOW
    )
    with TestClient(app) as test_client:
        yield test_client
