"""
Shared test fixtures

- The store is replaced with FakeConnection, which records every statement and
  answers with canned rows, so no PostgreSQL is needed
- Tokens are signed with the configured secret
"""
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from config.settings import settings
from files.repository import FileStore, get_file_store
from main import app


class FakeConnection:
    """Stands in for an asyncpg connection: ``fetchval`` for counts, ``fetch`` for pages."""

    def __init__(self, total=0, rows=(), count_error=None, fetch_error=None):
        self.total = total
        self.rows = list(rows)
        self.count_error = count_error
        self.fetch_error = fetch_error
        self.statements = []

    async def fetchval(self, sql, *args):
        self.statements.append(("count", sql, list(args)))
        if self.count_error is not None:
            raise self.count_error
        return self.total

    async def fetch(self, sql, *args):
        self.statements.append(("page", sql, list(args)))
        if self.fetch_error is not None:
            raise self.fetch_error
        return list(self.rows)


def make_token(user_id, expires_in=timedelta(minutes=15), secret=None, **claims):
    payload = {"sub": str(user_id), "exp": datetime.now(timezone.utc) + expires_in}
    payload.update(claims)
    return jwt.encode(payload, secret or settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def make_row(id, filename, size_bytes, mime_type, created_at=None):
    return {
        "id": id,
        "filename": filename,
        "size_bytes": size_bytes,
        "mime_type": mime_type,
        "created_at": created_at or datetime(2025, 7, 1, 12, 0, tzinfo=timezone.utc),
    }


@pytest.fixture
def fake_connection():
    return FakeConnection()


@pytest.fixture
def store_checkouts():
    """Number of times the endpoint asked for a store"""
    return []


@pytest.fixture
def client(fake_connection, store_checkouts):
    def _override_get_file_store():
        store_checkouts.append(1)
        return FileStore(fake_connection)

    prev_overrides = app.dependency_overrides.copy()
    app.dependency_overrides[get_file_store] = _override_get_file_store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        app.dependency_overrides.update(prev_overrides)


@pytest.fixture
def token_for():
    return make_token
