"""
tests/conftest.py -- Shared test fixtures for Chirpy integration tests.

This module provides:
  - _make_test_stores(): creates isolated in-memory DBs for users + chirps
  - _patch_lifespan(): wires test stores into app.state, bypassing real startup
  - api_client: TestClient with a registered user and a valid bearer token
  - fresh_client: TestClient over an empty database

Both fixtures are function-scoped. They share the one FastAPI app object, so
only one lifespan (and one set of stores on app.state) may be live at a time.

Design: Named shared-memory SQLite URIs (not plain :memory:) are required
because TestClient runs sync route handlers in a thread pool. Plain :memory:
DBs are per-connection and would present a blank schema to each worker
thread. The named URI format (file:name?mode=memory&cache=shared&uri=true)
shares one in-memory instance across all connections in the same process.

DEBUG must be set before any core/auth import so get_settings() can
auto-generate SECRET_KEY in dev mode rather than raising ValueError.
BCRYPT_ROUNDS=4 keeps the many hash calls in the suite fast.
"""

from __future__ import annotations

import itertools
import os
from collections.abc import Generator
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import NamedTuple
from uuid import UUID

# CRITICAL: Set DEBUG before any auth/core import so get_settings() can
# auto-generate SECRET_KEY in dev mode instead of raising ValueError.
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient

from asgi import app
from auth.models import User
from auth.passwords import hash_password
from auth.store import UserStore
from auth.tokens import make_jwt
from chirps.store import ChirpStore
from core.config import get_settings
from core.metrics import HitCounter

TEST_EMAIL = "walt@breakingbad.com"
TEST_PASSWORD = "123456"

_db_counter = itertools.count()


class ApiClient(NamedTuple):
    client: TestClient
    token: str
    user_id: UUID


# ---------------------------------------------------------------------------
# Store helpers
# ---------------------------------------------------------------------------


def _make_test_stores(db_suffix: str) -> tuple[UserStore, ChirpStore]:
    """Create isolated named shared-memory SQLite stores for test isolation.

    Both stores point at the same in-memory database, as they do in
    production where they share Settings.db_url.
    """
    url = f"sqlite:///file:test_chirpy_{db_suffix}?mode=memory&cache=shared&uri=true"
    return UserStore(db_url=url), ChirpStore(db_url=url)


def _patch_lifespan(user_store: UserStore, chirp_store: ChirpStore):
    """Return an async context manager that replaces the real lifespan."""

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.user_store = user_store
        app.state.chirp_store = chirp_store
        app.state.hits = HitCounter()
        yield

    return test_lifespan


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def api_client() -> Generator[ApiClient, None, None]:
    """Yield (client, token, user_id) for API integration tests.

    The user walt@breakingbad.com / 123456 is created before the client
    starts and a one-hour token is issued for it with the app's secret.
    """
    user_store, chirp_store = _make_test_stores(f"api_{next(_db_counter)}")

    user = user_store.create_user(
        User(email=TEST_EMAIL, hashed_password=hash_password(TEST_PASSWORD, rounds=4))
    )
    token = make_jwt(user.id, get_settings().secret_key, timedelta(hours=1))

    app.router.lifespan_context = _patch_lifespan(user_store, chirp_store)

    with TestClient(app, raise_server_exceptions=True) as client:
        yield ApiClient(client, token, user.id)

    chirp_store.close()
    user_store.close()


@pytest.fixture
def fresh_client() -> Generator[TestClient, None, None]:
    """Yield a TestClient over an empty database with a fresh hit counter."""
    user_store, chirp_store = _make_test_stores(f"fresh_{next(_db_counter)}")
    app.router.lifespan_context = _patch_lifespan(user_store, chirp_store)

    with TestClient(app, raise_server_exceptions=True) as client:
        yield client

    chirp_store.close()
    user_store.close()
