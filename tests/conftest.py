"""
tests/conftest.py -- Shared test fixtures for the inventory API tests.

This module provides:
  - _make_engine(): isolated named shared-memory SQLite engine per test module
  - _patch_lifespan(): wires test stores/services into app.state, bypassing real startup
  - api_client: TestClient plus admin and user tokens for API integration tests
  - token_service / user_store / catalog_store: unit-level fixtures

Design: Named shared-memory SQLite URIs (not plain :memory:) are required
because TestClient runs sync route handlers in a thread pool. Plain :memory:
DBs are per-connection and would present a blank schema to each worker
thread. The named URI format (file:name?mode=memory&cache=shared&uri=true)
shares one in-memory instance across all connections in the same process.

Environment variables must be set before any auth/core/api import:
  DEBUG=true            -- get_settings() auto-generates SECRET_KEY
  BCRYPT_ROUNDS=4       -- keeps password hashing fast
  LOGIN_RATE_LIMIT      -- high enough that the suite never trips it
  SEED_SAMPLE_DATA      -- the patched lifespan seeds explicitly
"""

from __future__ import annotations

import os
import uuid
from collections.abc import Generator
from contextlib import asynccontextmanager

os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOGIN_RATE_LIMIT", "1000/minute")
os.environ.setdefault("SEED_SAMPLE_DATA", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine

from api.main import app
from auth.service import IdentityService
from auth.store import UserStore
from auth.tokens import SigningKeys, TokenService, hash_password
from catalog.service import CatalogService
from catalog.store import CatalogStore
from core.database import create_db_engine

TEST_SECRET = "test-secret-key-0123456789abcdef0123456789"


class FakeClock:
    """Settable clock for TokenService. Starts at a fixed instant."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ---------------------------------------------------------------------------
# Engine / lifespan helpers
# ---------------------------------------------------------------------------


def _make_engine(db_suffix: str) -> Engine:
    """Create an isolated named shared-memory SQLite engine.

    A uuid is appended so repeated fixtures never reopen a database that an
    earlier test left populated.
    """
    name = f"test_inventory_{db_suffix}_{uuid.uuid4().hex}"
    return create_db_engine(f"sqlite:///file:{name}?mode=memory&cache=shared&uri=true")


def _patch_lifespan(engine: Engine, token_service: TokenService, strict: bool = False):
    """Return an async context manager that replaces the real lifespan.

    Builds stores and services on the test engine, seeds the sample data,
    and publishes everything on app.state the same way the real lifespan does.
    """

    @asynccontextmanager
    async def test_lifespan(app):
        user_store = UserStore(engine)
        catalog_store = CatalogStore(engine)
        user_store.seed_if_empty(hash_password)
        catalog_store.seed_if_empty()
        app.state.engine = engine
        app.state.token_service = token_service
        app.state.identity_service = IdentityService(user_store, token_service)
        app.state.catalog_service = CatalogService(catalog_store, strict=strict)
        yield

    return test_lifespan


def _client(db_suffix: str, strict: bool = False) -> Generator[tuple[TestClient, str, str], None, None]:
    engine = _make_engine(db_suffix)
    token_service = TokenService(SigningKeys("test", TEST_SECRET), ttl_seconds=3600)
    app.router.lifespan_context = _patch_lifespan(engine, token_service, strict=strict)

    with TestClient(app, raise_server_exceptions=True) as client:
        store = UserStore(engine)
        admin = store.get_by_email("admin@mail.ru")
        user = store.get_by_email("user@mail.ru")
        admin_token = token_service.issue(admin.id, admin.name, admin.email, admin.role)
        user_token = token_service.issue(user.id, user.name, user.email, user.role)
        yield client, admin_token, user_token

    engine.dispose()


# ---------------------------------------------------------------------------
# Module-scoped fixtures -- one TestClient per test module for speed
# ---------------------------------------------------------------------------


@pytest.fixture(scope="module")
def api_client() -> Generator[tuple[TestClient, str, str], None, None]:
    """Yield (client, admin_token, user_token) for API integration tests.

    The TestClient uses the real FastAPI app with a patched lifespan so
    tests hit real route handlers, guards and middleware but use an isolated
    in-memory database seeded with the sample accounts and products:
      admin@mail.ru / admin123 (admin), user@mail.ru / user123 (user).
    """
    yield from _client("api")


@pytest.fixture(scope="module")
def strict_client() -> Generator[tuple[TestClient, str, str], None, None]:
    """Same as api_client but with STRICT_MUTATIONS behaviour enabled."""
    yield from _client("strict", strict=True)


# ---------------------------------------------------------------------------
# Unit-level fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def token_service(clock: FakeClock) -> TokenService:
    return TokenService(SigningKeys("test", TEST_SECRET), ttl_seconds=24 * 60 * 60, clock=clock)


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    eng = create_db_engine("sqlite:///:memory:")
    yield eng
    eng.dispose()


@pytest.fixture
def user_store(engine: Engine) -> UserStore:
    return UserStore(engine)


@pytest.fixture
def catalog_store(engine: Engine) -> CatalogStore:
    return CatalogStore(engine)


@pytest.fixture
def signing_secret() -> str:
    return TEST_SECRET
