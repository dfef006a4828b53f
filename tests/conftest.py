"""
tests/conftest.py -- Shared test fixtures for the auction service.

This module provides:
  - credential_store / player_store: fresh in-memory stores for unit tests
  - _make_test_stores(): isolated shared-memory DBs for API integration tests
  - _patch_lifespan(): wires test stores into app.state, bypassing real startup
  - api_client: TestClient plus admin and buyer tokens

Design: Named shared-memory SQLite URIs (not plain :memory:) are required for
the API tests because TestClient runs sync route handlers in a thread pool.
Plain :memory: DBs are per-connection and would present a blank schema to each
worker thread.

Environment must be set before any auth/core import: DEBUG so get_settings()
auto-generates SECRET_KEY, ALLOWED_HOSTS so TestClient's "testserver" host
passes TrustedHostMiddleware, and RATE_LIMIT_ENABLED so repeated logins in one
module are not throttled.
"""

from __future__ import annotations

import os
from collections.abc import Generator
from contextlib import asynccontextmanager

# CRITICAL: set before any auth/core import.
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("ALLOWED_HOSTS", '["*"]')
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
from fastapi.testclient import TestClient

from api.main import app
from auction.engine import BidEngine
from auction.store import PlayerStore
from auth.accounts import register_admin, register_buyer
from auth.models import AdminIdentity, BuyerIdentity
from auth.store import CredentialStore
from auth.tokens import create_access_token

ADMIN_USERNAME = "testadmin"
ADMIN_PASSWORD = "testpass123"
BUYER_A = ("mumbai-owner", "buyerpass1", "Mumbai Indians")
BUYER_B = ("chennai-owner", "buyerpass2", "Chennai Super Kings")


# ---------------------------------------------------------------------------
# Unit-test stores
# ---------------------------------------------------------------------------


@pytest.fixture
def credential_store() -> Generator[CredentialStore, None, None]:
    store = CredentialStore("sqlite:///:memory:")
    yield store
    store.close()


@pytest.fixture
def player_store() -> Generator[PlayerStore, None, None]:
    store = PlayerStore("sqlite:///:memory:")
    yield store
    store.close()


@pytest.fixture
def admin_token() -> str:
    return create_access_token(AdminIdentity(admin_id=1))


@pytest.fixture
def buyer_a_token() -> str:
    return create_access_token(BuyerIdentity(buyer_id=1, team_name=BUYER_A[2]))


@pytest.fixture
def buyer_b_token() -> str:
    return create_access_token(BuyerIdentity(buyer_id=2, team_name=BUYER_B[2]))


# ---------------------------------------------------------------------------
# API integration helpers
# ---------------------------------------------------------------------------


def _make_test_stores(db_suffix: str) -> tuple[CredentialStore, PlayerStore]:
    """Create isolated named shared-memory SQLite stores.

    Args:
        db_suffix: Unique string appended to the DB name so test modules
                   don't share state.
    """
    auth_url = f"sqlite:///file:test_auth_{db_suffix}?mode=memory&cache=shared&uri=true"
    auction_url = f"sqlite:///file:test_auction_{db_suffix}?mode=memory&cache=shared&uri=true"
    return CredentialStore(db_url=auth_url), PlayerStore(db_url=auction_url)


def _patch_lifespan(credential_store: CredentialStore, player_store: PlayerStore):
    """Return an async context manager that replaces the real lifespan."""

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.credential_store = credential_store
        app.state.player_store = player_store
        app.state.bid_engine = BidEngine(player_store)
        yield

    return test_lifespan


@pytest.fixture(scope="module")
def api_client(request) -> Generator[tuple[TestClient, dict[str, str]], None, None]:
    """Yield (client, tokens) for API integration tests.

    tokens has keys "admin", "buyer_a" and "buyer_b". The accounts behind them
    are registered in the test store, so login through the API works too.
    """
    suffix = request.module.__name__.rsplit(".", 1)[-1]
    credential_store, player_store = _make_test_stores(suffix)

    admin = register_admin(credential_store, ADMIN_USERNAME, ADMIN_PASSWORD)
    buyer_a = register_buyer(credential_store, *BUYER_A)
    buyer_b = register_buyer(credential_store, *BUYER_B)
    tokens = {
        "admin": create_access_token(AdminIdentity(admin_id=admin.id)),
        "buyer_a": create_access_token(BuyerIdentity(buyer_id=buyer_a.id, team_name=buyer_a.team_name)),
        "buyer_b": create_access_token(BuyerIdentity(buyer_id=buyer_b.id, team_name=buyer_b.team_name)),
    }

    app.router.lifespan_context = _patch_lifespan(credential_store, player_store)

    with TestClient(app, raise_server_exceptions=True) as client:
        yield client, tokens

    player_store.close()
    credential_store.close()
