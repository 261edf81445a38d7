"""Shared fixtures for the AURA wallet test suite.

The simulated client is made deterministic: a recording sleep that never
waits, a seeded RNG, a frozen clock and an explicit failure policy.
"""

import asyncio
import random
from datetime import datetime, timezone
from decimal import Decimal

import httpx
import pytest

from aura_wallet.main import create_app
from aura_wallet.schemas.wallet import WalletRecord
from aura_wallet.services.aura_api_client import AuraApiClient
from aura_wallet.services.panel_service import WalletPanel
from aura_wallet.services.persistence import WalletPersistence
from aura_wallet.services.wallet_service import SimulatedAuraClient, never_fail
from aura_wallet.storage.memory import MemoryStore

FIXED_NOW = datetime(2026, 1, 15, 10, 20, 30, tzinfo=timezone.utc)
ADDRESS = "0xABC"
TEST_API_KEY = "test-aura-key"


class RecordingSleep:
    """Stands in for asyncio.sleep; remembers requested delays."""

    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class GatedSleep:
    """Blocks every simulated call until ``release`` is set."""

    def __init__(self):
        self.release = asyncio.Event()

    async def __call__(self, seconds: float) -> None:
        await self.release.wait()


# ---------------------------------------------------------------------------
# Service fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def fake_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def make_client(fake_sleep):
    """Factory fixture: build a deterministic SimulatedAuraClient."""
    def _make(failure_policy=never_fail, seed: int = 42, sleep=None, clock=None, **kwargs):
        return SimulatedAuraClient(
            rng=random.Random(seed),
            clock=clock or (lambda: FIXED_NOW),
            sleep=sleep or fake_sleep,
            failure_policy=failure_policy,
            **kwargs,
        )
    return _make


@pytest.fixture
def aura_client(make_client) -> SimulatedAuraClient:
    return make_client()


# ---------------------------------------------------------------------------
# Persistence fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def persistence(store) -> WalletPersistence:
    return WalletPersistence(store, namespace="aura")


@pytest.fixture
def seed_wallet(persistence):
    """Save a wallet for ADDRESS with the given balance and return it."""
    def _seed(balance: str = "100", wallet_id: str = "aura_0xABC_seed00001") -> WalletRecord:
        wallet = WalletRecord(wallet_id=wallet_id, balance_usd=Decimal(balance), is_created=True)
        persistence.save_wallet(ADDRESS, wallet)
        return wallet
    return _seed


# ---------------------------------------------------------------------------
# Panel fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def notified() -> list:
    return []


@pytest.fixture
def panel(aura_client, persistence, notified) -> WalletPanel:
    return WalletPanel(aura_client, persistence, notifier=notified.append)


# ---------------------------------------------------------------------------
# API fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def api_app(aura_client):
    return create_app(client=aura_client, api_key=TEST_API_KEY)


@pytest.fixture
async def http_client(api_app):
    """httpx AsyncClient wired to the AURA API app."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=api_app),
        base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def api_client(api_app) -> AuraApiClient:
    return AuraApiClient(
        base_url="http://test",
        api_key=TEST_API_KEY,
        transport=httpx.ASGITransport(app=api_app),
    )
