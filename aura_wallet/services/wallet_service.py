"""Simulated AURA Infra client for fiat/USD payments.

Stands in for the AURA payments backend: every call waits a fixed delay and
returns synthetic data, with no real I/O. A configurable share of transfers
fails so callers exercise their error paths.

Everything random or time-dependent is injected so tests can pin it:
    client = SimulatedAuraClient(
        rng=random.Random(7),
        sleep=fake_sleep,
        failure_policy=never_fail,
    )
"""

import asyncio
import logging
import random
import string
from datetime import datetime, timezone
from decimal import Decimal
from typing import Awaitable, Callable

from aura_wallet.config import settings
from aura_wallet.core.exceptions import ServiceError
from aura_wallet.schemas.wallet import (
    AuraTransaction,
    AuraWallet,
    StatsSnapshot,
    TransactionStatus,
)

logger = logging.getLogger(__name__)

# Returns True when the call it guards should fail.
FailurePolicy = Callable[[], bool]
Sleep = Callable[[float], Awaitable[None]]
Clock = Callable[[], datetime]

_ID_ALPHABET = string.digits + string.ascii_lowercase

TRANSFER_FAILURE_MESSAGE = "Insufficient USD balance or network error"


# ---------------------------------------------------------------------------
# Failure policies
# ---------------------------------------------------------------------------

def random_failure_policy(rate: float, rng: random.Random | None = None) -> FailurePolicy:
    """Fail with probability *rate* on each call."""
    if not 0.0 <= rate <= 1.0:
        raise ValueError(f"Failure rate must be between 0 and 1, got {rate}")
    source = rng or random.Random()

    def _policy() -> bool:
        return source.random() < rate

    return _policy


def never_fail() -> bool:
    return False


def always_fail() -> bool:
    return True


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------

def convert_mnee_to_usd(mnee_amount: Decimal | float | int | str) -> Decimal:
    """MNEE is a USD stablecoin, so 1 MNEE = 1 USD."""
    return Decimal(str(mnee_amount))


def default_delays() -> dict[str, float]:
    return {
        "create_wallet": settings.create_wallet_delay_seconds,
        "create_transaction": settings.transfer_delay_seconds,
        "get_stats": settings.stats_delay_seconds,
        "fund_from_crypto": settings.fund_delay_seconds,
    }


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class SimulatedAuraClient:
    """AURA Infra operations answered locally after a simulated delay."""

    def __init__(
        self,
        rng: random.Random | None = None,
        clock: Clock | None = None,
        sleep: Sleep | None = None,
        failure_policy: FailurePolicy | None = None,
        delays: dict[str, float] | None = None,
    ):
        self._rng = rng or random.Random()
        self._clock = clock or _utcnow
        self._sleep = sleep or asyncio.sleep
        self._failure_policy = failure_policy or random_failure_policy(
            settings.transfer_failure_rate, self._rng
        )
        self.delays = {**default_delays(), **(delays or {})}

    def _random_id(self, length: int) -> str:
        return "".join(self._rng.choice(_ID_ALPHABET) for _ in range(length))

    async def create_wallet(self, agent_id: str) -> AuraWallet:
        """Create a USD wallet for *agent_id* (POST /wallets)."""
        logger.info("Creating AURA USD wallet for agent %s", agent_id)
        try:
            await self._sleep(self.delays["create_wallet"])
            wallet = AuraWallet(
                wallet_id=f"aura_{agent_id}_{self._random_id(9)}",
                balance=Decimal("0"),
                created_at=self._clock(),
            )
        except Exception as exc:
            logger.exception("Failed to create AURA wallet for agent %s", agent_id)
            raise ServiceError("Failed to create USD wallet") from exc

        logger.info("AURA wallet created: %s", wallet.wallet_id)
        return wallet

    async def create_transaction(
        self,
        from_wallet: str,
        to_wallet: str,
        amount: Decimal | float | int | str,
        description: str | None = None,
    ) -> AuraTransaction:
        """Transfer USD between wallets (POST /transactions).

        Raises ``ServiceError`` when the failure policy rejects the transfer.
        """
        logger.info("Processing AURA USD transfer %s -> %s (%s)", from_wallet, to_wallet, amount)
        try:
            await self._sleep(self.delays["create_transaction"])
            if self._failure_policy():
                raise ServiceError(TRANSFER_FAILURE_MESSAGE)
            transaction = AuraTransaction(
                transaction_id=f"aura_tx_{self._random_id(12)}",
                from_wallet=from_wallet,
                to_wallet=to_wallet,
                amount=Decimal(str(amount)),
                status=TransactionStatus.COMPLETED,
                timestamp=self._clock(),
                description=description,
            )
        except ServiceError:
            logger.warning("AURA transfer %s -> %s rejected", from_wallet, to_wallet)
            raise
        except Exception as exc:
            logger.exception("AURA transfer %s -> %s failed", from_wallet, to_wallet)
            raise ServiceError(str(exc) or "USD transfer failed") from exc

        logger.info("AURA transfer completed: %s", transaction.transaction_id)
        return transaction

    async def get_stats(self, wallet_id: str | None = None) -> StatsSnapshot:
        """Payment analytics (GET /stats). *wallet_id* does not narrow the mock data."""
        logger.info("Fetching AURA analytics (wallet=%s)", wallet_id or "all")
        try:
            await self._sleep(self.delays["get_stats"])
            stats = StatsSnapshot(
                total_transactions=self._rng.randrange(50, 150),
                total_volume=Decimal(self._rng.randrange(5000, 15000)),
                active_wallets=self._rng.randrange(20, 70),
                period="last_30_days",
            )
        except Exception as exc:
            logger.exception("Failed to fetch AURA stats")
            raise ServiceError("Failed to fetch analytics") from exc
        return stats

    async def fund_from_crypto(
        self, wallet_id: str, mnee_amount: Decimal | float | int | str
    ) -> bool:
        """Convert crypto earnings into USD balance for *wallet_id*."""
        logger.info("Converting %s MNEE to USD for wallet %s", mnee_amount, wallet_id)
        try:
            await self._sleep(self.delays["fund_from_crypto"])
            usd_amount = convert_mnee_to_usd(mnee_amount)
        except Exception as exc:
            logger.exception("Failed to fund wallet %s from crypto", wallet_id)
            raise ServiceError("Failed to fund wallet from crypto") from exc

        logger.info("Funded wallet %s with $%.2f USD", wallet_id, usd_amount)
        return True


def get_wallet_client():
    """Build the AURA client selected by AURA_CLIENT_MODE."""
    mode = settings.aura_client_mode.lower()
    if mode == "simulated":
        return SimulatedAuraClient()
    if mode == "live":
        from aura_wallet.services.aura_api_client import AuraApiClient
        return AuraApiClient(
            base_url=settings.aura_api_base_url,
            api_key=settings.aura_api_key,
            timeout=settings.aura_api_timeout_seconds,
        )
    raise ValueError(
        f"Unsupported AURA_CLIENT_MODE '{settings.aura_client_mode}'. Supported: live, simulated"
    )
