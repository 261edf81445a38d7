"""Headless USD wallet panel.

Holds everything the wallet panel renders: the connected address, the USD
wallet and its transfer history (mirrored to the store per address), the
latest stats snapshot, and ephemeral UI state (transfer form, modal flag,
busy activity).

States:
  DISCONNECTED   no crypto address connected
  NO_WALLET      address connected, no USD wallet saved for it
  WALLET_ACTIVE  USD wallet loaded; fund / transfer available

While an operation is in flight ``activity`` is CREATING, FUNDING or
TRANSFERRING and every other operation is refused without reaching the
service. Failures are reported through notifications and leave both the
in-memory model and the store untouched.
"""

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Callable

from aura_wallet.config import settings
from aura_wallet.core.exceptions import AuraWalletError, ServiceError, ValidationError
from aura_wallet.schemas.wallet import StatsSnapshot, TransactionRecord, WalletRecord
from aura_wallet.services.persistence import WalletPersistence
from aura_wallet.services.wallet_service import convert_mnee_to_usd

logger = logging.getLogger(__name__)

_CENT = Decimal("0.01")


class PanelState(str, Enum):
    DISCONNECTED = "disconnected"
    NO_WALLET = "no_wallet"
    WALLET_ACTIVE = "wallet_active"


class PanelActivity(str, Enum):
    IDLE = "idle"
    CREATING = "creating"
    FUNDING = "funding"
    TRANSFERRING = "transferring"


@dataclass
class TransferForm:
    amount: str = ""
    recipient: str = ""
    description: str = ""

    def reset(self) -> None:
        self.amount = ""
        self.recipient = ""
        self.description = ""


@dataclass
class Notification:
    level: str  # success | error
    message: str


Notifier = Callable[[Notification], None]


def parse_amount(value: Decimal | float | int | str) -> Decimal:
    """Parse a user-entered USD amount. Raises ValidationError unless positive and finite."""
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValidationError("Please enter a valid amount") from None
    if not amount.is_finite() or amount <= 0:
        raise ValidationError("Please enter a valid amount")
    return amount


def format_usd(amount: Decimal) -> str:
    return f"${amount.quantize(_CENT, rounding=ROUND_HALF_UP):,.2f}"


class WalletPanel:
    """USD wallet panel for one connected crypto address at a time."""

    def __init__(
        self,
        client,
        persistence: WalletPersistence,
        notifier: Notifier | None = None,
        history_limit: int | None = None,
        default_description: str | None = None,
    ):
        self.client = client
        self.persistence = persistence
        self._notifier = notifier
        self.history_limit = history_limit or settings.recent_transactions_limit
        self.default_description = default_description or settings.default_transfer_description

        self.address: str | None = None
        self.wallet: WalletRecord | None = None
        self.transactions: list[TransactionRecord] = []
        self.stats: StatsSnapshot | None = None

        self.activity = PanelActivity.IDLE
        self.transfer_modal_open = False
        self.form = TransferForm()
        self.notifications: list[Notification] = []

    # -- derived state ------------------------------------------------------

    @property
    def state(self) -> PanelState:
        if self.address is None:
            return PanelState.DISCONNECTED
        if self.wallet is None:
            return PanelState.NO_WALLET
        return PanelState.WALLET_ACTIVE

    @property
    def is_busy(self) -> bool:
        return self.activity != PanelActivity.IDLE

    @property
    def recent_transactions(self) -> list[TransactionRecord]:
        return self.transactions[: self.history_limit]

    @property
    def balance_display(self) -> str:
        return format_usd(self.wallet.balance_usd if self.wallet else Decimal("0"))

    @property
    def last_notification(self) -> Notification | None:
        return self.notifications[-1] if self.notifications else None

    # -- connection ---------------------------------------------------------

    async def connect(self, address: str | None) -> PanelState:
        """Attach the panel to *address*, restoring any wallet saved for it."""
        if address != self.address:
            self.disconnect()
        if not address:
            return self.state

        self.address = address
        self.wallet = self.persistence.load_wallet(address)
        self.transactions = self.persistence.load_transactions(address) if self.wallet else []
        logger.info("Wallet panel connected to %s (state=%s)", address, self.state.value)

        if self.wallet is not None:
            await self.refresh_stats()
        return self.state

    def disconnect(self) -> None:
        """Forget the connected address. Saved state is left in the store."""
        if self.address is not None:
            logger.info("Wallet panel disconnected from %s", self.address)
        self.address = None
        self.wallet = None
        self.transactions = []
        self.stats = None
        self.activity = PanelActivity.IDLE
        self.transfer_modal_open = False
        self.form.reset()

    # -- operations ---------------------------------------------------------

    async def create_wallet(self) -> bool:
        if self.address is None:
            self._notify("error", "Please connect your wallet first")
            return False
        if self.wallet is not None:
            self._notify("error", "A USD wallet already exists for this address")
            return False
        if not self._begin(PanelActivity.CREATING):
            return False

        address = self.address
        try:
            created = await self.client.create_wallet(address)
            wallet = WalletRecord(
                wallet_id=created.wallet_id,
                balance_usd=created.balance,
                is_created=True,
            )
            self.persistence.save_wallet(address, wallet)
        except AuraWalletError as exc:
            self._notify("error", f"Failed to create wallet: {exc}")
            return False
        finally:
            self.activity = PanelActivity.IDLE

        if address != self.address:
            return True
        self.wallet = wallet
        self.transactions = []
        self._notify("success", "USD Wallet created successfully!")
        await self.refresh_stats()
        return True

    async def fund_wallet(self, amount: Decimal | float | int | str) -> bool:
        """Top up the USD balance from crypto earnings (1 MNEE = 1 USD)."""
        if self.wallet is None:
            self._notify("error", "Create a USD wallet first")
            return False
        try:
            mnee_amount = parse_amount(amount)
        except ValidationError as exc:
            self._notify("error", str(exc))
            return False
        if not self._begin(PanelActivity.FUNDING):
            return False

        address, wallet = self.address, self.wallet
        try:
            funded = await self.client.fund_from_crypto(wallet.wallet_id, mnee_amount)
            if not funded:
                raise ServiceError("Funding was not confirmed")
            updated = wallet.model_copy(
                update={"balance_usd": wallet.balance_usd + convert_mnee_to_usd(mnee_amount)}
            )
            self.persistence.save_wallet(address, updated)
        except AuraWalletError as exc:
            self._notify("error", f"Failed to fund wallet: {exc}")
            return False
        finally:
            self.activity = PanelActivity.IDLE

        if address != self.address:
            return True
        self.wallet = updated
        self._notify("success", f"Wallet funded with {format_usd(mnee_amount)} USD")
        return True

    def open_transfer_modal(self) -> None:
        if self.wallet is not None:
            self.transfer_modal_open = True

    def close_transfer_modal(self) -> None:
        self.transfer_modal_open = False

    async def submit_transfer(self) -> bool:
        """Send the transfer described by the form to its recipient."""
        if self.wallet is None:
            self._notify("error", "Create a USD wallet first")
            return False
        try:
            amount = self._validate_transfer()
        except ValidationError as exc:
            self._notify("error", str(exc))
            return False
        if not self._begin(PanelActivity.TRANSFERRING):
            return False

        address, wallet = self.address, self.wallet
        recipient = self.form.recipient.strip()
        description = self.form.description.strip() or self.default_description
        try:
            tx = await self.client.create_transaction(
                wallet.wallet_id, recipient, amount, description
            )
            updated = wallet.model_copy(update={"balance_usd": wallet.balance_usd - amount})
            record = TransactionRecord(
                id=tx.transaction_id,
                description=description,
                amount=amount,
                timestamp=int(tx.timestamp.timestamp() * 1000),
                status=tx.status,
                transaction_id=tx.transaction_id,
                recipient=recipient,
            )
            history = [record, *self.transactions]
            # History first: a debit is never saved without its record.
            self.persistence.save_transactions(address, history)
            self.persistence.save_wallet(address, updated)
        except AuraWalletError as exc:
            self._notify("error", f"Transfer failed: {exc}")
            return False
        finally:
            self.activity = PanelActivity.IDLE

        if address != self.address:
            return True
        self.wallet = updated
        self.transactions = history
        self.form.reset()
        self.transfer_modal_open = False
        self._notify("success", "USD transfer completed successfully!")
        return True

    async def refresh_stats(self) -> StatsSnapshot | None:
        """Reload the stats snapshot. Failures are logged and keep the old snapshot."""
        if self.wallet is None:
            return None
        try:
            self.stats = await self.client.get_stats(self.wallet.wallet_id)
        except AuraWalletError:
            logger.warning("Failed to fetch AURA stats for %s", self.wallet.wallet_id, exc_info=True)
        return self.stats

    # -- internals ----------------------------------------------------------

    def _validate_transfer(self) -> Decimal:
        amount = parse_amount(self.form.amount)
        if not self.form.recipient.strip():
            raise ValidationError("Please enter recipient wallet ID")
        if amount > self.wallet.balance_usd:
            raise ValidationError("Insufficient USD balance")
        return amount

    def _begin(self, activity: PanelActivity) -> bool:
        if self.is_busy:
            logger.warning(
                "Ignoring %s request while %s is in progress", activity.value, self.activity.value
            )
            return False
        self.activity = activity
        return True

    def _notify(self, level: str, message: str) -> None:
        notification = Notification(level=level, message=message)
        self.notifications.append(notification)
        if level == "error":
            logger.warning("Wallet panel error: %s", message)
        else:
            logger.info("Wallet panel: %s", message)
        if self._notifier is not None:
            self._notifier(notification)
