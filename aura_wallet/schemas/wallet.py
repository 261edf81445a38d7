from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

# Persisted state and the AURA wire format both use camelCase keys.
_CAMEL = {"alias_generator": to_camel, "populate_by_name": True}


class TransactionStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


# ---------------------------------------------------------------------------
# AURA Infra API shapes
# ---------------------------------------------------------------------------

class AuraWallet(BaseModel):
    wallet_id: str
    balance: Decimal = Field(default=Decimal("0"), ge=0)
    currency: str = "USD"
    status: str = "active"
    created_at: datetime

    model_config = _CAMEL


class AuraTransaction(BaseModel):
    transaction_id: str
    from_wallet: str
    to_wallet: str | None = None
    amount: Decimal = Field(..., gt=0)
    currency: str = "USD"
    status: TransactionStatus
    timestamp: datetime
    description: str | None = None

    model_config = _CAMEL


class StatsSnapshot(BaseModel):
    total_transactions: int
    total_volume: Decimal
    currency: str = "USD"
    active_wallets: int
    period: str = "last_30_days"

    model_config = _CAMEL


class CreateWalletRequest(BaseModel):
    agent_id: str = Field(..., min_length=1)

    model_config = _CAMEL


class CreateTransactionRequest(BaseModel):
    from_wallet: str = Field(..., min_length=1)
    to_wallet: str = Field(..., min_length=1)
    amount: Decimal = Field(..., gt=0)
    description: str | None = None

    model_config = _CAMEL


# ---------------------------------------------------------------------------
# Panel state mirrored to the key-value store
# ---------------------------------------------------------------------------

class WalletRecord(BaseModel):
    """The USD wallet owned by one connected crypto address."""

    wallet_id: str
    balance_usd: Decimal = Field(default=Decimal("0"), ge=0)
    is_created: bool = True

    model_config = _CAMEL


class TransactionRecord(BaseModel):
    """One completed transfer as shown in the panel history."""

    id: str
    description: str
    amount: Decimal = Field(..., gt=0)
    timestamp: int  # epoch milliseconds
    status: TransactionStatus
    transaction_id: str
    recipient: str | None = None

    model_config = _CAMEL
