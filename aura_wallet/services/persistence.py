"""Address-keyed persistence for the wallet panel.

Each connected address owns two keys in the store:

    <namespace>_wallet_<address>        -> WalletRecord JSON
    <namespace>_transactions_<address>  -> list[TransactionRecord] JSON, newest first

Values are overwritten wholesale on every save, and a failed write raises
PersistenceWriteError. Unreadable values and wallet records not marked as
created are logged and treated as if nothing had been saved.
"""

import json
import logging

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from aura_wallet.config import settings
from aura_wallet.core.exceptions import PersistenceParseError, PersistenceWriteError
from aura_wallet.schemas.wallet import TransactionRecord, WalletRecord
from aura_wallet.storage import KeyValueStore

logger = logging.getLogger(__name__)

_transactions_adapter = TypeAdapter(list[TransactionRecord])


class WalletPersistence:
    """Reads and writes one address's wallet and transaction history."""

    def __init__(self, store: KeyValueStore, namespace: str | None = None):
        self.store = store
        self.namespace = namespace or settings.storage_namespace

    def wallet_key(self, address: str) -> str:
        return f"{self.namespace}_wallet_{address}"

    def transactions_key(self, address: str) -> str:
        return f"{self.namespace}_transactions_{address}"

    # -- wallet -------------------------------------------------------------

    def load_wallet(self, address: str) -> WalletRecord | None:
        key = self.wallet_key(address)
        try:
            raw = self._read(key)
            if raw is None:
                return None
            record = _decode_wallet(key, raw)
        except PersistenceParseError as exc:
            logger.warning("Failed to parse saved AURA wallet: %s", exc)
            return None
        if not record.is_created:
            logger.info("Ignoring saved AURA wallet at '%s': not created", key)
            return None
        return record

    def save_wallet(self, address: str, wallet: WalletRecord) -> None:
        self._write(self.wallet_key(address), wallet.model_dump_json(by_alias=True))

    # -- transactions -------------------------------------------------------

    def load_transactions(self, address: str) -> list[TransactionRecord]:
        key = self.transactions_key(address)
        try:
            raw = self._read(key)
            if raw is None:
                return []
            return _decode_transactions(key, raw)
        except PersistenceParseError as exc:
            logger.warning("Failed to parse saved AURA transactions: %s", exc)
            return []

    def save_transactions(self, address: str, transactions: list[TransactionRecord]) -> None:
        payload = _transactions_adapter.dump_json(transactions, by_alias=True)
        self._write(self.transactions_key(address), payload.decode("utf-8"))

    # -- store access -------------------------------------------------------

    def _read(self, key: str) -> str | None:
        try:
            return self.store.get(key)
        except UnicodeDecodeError as exc:
            raise PersistenceParseError(key, "not valid UTF-8 text") from exc

    def _write(self, key: str, value: str) -> None:
        try:
            self.store.put(key, value)
        except OSError as exc:
            logger.error("Failed to save AURA state at '%s': %s", key, exc)
            raise PersistenceWriteError(key, str(exc)) from exc


def _decode_wallet(key: str, raw: str) -> WalletRecord:
    try:
        return WalletRecord.model_validate(json.loads(raw))
    except json.JSONDecodeError as exc:
        raise PersistenceParseError(key, f"invalid JSON ({exc.msg})") from exc
    except PydanticValidationError as exc:
        raise PersistenceParseError(key, f"{exc.error_count()} invalid field(s)") from exc


def _decode_transactions(key: str, raw: str) -> list[TransactionRecord]:
    try:
        return _transactions_adapter.validate_python(json.loads(raw))
    except json.JSONDecodeError as exc:
        raise PersistenceParseError(key, f"invalid JSON ({exc.msg})") from exc
    except PydanticValidationError as exc:
        raise PersistenceParseError(key, f"{exc.error_count()} invalid field(s)") from exc
