"""AURA Infra API client, the HTTP counterpart of SimulatedAuraClient."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from aura_wallet.core.exceptions import ServiceError
from aura_wallet.schemas.wallet import (
    AuraTransaction,
    AuraWallet,
    CreateTransactionRequest,
    CreateWalletRequest,
    StatsSnapshot,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class AuraApiClient:
    """Async client for the AURA Infra fiat payments API.

    Usage:
        client = AuraApiClient("https://api.nanilabs.io", api_key="...")
        wallet = await client.create_wallet("0xABC")
        tx = await client.create_transaction(wallet.wallet_id, "aura_contractor_1", 30)
    """

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        failure: str,
    ) -> Any:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.request(
                    method, path, json=json, params=params, headers=self._headers()
                )
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as exc:
            detail = _error_detail(exc.response) or failure
            logger.warning(
                "AURA API %s %s returned %d: %s",
                method, path, exc.response.status_code, detail,
            )
            raise ServiceError(detail) from exc
        except httpx.HTTPError as exc:
            logger.warning("AURA API %s %s unreachable: %s", method, path, exc)
            raise ServiceError(failure) from exc
        except ValueError as exc:
            logger.warning("AURA API %s %s returned a non-JSON body", method, path)
            raise ServiceError(failure) from exc

    async def create_wallet(self, agent_id: str) -> AuraWallet:
        failure = "Failed to create USD wallet"
        body = CreateWalletRequest(agent_id=agent_id).model_dump(mode="json", by_alias=True)
        data = await self._request("POST", "/wallets", json=body, failure=failure)
        return _parse(AuraWallet, data, failure)

    async def create_transaction(
        self,
        from_wallet: str,
        to_wallet: str,
        amount: Decimal | float | int | str,
        description: str | None = None,
    ) -> AuraTransaction:
        failure = "USD transfer failed"
        try:
            body = CreateTransactionRequest(
                from_wallet=from_wallet,
                to_wallet=to_wallet,
                amount=Decimal(str(amount)),
                description=description,
            ).model_dump(mode="json", by_alias=True)
        except (PydanticValidationError, ArithmeticError) as exc:
            raise ServiceError(f"{failure}: invalid amount {amount!r}") from exc
        data = await self._request("POST", "/transactions", json=body, failure=failure)
        return _parse(AuraTransaction, data, failure)

    async def get_stats(self, wallet_id: str | None = None) -> StatsSnapshot:
        failure = "Failed to fetch analytics"
        params = {"walletId": wallet_id} if wallet_id else None
        data = await self._request("GET", "/stats", params=params, failure=failure)
        return _parse(StatsSnapshot, data, failure)

    async def fund_from_crypto(
        self, wallet_id: str, mnee_amount: Decimal | float | int | str
    ) -> bool:
        """Crypto funding has no AURA API endpoint yet."""
        raise ServiceError(
            "Funding from crypto is not available through the AURA API. "
            "Set AURA_CLIENT_MODE=simulated for demo funding."
        )


def _error_detail(response: httpx.Response) -> str | None:
    try:
        data = response.json()
    except ValueError:
        return response.text or None
    if isinstance(data, dict) and isinstance(data.get("detail"), str):
        return data["detail"]
    return None


def _parse(model: type[ModelT], data: Any, failure: str) -> ModelT:
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        logger.warning(
            "AURA API returned an unexpected %s payload: %d invalid field(s)",
            model.__name__, exc.error_count(),
        )
        raise ServiceError(failure) from exc
