from fastapi import APIRouter, Depends, Query, Request, status

from aura_wallet.core.auth import require_api_key
from aura_wallet.schemas.wallet import (
    AuraTransaction,
    AuraWallet,
    CreateTransactionRequest,
    CreateWalletRequest,
    StatsSnapshot,
)

router = APIRouter(tags=["aura"], dependencies=[Depends(require_api_key)])


def get_aura_client(request: Request):
    return request.app.state.aura_client


@router.post(
    "/wallets",
    response_model=AuraWallet,
    response_model_by_alias=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_wallet(req: CreateWalletRequest, client=Depends(get_aura_client)):
    return await client.create_wallet(req.agent_id)


@router.post(
    "/transactions",
    response_model=AuraTransaction,
    response_model_by_alias=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_transaction(req: CreateTransactionRequest, client=Depends(get_aura_client)):
    return await client.create_transaction(
        req.from_wallet, req.to_wallet, req.amount, req.description
    )


@router.get("/stats", response_model=StatsSnapshot, response_model_by_alias=True)
async def get_stats(
    wallet_id: str | None = Query(default=None, alias="walletId"),
    client=Depends(get_aura_client),
):
    return await client.get_stats(wallet_id)
