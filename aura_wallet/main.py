"""Reference AURA Infra API server backed by the simulated client.

Serves the routes AuraApiClient calls, so the live client can be exercised
end to end without the real payments backend:

    uvicorn aura_wallet.main:app --port 8010
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from aura_wallet import __version__
from aura_wallet.api.wallets import router as wallets_router
from aura_wallet.config import settings
from aura_wallet.core.exceptions import ServiceError
from aura_wallet.services.wallet_service import SimulatedAuraClient

logger = logging.getLogger(__name__)


def create_app(client=None, api_key: str | None = None) -> FastAPI:
    """Create the AURA API app.

    Args:
        client: Object implementing the AURA operations (default: SimulatedAuraClient)
        api_key: Bearer key required on every request (default: AURA_API_KEY;
            empty disables the check)
    """
    app = FastAPI(title="AURA Infra (simulated)", version=__version__)
    app.state.aura_client = client or SimulatedAuraClient()
    app.state.api_key = settings.aura_api_key if api_key is None else api_key
    if not app.state.api_key:
        logger.warning("AURA API key not configured; bearer authentication is disabled")

    @app.exception_handler(ServiceError)
    async def _service_error_handler(request: Request, exc: ServiceError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.get("/health")
    async def health():
        return {"status": "healthy", "version": __version__}

    app.include_router(wallets_router)
    return app


app = create_app()
