import logging
import warnings

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Environment
    environment: str = "development"  # development | test | production

    # Persisted wallet state
    storage_namespace: str = "aura"
    store_backend: str = "file"  # file | memory
    store_path: str = "./data/aura_store"

    # AURA Infra API
    aura_client_mode: str = "simulated"  # simulated | live
    aura_api_base_url: str = "https://api.nanilabs.io"
    aura_api_key: str = ""
    aura_api_timeout_seconds: int = 30

    # Simulated latency (seconds)
    create_wallet_delay_seconds: float = 1.2
    transfer_delay_seconds: float = 1.8
    stats_delay_seconds: float = 0.8
    fund_delay_seconds: float = 1.5

    # Simulated transfer failures (0.05 = 5% of transfers fail)
    transfer_failure_rate: float = Field(default=0.05, ge=0.0, le=1.0)

    # Panel
    recent_transactions_limit: int = 5
    default_transfer_description: str = "Payment to contractor"

    # Logging
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()

_logger = logging.getLogger("aura_wallet.config")


def validate_settings(cfg: Settings) -> None:
    is_prod = cfg.environment.lower() in {"production", "prod"}

    if cfg.aura_client_mode == "live" and not cfg.aura_api_key:
        if is_prod:
            raise RuntimeError(
                "FATAL: AURA_CLIENT_MODE=live requires AURA_API_KEY. "
                "Set the key via the AURA_API_KEY environment variable before deploying to production."
            )
        warnings.warn(
            "AURA_CLIENT_MODE is 'live' but AURA_API_KEY is empty; "
            "requests to the AURA API will be rejected.",
            stacklevel=1,
        )

    if cfg.store_backend == "memory" and is_prod:
        _logger.warning(
            "STORE_BACKEND is 'memory'; wallet state will be lost on restart. "
            "Use STORE_BACKEND=file for persistent wallet state."
        )


validate_settings(settings)
