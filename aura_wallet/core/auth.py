import secrets

from fastapi import Header, Request

from aura_wallet.core.exceptions import UnauthorizedError


def require_api_key(request: Request, authorization: str | None = Header(default=None)) -> None:
    """Check the bearer key against the app's configured AURA API key.

    An app created without a key accepts every request.
    """
    expected = request.app.state.api_key
    if not expected:
        return
    if not authorization or not authorization.startswith("Bearer "):
        raise UnauthorizedError("Missing bearer token")
    token = authorization[len("Bearer "):].strip()
    if not secrets.compare_digest(token.encode(), expected.encode()):
        raise UnauthorizedError()
