from fastapi import HTTPException, status


class AuraWalletError(Exception):
    """Base class for every error the wallet surfaces to the user."""


class ValidationError(AuraWalletError):
    """Bad user input, rejected before any service call."""


class ServiceError(AuraWalletError):
    """An AURA service operation failed."""


class PersistenceParseError(AuraWalletError):
    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Saved state at '{key}' is unreadable: {reason}")


class PersistenceWriteError(AuraWalletError):
    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Could not save state at '{key}': {reason}")


class UnauthorizedError(HTTPException):
    def __init__(self, detail: str = "Invalid or missing API key"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )
