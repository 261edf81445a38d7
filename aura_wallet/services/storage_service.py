from aura_wallet.config import settings

# Singleton store instance
_store = None


def get_store():
    """Get or create the global key-value store.

    Uses a JSON file store under STORE_PATH when STORE_BACKEND=file,
    otherwise an in-process memory store.
    """
    global _store
    if _store is None:
        backend = settings.store_backend.lower()
        if backend == "file":
            from aura_wallet.storage.jsonfile import JsonFileStore
            _store = JsonFileStore(root_dir=settings.store_path)
        elif backend == "memory":
            from aura_wallet.storage.memory import MemoryStore
            _store = MemoryStore()
        else:
            raise ValueError(
                f"Unsupported STORE_BACKEND '{settings.store_backend}'. Supported: file, memory"
            )
    return _store


def reset_store() -> None:
    """Drop the cached store so the next get_store() re-reads settings."""
    global _store
    _store = None
