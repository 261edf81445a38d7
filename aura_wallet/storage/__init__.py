"""Key-value backends for persisted wallet state.

Every backend exposes ``get``, ``put``, ``delete``, ``exists`` and ``keys``
over string keys and string values.
"""

from typing import Protocol


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def put(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> bool: ...

    def exists(self, key: str) -> bool: ...

    def keys(self, prefix: str = "") -> list[str]: ...
