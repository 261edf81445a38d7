from pathlib import Path
from urllib.parse import quote, unquote


class JsonFileStore:
    """File-backed key-value store, one file per key.

    Files are stored flat under the root directory:
        root/aura_wallet_0xABC.json

    Keys are percent-encoded so any address is a safe file name. Values are
    written verbatim; the store never inspects them.
    """

    suffix = ".json"

    def __init__(self, root_dir: str):
        self.root = Path(root_dir)
        self.root.mkdir(parents=True, exist_ok=True)

    def get(self, key: str) -> str | None:
        """Return the stored text, or None if the key was never written."""
        path = self._key_to_path(key)
        if path.is_file():
            return path.read_text(encoding="utf-8")
        return None

    def put(self, key: str, value: str) -> None:
        path = self._key_to_path(key)
        tmp = path.with_name(path.name + ".tmp")
        tmp.write_text(value, encoding="utf-8")
        tmp.replace(path)

    def delete(self, key: str) -> bool:
        """Delete a key. Returns True if deleted, False if not found."""
        path = self._key_to_path(key)
        if path.is_file():
            path.unlink()
            return True
        return False

    def exists(self, key: str) -> bool:
        return self._key_to_path(key).is_file()

    def keys(self, prefix: str = "") -> list[str]:
        found = []
        for path in self.root.glob(f"*{self.suffix}"):
            key = unquote(path.name[: -len(self.suffix)])
            if key.startswith(prefix):
                found.append(key)
        return sorted(found)

    def _key_to_path(self, key: str) -> Path:
        if not key:
            raise ValueError("Store key must be a non-empty string")
        return self.root / f"{quote(key, safe='')}{self.suffix}"
