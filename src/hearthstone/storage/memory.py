"""
In-memory key-value store.

Values are round-tripped through the codec on every write so callers
get the same date handling (and the same copy semantics) as on disk.
"""

from typing import Any

from hearthstone.storage import codec


class MemoryStore:
    """Dict-backed KeyValueStore."""

    def __init__(self, initial: dict[str, Any] | None = None):
        self._data: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self._data[key] = codec.dumps(value)

    async def get(self, key: str) -> Any | None:
        raw = self._data.get(key)
        return codec.loads(raw) if raw is not None else None

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = codec.dumps(value)

    async def remove(self, key: str) -> None:
        self._data.pop(key, None)

    async def set_many(self, entries: dict[str, Any]) -> None:
        # Encode everything first so a bad value leaves the store untouched
        encoded = {key: codec.dumps(value) for key, value in entries.items()}
        self._data.update(encoded)

    def keys(self) -> list[str]:
        return sorted(self._data)

    def raw(self, key: str) -> str | None:
        """Encoded JSON text for a key (debugging and tests)."""
        return self._data.get(key)
