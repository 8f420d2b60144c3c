"""
Key-Value Store Protocol.

Defines the abstract persistence interface the stores write through.
Values are JSON-compatible trees; datetimes are handled by the codec
in storage/codec.py, so implementations only ever see plain JSON.

Implementations:
- MemoryStore: process-local dict (tests, throwaway sessions)
- JsonFileStore: one <key>.json file per key under a directory
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """
    Abstract async key -> JSON blob store.

    get() returns None for a missing key. remove() of a missing key is
    a no-op. set_many() writes every entry or none of them where the
    backend allows it.
    """

    async def get(self, key: str) -> Any | None:
        ...

    async def set(self, key: str, value: Any) -> None:
        ...

    async def remove(self, key: str) -> None:
        ...

    async def set_many(self, entries: dict[str, Any]) -> None:
        ...
