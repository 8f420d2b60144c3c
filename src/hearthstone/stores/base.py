"""
Shared persistence plumbing for the owning stores.

Every store keeps its state in memory and snapshots it to one key of
a KeyValueStore. Subclasses set STORAGE_KEY and implement to_state()
and load_state().
"""

import logging
from datetime import datetime
from typing import Any, Callable

from hearthstone.storage import KeyValueStore

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class PersistentStore:
    """Base class for stores that snapshot to a KeyValueStore."""

    STORAGE_KEY: str = ""

    def __init__(self, clock: Clock | None = None):
        self._clock = clock or datetime.now

    def now(self) -> datetime:
        return self._clock()

    def to_state(self) -> dict[str, Any]:
        raise NotImplementedError

    def load_state(self, state: dict[str, Any]) -> None:
        raise NotImplementedError

    async def save(self, kv: KeyValueStore) -> None:
        await kv.set(self.STORAGE_KEY, self.to_state())

    async def load(self, kv: KeyValueStore) -> bool:
        """
        Restore state from the key-value store.

        Returns:
            True if a snapshot was found and loaded
        """
        state = await kv.get(self.STORAGE_KEY)
        if state is None:
            return False
        self.load_state(state)
        logger.debug(f"Loaded {self.STORAGE_KEY}")
        return True
