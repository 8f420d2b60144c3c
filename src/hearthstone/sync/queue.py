"""
Offline sync queue.

Remote writes go through SyncQueue.push(). A failed write is recorded
in the key-value store and replayed by flush(); local state is already
authoritative, so nothing waits on the remote side.
"""

import logging
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from hearthstone.errors import SyncError
from hearthstone.ids import generate_id
from hearthstone.storage import SYNC_QUEUE_KEY, KeyValueStore
from hearthstone.sync.profiles import RemoteProfileStore

logger = logging.getLogger(__name__)

SyncType = Literal["inventory", "mealplan", "progress", "profile"]
SyncAction = Literal["insert", "update", "delete"]


class QueueItem(BaseModel):
    """One pending remote write."""

    id: str = Field(default_factory=lambda: generate_id("queue"))
    type: SyncType
    action: SyncAction
    data: dict[str, Any]
    timestamp: datetime = Field(default_factory=datetime.now)


class SyncQueue:
    """Fire-and-forget remote writes with a persisted retry queue."""

    def __init__(self, kv: KeyValueStore, remote: RemoteProfileStore | None = None):
        self.kv = kv
        self.remote = remote

    async def items(self) -> list[QueueItem]:
        raw = await self.kv.get(SYNC_QUEUE_KEY) or []
        return [QueueItem.model_validate(entry) for entry in raw]

    async def _store(self, items: list[QueueItem]) -> None:
        if items:
            await self.kv.set(SYNC_QUEUE_KEY, [i.model_dump() for i in items])
        else:
            await self.kv.remove(SYNC_QUEUE_KEY)

    async def enqueue(self, type: SyncType, action: SyncAction, data: dict[str, Any]) -> QueueItem:
        item = QueueItem(type=type, action=action, data=data)
        items = await self.items()
        items.append(item)
        await self._store(items)
        logger.info(f"Queued {action} {type} for retry ({len(items)} pending)")
        return item

    async def push(self, type: SyncType, action: SyncAction, data: dict[str, Any]) -> bool:
        """
        Try a remote write now; queue it on failure.

        Returns:
            True if the write reached the remote store
        """
        if self.remote is None:
            await self.enqueue(type, action, data)
            return False
        try:
            await self.remote.apply(type, action, data)
            return True
        except SyncError as e:
            logger.warning(f"Remote {action} {type} failed, queueing: {e}")
            await self.enqueue(type, action, data)
            return False

    async def flush(self) -> int:
        """
        Replay queued writes oldest first. Items that fail again stay queued.

        Returns:
            Number of writes that succeeded
        """
        items = await self.items()
        if not items or self.remote is None:
            return 0

        remaining: list[QueueItem] = []
        sent = 0
        for item in sorted(items, key=lambda i: i.timestamp):
            # The codec revives ISO strings as datetimes; send JSON again
            data = item.model_dump(mode="json")["data"]
            try:
                await self.remote.apply(item.type, item.action, data)
                sent += 1
            except SyncError as e:
                logger.warning(f"Retry failed for {item.id}: {e}")
                remaining.append(item)

        await self._store(remaining)
        logger.info(f"Sync flush: {sent} sent, {len(remaining)} pending")
        return sent

    async def clear(self) -> None:
        await self.kv.remove(SYNC_QUEUE_KEY)
