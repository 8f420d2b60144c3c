"""
Hearthstone - Remote sync.

Supabase-backed profile store, offline retry queue and partner linking.
Nothing in the engine waits on this layer.
"""

from hearthstone.sync.client import get_client
from hearthstone.sync.partner import PartnerLink, PartnerLinker, generate_invite_code
from hearthstone.sync.profiles import RemoteProfileStore
from hearthstone.sync.queue import QueueItem, SyncQueue

__all__ = [
    "get_client",
    "PartnerLink",
    "PartnerLinker",
    "generate_invite_code",
    "RemoteProfileStore",
    "QueueItem",
    "SyncQueue",
]
