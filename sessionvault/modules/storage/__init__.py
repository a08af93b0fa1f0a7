"""
Storage Module - Black Box Interface

Purpose: Abstract session persistence
Interface: Store.store(), Store.retrieve(), StorageModule.connect()
Hidden: Redis specifics, key prefixes, TTL handling

Can be replaced with any storage backend without affecting other modules.
"""

from ..session.interfaces import Store
from .store import InMemoryStore, RedisStore, StorageModule

__all__ = ["Store", "RedisStore", "InMemoryStore", "StorageModule"]
