"""
Store interfaces and their in-memory and JSON file adapters.
"""

from kingdom_sim.storage.interfaces import EventStore, KingdomStore
from kingdom_sim.storage.json_store import JsonKingdomStore
from kingdom_sim.storage.memory_store import (
    InMemoryEventStore,
    InMemoryKingdomStore,
    StoredEvent,
)

__all__ = [
    "EventStore",
    "InMemoryEventStore",
    "InMemoryKingdomStore",
    "JsonKingdomStore",
    "KingdomStore",
    "StoredEvent",
]
