"""
In-memory store adapters.

Kingdoms are kept in serialized form so every read returns an independent
copy, the same as a real database round-trip would.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from kingdom_sim.events.event_models import ChainChoice, Event
from kingdom_sim.kingdom.kingdom import Kingdom
from kingdom_sim.storage.interfaces import EventStore, KingdomStore

logger = logging.getLogger(__name__)


class InMemoryKingdomStore(KingdomStore):

    def __init__(self):
        self._kingdoms: dict[str, dict[str, Any]] = {}

    def find_by_id(self, kingdom_id: str) -> Optional[Kingdom]:
        data = self._kingdoms.get(kingdom_id)
        return Kingdom.from_dict(data) if data is not None else None

    def find_by_name(self, name: str) -> Optional[Kingdom]:
        for data in self._kingdoms.values():
            if data["name"] == name:
                return Kingdom.from_dict(data)
        return None

    def save(self, kingdom: Kingdom) -> None:
        self._kingdoms[kingdom.id] = kingdom.to_dict()

    def exists(self, kingdom_id: str) -> bool:
        return kingdom_id in self._kingdoms

    def clear(self) -> None:
        self._kingdoms.clear()


@dataclass
class StoredEvent:
    """An event with its per-kingdom bookkeeping."""
    event: Event
    active_for_kingdoms: set[str] = field(default_factory=set)
    kingdoms_processed: set[str] = field(default_factory=set)


@dataclass
class ChainProgress:
    choices: list[ChainChoice] = field(default_factory=list)
    completed_event_ids: list[str] = field(default_factory=list)


class InMemoryEventStore(EventStore):

    def __init__(self):
        self._events: dict[str, StoredEvent] = {}
        self._chain_progress: dict[str, ChainProgress] = {}

    @staticmethod
    def _progress_key(chain_id: str, kingdom_id: str) -> str:
        return f"{chain_id}:{kingdom_id}"

    def find_by_id(self, event_id: str) -> Optional[Event]:
        stored = self._events.get(event_id)
        return stored.event if stored else None

    def save(self, event: Event) -> None:
        stored = self._events.get(event.id)
        if stored is None:
            self._events[event.id] = StoredEvent(event=event)
        else:
            stored.event = event

    def save_all(self, events: list[Event]) -> None:
        for event in events:
            self.save(event)

    def find_active_events(self, kingdom_id: str) -> list[Event]:
        return [
            stored.event
            for stored in self._events.values()
            if kingdom_id in stored.active_for_kingdoms
            and kingdom_id not in stored.kingdoms_processed
        ]

    def activate_for_kingdom(self, event_id: str, kingdom_id: str) -> None:
        stored = self._events.get(event_id)
        if stored is None:
            raise KeyError(f"Event not found: {event_id}")
        stored.active_for_kingdoms.add(kingdom_id)

    def mark_as_processed(self, event_id: str, kingdom_id: str) -> None:
        stored = self._events.get(event_id)
        if stored is None:
            raise KeyError(f"Event not found: {event_id}")
        stored.kingdoms_processed.add(kingdom_id)
        stored.active_for_kingdoms.discard(kingdom_id)

        chain_id = stored.event.chain_id
        if chain_id is not None:
            progress = self._chain_progress.setdefault(
                self._progress_key(chain_id, kingdom_id), ChainProgress()
            )
            if event_id not in progress.completed_event_ids:
                progress.completed_event_ids.append(event_id)

    def find_by_chain_id(self, chain_id: str) -> list[Event]:
        events = [s.event for s in self._events.values() if s.event.chain_id == chain_id]
        return sorted(events, key=lambda e: e.chain_position or 0)

    def get_next_event_in_chain(self, event_id: str) -> Optional[Event]:
        event = self.find_by_id(event_id)
        if event is None or event.next_event_id is None:
            return None
        return self.find_by_id(event.next_event_id)

    def save_chain_choice(self, kingdom_id: str, chain_id: str, choice: ChainChoice) -> None:
        progress = self._chain_progress.setdefault(
            self._progress_key(chain_id, kingdom_id), ChainProgress()
        )
        progress.choices.append(choice)

    def get_chain_choices(self, kingdom_id: str, chain_id: str) -> list[ChainChoice]:
        progress = self._chain_progress.get(self._progress_key(chain_id, kingdom_id))
        return list(progress.choices) if progress else []

    def is_chain_complete(self, kingdom_id: str, chain_id: str) -> bool:
        events = self.find_by_chain_id(chain_id)
        if not events:
            return False
        progress = self._chain_progress.get(self._progress_key(chain_id, kingdom_id))
        return progress is not None and events[-1].id in progress.completed_event_ids

    def reset_chain(self, kingdom_id: str, chain_id: str) -> None:
        for stored in self._events.values():
            if stored.event.chain_id == chain_id:
                stored.active_for_kingdoms.discard(kingdom_id)
                stored.kingdoms_processed.discard(kingdom_id)
        self._chain_progress.pop(self._progress_key(chain_id, kingdom_id), None)

    def clear(self) -> None:
        self._events.clear()
        self._chain_progress.clear()
