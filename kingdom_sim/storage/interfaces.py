"""
Persistence interfaces the simulation core depends on.

Adapters implement these; the core never touches storage directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from kingdom_sim.events.event_models import ChainChoice, Event
from kingdom_sim.kingdom.kingdom import Kingdom


class KingdomStore(ABC):
    """Load and save Kingdom aggregates."""

    @abstractmethod
    def find_by_id(self, kingdom_id: str) -> Optional[Kingdom]:
        pass

    @abstractmethod
    def find_by_name(self, name: str) -> Optional[Kingdom]:
        pass

    @abstractmethod
    def save(self, kingdom: Kingdom) -> None:
        pass

    @abstractmethod
    def exists(self, kingdom_id: str) -> bool:
        pass


class EventStore(ABC):
    """
    Events plus per-kingdom activation, processing and chain progress.
    """

    @abstractmethod
    def find_by_id(self, event_id: str) -> Optional[Event]:
        pass

    @abstractmethod
    def save(self, event: Event) -> None:
        pass

    @abstractmethod
    def find_active_events(self, kingdom_id: str) -> list[Event]:
        """Events activated for the kingdom and not yet processed by it."""
        pass

    @abstractmethod
    def activate_for_kingdom(self, event_id: str, kingdom_id: str) -> None:
        pass

    @abstractmethod
    def mark_as_processed(self, event_id: str, kingdom_id: str) -> None:
        pass

    @abstractmethod
    def find_by_chain_id(self, chain_id: str) -> list[Event]:
        """Chain events ordered by position."""
        pass

    @abstractmethod
    def save_chain_choice(self, kingdom_id: str, chain_id: str, choice: ChainChoice) -> None:
        pass

    @abstractmethod
    def get_chain_choices(self, kingdom_id: str, chain_id: str) -> list[ChainChoice]:
        pass

    @abstractmethod
    def is_chain_complete(self, kingdom_id: str, chain_id: str) -> bool:
        """True once the kingdom has processed the chain's last event."""
        pass

    @abstractmethod
    def reset_chain(self, kingdom_id: str, chain_id: str) -> None:
        """Forget the kingdom's activation, processing and choices for a chain."""
        pass
