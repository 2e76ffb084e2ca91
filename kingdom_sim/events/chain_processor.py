"""
Store-backed chain processing.

Wires the chain manager to a KingdomStore and an EventStore, one call per
player action: load, mutate, save.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from kingdom_sim.events.chain_manager import ChainStepResult, EventChainManager
from kingdom_sim.events.event_models import ChainContext, Event

if TYPE_CHECKING:
    from kingdom_sim.storage.interfaces import EventStore, KingdomStore

logger = logging.getLogger(__name__)


class ChainProcessor:
    """Runs spawn checks and chain choices against persistent stores."""

    def __init__(
        self,
        kingdom_store: KingdomStore,
        event_store: EventStore,
        manager: Optional[EventChainManager] = None,
    ):
        self.kingdom_store = kingdom_store
        self.event_store = event_store
        self.manager = manager or EventChainManager()

    def spawn_chains(self, kingdom_id: str, current_turn: int) -> list[Event]:
        """
        Roll for new chains and activate the first event of each for the kingdom.

        A chain the kingdom ran before starts over from a clean slate.

        Raises:
            KeyError: If the kingdom does not exist
        """
        kingdom = self.kingdom_store.find_by_id(kingdom_id)
        if kingdom is None:
            raise KeyError(f"Kingdom not found: {kingdom_id}")

        spawned = self.manager.check_and_spawn_chains(kingdom, current_turn)
        for first_event in spawned:
            factory = self.manager.chain_factories[first_event.chain_id]
            for event in factory():
                self.event_store.save(event)
            self.event_store.reset_chain(kingdom_id, first_event.chain_id)
            self.event_store.activate_for_kingdom(first_event.id, kingdom_id)
        return spawned

    def process_choice(self, kingdom_id: str, event_id: str, choice_id: str) -> ChainStepResult:
        """
        Resolve a choice on a chain event and persist the outcome.

        The event must be active and unprocessed for the kingdom. Nothing is
        saved when the result is unsuccessful.
        """
        kingdom = self.kingdom_store.find_by_id(kingdom_id)
        if kingdom is None:
            return ChainStepResult(success=False, message=f"Kingdom not found: {kingdom_id}")

        event = self.event_store.find_by_id(event_id)
        if event is None:
            return ChainStepResult(success=False, message=f"Event not found: {event_id}")
        if not event.is_part_of_chain():
            return ChainStepResult(
                success=False, message=f"Event {event_id} is not part of a chain"
            )
        active_ids = {e.id for e in self.event_store.find_active_events(kingdom_id)}
        if event_id not in active_ids:
            return ChainStepResult(
                success=False, message=f"Event {event_id} is not active for {kingdom_id}"
            )

        chain_id = event.chain_id
        context = ChainContext(
            chain_id=chain_id,
            previous_choices=self.event_store.get_chain_choices(kingdom_id, chain_id),
        )

        result = self.manager.resolve_chain_choice(kingdom, event, choice_id, context)
        if not result.success:
            return result

        self.event_store.save_chain_choice(kingdom_id, chain_id, context.previous_choices[-1])
        self.event_store.mark_as_processed(event_id, kingdom_id)
        if result.next_event_id and self.event_store.find_by_id(result.next_event_id):
            self.event_store.activate_for_kingdom(result.next_event_id, kingdom_id)

        self.kingdom_store.save(kingdom)
        logger.debug(f"Kingdom {kingdom_id} chose {choice_id} on {event_id}")
        return result
