"""
Event chain manager.

Turn-level orchestration of event chains:
- Deciding which registered chains spawn this turn
- Resolving a player's choice on a chain event
- Granting the completion reward when a chain ends

The only state held is the last turn each chain spawned, which the caller
persists with to_dict/from_dict between sessions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Optional

from kingdom_sim.data_models import DiceRoller
from kingdom_sim.events.chain_service import ChainCompletionReward, EventChainService
from kingdom_sim.events.chains import CHAIN_FACTORIES
from kingdom_sim.events.event_models import ChainContext, Event

if TYPE_CHECKING:
    from kingdom_sim.kingdom.kingdom import Kingdom

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChainSpawnCondition:
    """When a chain may begin. Unset bounds are not checked."""
    probability: float
    cooldown_turns: int
    min_turn: Optional[int] = None
    max_turn: Optional[int] = None
    min_stability: Optional[float] = None
    max_stability: Optional[float] = None
    min_gold: Optional[float] = None
    min_influence: Optional[float] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ChainSpawnCondition:
        return cls(
            probability=float(data["probability"]),
            cooldown_turns=int(data.get("cooldown_turns", 0)),
            min_turn=data.get("min_turn"),
            max_turn=data.get("max_turn"),
            min_stability=data.get("min_stability"),
            max_stability=data.get("max_stability"),
            min_gold=data.get("min_gold"),
            min_influence=data.get("min_influence"),
        )


DEFAULT_SPAWN_CONDITIONS: dict[str, ChainSpawnCondition] = {
    "noble_rebellion": ChainSpawnCondition(
        min_turn=10,
        max_turn=100,
        min_stability=0,
        max_stability=60,
        min_influence=100,
        probability=0.3,
        cooldown_turns=20,
    ),
    "merchant_expansion": ChainSpawnCondition(
        min_turn=15,
        min_gold=300,
        min_influence=150,
        probability=0.4,
        cooldown_turns=25,
    ),
    "religious_awakening": ChainSpawnCondition(
        min_turn=20,
        min_stability=30,
        probability=0.35,
        cooldown_turns=30,
    ),
}


@dataclass
class ChainStepResult:
    """Outcome of resolving one choice on a chain event."""
    success: bool
    message: str = ""
    next_event_id: Optional[str] = None
    modifiers: dict[str, str] = field(default_factory=dict)
    chain_completed: bool = False
    reward: Optional[ChainCompletionReward] = None


class EventChainManager:
    """
    Spawns chains and drives them to completion.

    Args:
        chain_service: Pure chain rules
        spawn_conditions: Spawn rules per chain id
        chain_factories: Chain id -> factory for the chain's linked events
        rng: Random source exposing random(); defaults to DiceRoller
    """

    def __init__(
        self,
        chain_service: Optional[EventChainService] = None,
        spawn_conditions: Optional[dict[str, ChainSpawnCondition]] = None,
        chain_factories: Optional[dict[str, Callable[[], list[Event]]]] = None,
        rng: Any = None,
    ):
        self.chain_service = chain_service or EventChainService()
        self.spawn_conditions = (
            spawn_conditions if spawn_conditions is not None else dict(DEFAULT_SPAWN_CONDITIONS)
        )
        self.chain_factories = (
            chain_factories if chain_factories is not None else dict(CHAIN_FACTORIES)
        )
        self.rng = rng or DiceRoller()
        self.last_spawn_turn: dict[str, int] = {}

    # =========================================================================
    # SPAWNING
    # =========================================================================

    def check_and_spawn_chains(self, kingdom: Kingdom, current_turn: int) -> list[Event]:
        """
        Roll for every registered chain whose conditions hold this turn.

        Returns:
            The first event of each chain that spawned
        """
        spawned: list[Event] = []
        stability = kingdom.get_total_stability()

        for chain_id, factory in self.chain_factories.items():
            condition = self.spawn_conditions.get(chain_id)
            if condition is None:
                continue
            if not self._conditions_met(chain_id, condition, kingdom, stability, current_turn):
                continue

            roll = self.rng.random(reason=f"spawn {chain_id}")
            if roll >= condition.probability:
                continue

            events = factory()
            if not events:
                logger.warning(f"Chain {chain_id} has no events, skipping")
                continue

            self.last_spawn_turn[chain_id] = current_turn
            spawned.append(events[0])
            logger.info(f"Chain {chain_id} spawned for {kingdom.name} on turn {current_turn}")

        return spawned

    def _conditions_met(
        self,
        chain_id: str,
        condition: ChainSpawnCondition,
        kingdom: Kingdom,
        stability: float,
        current_turn: int,
    ) -> bool:
        if condition.min_turn is not None and current_turn < condition.min_turn:
            return False
        if condition.max_turn is not None and current_turn > condition.max_turn:
            return False
        if condition.min_stability is not None and stability < condition.min_stability:
            return False
        if condition.max_stability is not None and stability > condition.max_stability:
            return False
        if condition.min_gold is not None and kingdom.resources.gold < condition.min_gold:
            return False
        if (
            condition.min_influence is not None
            and kingdom.resources.influence < condition.min_influence
        ):
            return False

        # Cooldown counts from turn 0 for a chain that has never spawned.
        last_spawn = self.last_spawn_turn.get(chain_id, 0)
        if current_turn - last_spawn < condition.cooldown_turns:
            return False
        return True

    # =========================================================================
    # RESOLUTION
    # =========================================================================

    def resolve_chain_choice(
        self,
        kingdom: Kingdom,
        event: Event,
        choice_id: str,
        context: ChainContext,
    ) -> ChainStepResult:
        """
        Apply a player's choice on a chain event.

        Fails softly, with the kingdom untouched, when the choice does not
        exist or its requirements are not met. Otherwise applies the
        immediate effect, counts the event as completed, records the choice
        and, on the chain's last event, grants the completion reward.
        """
        choice = event.get_choice(choice_id)
        if choice is None:
            return ChainStepResult(success=False, message=f"Invalid choice: {choice_id}")
        if not choice.can_be_chosen(kingdom.resources):
            return ChainStepResult(
                success=False,
                message=f"Requirements not met for choice: {choice_id}",
            )

        kingdom.apply_consequence(choice.immediate_effect)
        kingdom.increment_completed_events()
        outcome = self.chain_service.process_chain_choice(event, choice, context)

        result = ChainStepResult(
            success=True,
            message=choice.immediate_effect.description,
            next_event_id=outcome.next_event_id,
            modifiers=outcome.modifiers,
        )
        if event.is_part_of_chain() and self.chain_service.is_chain_complete(event):
            result.chain_completed = True
            result.reward = self.process_chain_completion(kingdom, context.chain_id, context)
        return result

    def process_chain_completion(
        self,
        kingdom: Kingdom,
        chain_id: str,
        context: ChainContext,
    ) -> Optional[ChainCompletionReward]:
        """Grant the reward for the path taken; None if the chain has none."""
        reward = self.chain_service.get_chain_completion_reward(chain_id, context)
        if reward is None:
            logger.info(f"Chain {chain_id} completed with no reward")
            return None

        kingdom.adjust_resources(reward.resources)
        # Unlock ids are reported but not applied to the kingdom.
        logger.info(
            f"Chain {chain_id} completed for {kingdom.name}: {reward.title} - "
            f"{reward.description} (unlocks: {', '.join(reward.unlocks) or 'none'})"
        )
        return reward

    # =========================================================================
    # PERSISTENCE
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        return {"last_spawn_turn": dict(self.last_spawn_turn)}

    def from_dict(self, data: dict[str, Any]) -> None:
        """Restore spawn bookkeeping saved with to_dict."""
        self.last_spawn_turn = {
            chain_id: int(turn) for chain_id, turn in data.get("last_spawn_turn", {}).items()
        }
