"""
Event chain service.

Pure chain logic:
- Linking authored events into a chain
- Recording choices into a ChainContext
- Inferring the path a player took through a chain
- Looking up the path's completion reward
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Optional, Sequence

from kingdom_sim.data_models import Resources
from kingdom_sim.events.event_models import (
    ChainChoice,
    ChainContext,
    Event,
    EventChoice,
    link_events,
)

logger = logging.getLogger(__name__)

DEFAULT_PATH = "default"

PEACEFUL_MARKERS = ("peaceful", "negotiate", "cooperate", "embrace")
AGGRESSIVE_MARKERS = ("force", "control", "suppress", "secular")


class ChainConstructionError(ValueError):
    """Raised when a chain cannot be built from the given events."""
    pass


class ChainPath(str, Enum):
    """Broad approach a player took through a chain."""
    PEACEFUL = "peaceful"
    AGGRESSIVE = "aggressive"


# =============================================================================
# REWARDS
# =============================================================================


@dataclass(frozen=True)
class ChainCompletionReward:
    """What a kingdom earns for finishing a chain along one path."""
    resources: Resources
    title: str
    description: str
    unlocks: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "resources": self.resources.to_dict(),
            "title": self.title,
            "description": self.description,
            "unlocks": list(self.unlocks),
        }


def _reward(title: str, description: str, unlocks: tuple[str, ...], **resources: float):
    return ChainCompletionReward(
        resources=Resources.from_dict(resources),
        title=title,
        description=description,
        unlocks=unlocks,
    )


# chain id -> path key for the (peaceful, aggressive) outcome
CHAIN_PATH_KEYS: dict[str, tuple[str, str]] = {
    "noble_rebellion": ("path_peaceful", "path_force"),
    "merchant_expansion": ("path_cooperation", "path_control"),
    "religious_awakening": ("path_embrace", "path_secular"),
}

DEFAULT_CHAIN_REWARDS: dict[str, dict[str, ChainCompletionReward]] = {
    "noble_rebellion": {
        "path_peaceful": _reward(
            "Diplomatic Victory",
            "Your peaceful resolution of the noble rebellion has earned you great respect.",
            ("diplomatic_advisor_upgrade",),
            gold=500, influence=200, loyalty=100, population=50,
        ),
        "path_force": _reward(
            "Iron Fist Victory",
            "You crushed the rebellion with force, establishing your dominance.",
            ("military_advisor_upgrade",),
            gold=200, loyalty=-50, population=-100, military_power=150,
        ),
    },
    "merchant_expansion": {
        "path_cooperation": _reward(
            "Economic Alliance",
            "Your cooperation with the merchant guild has created a thriving economy.",
            ("trade_routes", "merchant_quarter"),
            gold=1000, influence=150, loyalty=50, population=200,
        ),
        "path_control": _reward(
            "Royal Monopoly",
            "You have established royal control over all major trade.",
            ("royal_market",),
            gold=500, influence=100, population=100, military_power=50,
        ),
    },
    "religious_awakening": {
        "path_embrace": _reward(
            "Divine Blessing",
            "Your embrace of the religious movement has united the kingdom in faith.",
            ("grand_cathedral", "religious_advisor"),
            gold=300, influence=300, loyalty=200, population=150,
        ),
        "path_secular": _reward(
            "Enlightened Rule",
            "Your secular approach has modernized the kingdom.",
            ("university", "science_advisor"),
            gold=600, influence=50, loyalty=-25, population=50, military_power=100,
        ),
    },
}


# =============================================================================
# PATH INFERENCE
# =============================================================================


def infer_chain_path(choice_ids: Sequence[str]) -> ChainPath:
    """
    Classify a sequence of choice ids as peaceful or aggressive.

    Each id counts toward at most one side, peaceful markers being checked
    first. Peaceful wins only with a strictly larger count.
    """
    peaceful = 0
    aggressive = 0
    for choice_id in choice_ids:
        if any(marker in choice_id for marker in PEACEFUL_MARKERS):
            peaceful += 1
        elif any(marker in choice_id for marker in AGGRESSIVE_MARKERS):
            aggressive += 1
    return ChainPath.PEACEFUL if peaceful > aggressive else ChainPath.AGGRESSIVE


def determine_chain_path(chain_id: str, choice_ids: Sequence[str]) -> str:
    """Reward path key for a chain, or "default" for unregistered chains."""
    keys = CHAIN_PATH_KEYS.get(chain_id)
    if keys is None:
        return DEFAULT_PATH
    peaceful_key, aggressive_key = keys
    if infer_chain_path(choice_ids) == ChainPath.PEACEFUL:
        return peaceful_key
    return aggressive_key


# =============================================================================
# SERVICE
# =============================================================================


@dataclass
class ChainChoiceOutcome:
    """Where a chain goes after a choice. Empty for events outside any chain."""
    next_event_id: Optional[str] = None
    modifiers: dict[str, str] = field(default_factory=dict)


def generate_chain_id() -> str:
    return f"chain_{uuid.uuid4().hex[:12]}"


class EventChainService:
    """
    Stateless chain rules.

    Args:
        rewards: Reward table keyed by chain id then path key
        id_factory: Generates ids for chains built at runtime
    """

    def __init__(
        self,
        rewards: Optional[dict[str, dict[str, ChainCompletionReward]]] = None,
        id_factory: Callable[[], str] = generate_chain_id,
    ):
        self.rewards = rewards if rewards is not None else DEFAULT_CHAIN_REWARDS
        self.id_factory = id_factory

    def create_event_chain(self, events: Sequence[Event]) -> list[Event]:
        """
        Link events into a new chain.

        Raises:
            ChainConstructionError: If fewer than two events are given
        """
        if len(events) < 2:
            raise ChainConstructionError("Event chain must contain at least 2 events")

        chain_id = self.id_factory()
        linked = link_events(chain_id, events)

        logger.debug(f"Created chain {chain_id} with {len(linked)} events")
        return linked

    def get_next_in_chain(self, event: Event) -> Optional[str]:
        if not event.is_part_of_chain():
            return None
        return event.next_event_id

    def process_chain_choice(
        self,
        event: Event,
        choice: EventChoice,
        context: ChainContext,
        timestamp: Optional[datetime] = None,
    ) -> ChainChoiceOutcome:
        """Record a choice and report the chain's next step."""
        if not event.is_part_of_chain():
            return ChainChoiceOutcome()

        context.previous_choices.append(ChainChoice(
            event_id=event.id,
            choice_id=choice.id,
            timestamp=timestamp or datetime.now(),
        ))
        context.current_position = event.chain_position

        modifiers = {}
        if choice.next_event_modifier:
            modifiers["choice_modifier"] = choice.next_event_modifier

        return ChainChoiceOutcome(next_event_id=event.next_event_id, modifiers=modifiers)

    def get_chain_completion_reward(
        self, chain_id: str, context: ChainContext
    ) -> Optional[ChainCompletionReward]:
        chain_rewards = self.rewards.get(chain_id)
        if not chain_rewards:
            return None
        path = determine_chain_path(chain_id, context.choice_ids)
        return chain_rewards.get(path)

    def is_chain_complete(self, event: Event) -> bool:
        return event.next_event_id is None

    def get_chain_context(self, chain_id: str) -> ChainContext:
        return ChainContext(chain_id=chain_id, previous_choices=[], current_position=1)
