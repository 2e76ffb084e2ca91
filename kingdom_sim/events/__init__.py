"""
Narrative events and the event-chain state machine.
"""

from kingdom_sim.events.chain_manager import (
    DEFAULT_SPAWN_CONDITIONS,
    ChainSpawnCondition,
    ChainStepResult,
    EventChainManager,
)
from kingdom_sim.events.chain_service import (
    DEFAULT_CHAIN_REWARDS,
    ChainChoiceOutcome,
    ChainCompletionReward,
    ChainConstructionError,
    ChainPath,
    EventChainService,
    determine_chain_path,
    infer_chain_path,
)
from kingdom_sim.events.event_models import (
    ChainChoice,
    ChainContext,
    ChainLink,
    ChoiceChainData,
    Event,
    EventChoice,
    EventConsequence,
    ResourceRequirement,
    link_events,
)

__all__ = [
    # Models
    "ChainChoice",
    "ChainContext",
    "ChainLink",
    "ChoiceChainData",
    "Event",
    "EventChoice",
    "EventConsequence",
    "ResourceRequirement",
    "link_events",
    # Chain service
    "ChainChoiceOutcome",
    "ChainCompletionReward",
    "ChainConstructionError",
    "ChainPath",
    "DEFAULT_CHAIN_REWARDS",
    "EventChainService",
    "determine_chain_path",
    "infer_chain_path",
    # Manager
    "ChainSpawnCondition",
    "ChainStepResult",
    "DEFAULT_SPAWN_CONDITIONS",
    "EventChainManager",
]
