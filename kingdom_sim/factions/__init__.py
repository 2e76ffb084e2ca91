"""
Faction dynamics for the kingdom simulation.

Approval-driven moods, relation-weighted impact propagation, faction power
and threshold-triggered unrest/rebellion events.
"""

from kingdom_sim.factions.faction_models import (
    DEFAULT_APPROVAL,
    MAX_APPROVAL,
    MIN_APPROVAL,
    ApprovalThresholds,
    Faction,
    FactionBonus,
    FactionEvent,
    FactionEventTemplate,
    UnknownFactionError,
    mood_for_approval,
    parse_faction_type,
)
from kingdom_sim.factions.faction_relations import (
    FactionRelationGraph,
    FactionRelationsLoader,
    RelationsLoadResult,
)
from kingdom_sim.factions.faction_service import (
    FactionService,
    round_half_up,
)

__all__ = [
    # Models
    "DEFAULT_APPROVAL",
    "MAX_APPROVAL",
    "MIN_APPROVAL",
    "ApprovalThresholds",
    "Faction",
    "FactionBonus",
    "FactionEvent",
    "FactionEventTemplate",
    "UnknownFactionError",
    "mood_for_approval",
    "parse_faction_type",
    # Relations
    "FactionRelationGraph",
    "FactionRelationsLoader",
    "RelationsLoadResult",
    # Service
    "FactionService",
    "round_half_up",
]
