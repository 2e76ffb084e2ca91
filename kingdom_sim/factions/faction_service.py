"""
Faction service.

Stateless rules over factions:
- Mood bonuses (resource multiplier, stability, kind-specific extras)
- Threshold-triggered unrest and rebellion events
- Cross-faction impact propagation over the relation graph
- Faction power
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import TYPE_CHECKING, Any, Optional, Union

from kingdom_sim.data_models import DiceRoller, EventSeverity, FactionMood, FactionType
from kingdom_sim.factions.faction_models import (
    ApprovalThresholds,
    Faction,
    FactionBonus,
    FactionEvent,
    UnknownFactionError,
    parse_faction_type,
)
from kingdom_sim.factions.faction_relations import FactionRelationGraph

if TYPE_CHECKING:
    from kingdom_sim.kingdom.kingdom import Kingdom

logger = logging.getLogger(__name__)

# Share of a change that leaks to related factions.
RELATION_PROPAGATION_FACTOR = 0.5

MOOD_BONUSES: dict[FactionMood, tuple[float, float]] = {
    FactionMood.HOSTILE: (0.6, -20),
    FactionMood.UNHAPPY: (0.8, -10),
    FactionMood.NEUTRAL: (1.0, 0),
    FactionMood.CONTENT: (1.1, 5),
    FactionMood.LOYAL: (1.2, 10),
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return math.floor(value + 0.5)


class FactionService:
    """
    Rules engine for faction moods, events and relations.

    Holds only the injected relation graph and random source; every kingdom
    is passed in and never retained.
    """

    def __init__(
        self,
        graph: Optional[FactionRelationGraph] = None,
        rng: Any = None,
    ):
        self.graph = graph or FactionRelationGraph()
        self.rng = rng or DiceRoller()

    # =========================================================================
    # BONUSES
    # =========================================================================

    def calculate_mood_bonus(self, faction: Faction) -> FactionBonus:
        """Bonuses granted by a faction in its current mood."""
        multiplier, stability = MOOD_BONUSES[faction.mood]
        extras: dict[str, float] = {}

        if faction.faction_type == FactionType.MERCHANTS:
            extras["trade_bonus"] = (multiplier - 1) * 2
        elif faction.faction_type == FactionType.MILITARY:
            extras["military_bonus"] = (multiplier - 1) * 1.5
        elif faction.faction_type == FactionType.COMMONERS:
            extras["production_bonus"] = (multiplier - 1) * 1.5

        return FactionBonus(
            resource_multiplier=multiplier,
            stability_bonus=stability,
            **extras,
        )

    # =========================================================================
    # EVENTS
    # =========================================================================

    def generate_faction_event(
        self,
        kingdom_id: str,
        faction: Faction,
        occurred_at: Optional[datetime] = None,
    ) -> Optional[FactionEvent]:
        """
        Produce an unrest or rebellion event if approval is low enough.

        At or below the rebellion cut-off a critical event is drawn from the
        kind's rebellion table; at or below the unrest cut-off a severe one
        from its unrest table. Anything higher yields None, including the
        discontent band.
        """
        thresholds = self.graph.thresholds(faction.faction_type)
        approval = faction.approval_rating

        if approval <= thresholds.rebellion:
            templates = self.graph.rebellion_events(faction.faction_type)
            severity = EventSeverity.CRITICAL
        elif approval <= thresholds.unrest:
            templates = self.graph.unrest_events(faction.faction_type)
            severity = EventSeverity.SEVERE
        else:
            return None

        template = self.rng.choice(
            templates, reason=f"{faction.faction_type.value} {severity.value} event"
        )
        logger.info(
            f"{faction.name} at approval {approval}: {template.event_type} ({severity.value})"
        )
        return FactionEvent(
            aggregate_id=kingdom_id,
            event_type=template.event_type,
            faction_type=faction.faction_type,
            description=template.description,
            severity=severity,
            occurred_at=occurred_at or datetime.now(),
        )

    # =========================================================================
    # RELATIONS
    # =========================================================================

    def calculate_faction_impact(
        self,
        kingdom: Kingdom,
        target: Union[str, FactionType],
        approval_change: float,
    ) -> dict[FactionType, int]:
        """
        Approval deltas caused by changing one faction.

        The target receives the full change; every other faction receives
        the change scaled by its relation to the target and halved, rounded.
        Nothing is applied to the kingdom.

        Raises:
            UnknownFactionError: If target is not a faction kind
        """
        target_type = parse_faction_type(target)
        if target_type not in kingdom.factions:
            raise UnknownFactionError(f"Faction {target_type.value} does not exist")

        impacts: dict[FactionType, int] = {target_type: approval_change}
        for other in kingdom.factions:
            if other == target_type:
                continue
            weight = self.graph.relation(target_type, other)
            impacts[other] = round_half_up(
                approval_change * weight * RELATION_PROPAGATION_FACTOR
            )

        logger.debug(f"Impact of {approval_change} on {target_type.value}: {impacts}")
        return impacts

    def get_faction_relations(self) -> dict[FactionType, dict[FactionType, float]]:
        """Copy of the relation table; mutating it does not affect the service."""
        return self.graph.relations()

    # =========================================================================
    # POWER AND THRESHOLDS
    # =========================================================================

    def calculate_faction_power(
        self, faction_type: Union[str, FactionType], approval: float
    ) -> float:
        """Base power scaled by approval, squared below 30 approval."""
        faction_type = parse_faction_type(faction_type)
        modifier = approval / 100
        if approval < 30:
            modifier = modifier * modifier
        return self.graph.power_base(faction_type) * modifier

    def get_required_approval_thresholds(
        self, faction_type: Union[str, FactionType]
    ) -> ApprovalThresholds:
        return self.graph.thresholds(parse_faction_type(faction_type))
