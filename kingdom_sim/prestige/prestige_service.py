"""
Prestige service.

Computes permanent per-level bonuses, the eligibility check and the reset
snapshot a kingdom applies when it prestiges. Nothing here mutates a kingdom.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

from kingdom_sim.config.game_config import PrestigeConfig
from kingdom_sim.data_models import FactionType, ResourceType
from kingdom_sim.factions.faction_models import DEFAULT_APPROVAL

if TYPE_CHECKING:
    from kingdom_sim.kingdom.kingdom import Kingdom

logger = logging.getLogger(__name__)

MAX_RELATION_RETENTION = 0.9
BASELINE_GOLD = 100

# Resources that count toward prestige points.
POINT_RESOURCES = (
    ResourceType.GOLD,
    ResourceType.INFLUENCE,
    ResourceType.FAITH,
    ResourceType.KNOWLEDGE,
)
POINTS_PER_ADVISOR = 5


@dataclass(frozen=True)
class PrestigeBonuses:
    """Permanent bonuses earned at a prestige level."""
    resource_multiplier: float
    advisor_slots: int
    faction_relation_retention: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "resource_multiplier": self.resource_multiplier,
            "advisor_slots": self.advisor_slots,
            "faction_relation_retention": self.faction_relation_retention,
        }


@dataclass
class PrestigeResetData:
    """Snapshot of what a kingdom becomes after prestiging."""
    new_resources: dict[ResourceType, float]
    retained_faction_relations: dict[FactionType, float]


@dataclass
class PrestigeResult:
    """Outcome of Kingdom.perform_prestige."""
    success: bool
    error: Optional[str] = None
    new_prestige_level: Optional[int] = None
    bonuses: Optional[PrestigeBonuses] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "error": self.error,
            "new_prestige_level": self.new_prestige_level,
            "bonuses": self.bonuses.to_dict() if self.bonuses else None,
        }


@dataclass(frozen=True)
class PrestigeRequirements:
    events_required: int
    resources: dict[ResourceType, float] = field(default_factory=dict)


class PrestigeService:
    """Prestige rules, parameterised by a PrestigeConfig."""

    def __init__(self, config: Optional[PrestigeConfig] = None):
        self.config = config or PrestigeConfig()

    def calculate_prestige_bonuses(self, level: int) -> PrestigeBonuses:
        retention = self.config.faction_retention_per_level * level
        return PrestigeBonuses(
            resource_multiplier=1 + self.config.resource_multiplier_per_level * level,
            advisor_slots=level,
            faction_relation_retention=min(retention, MAX_RELATION_RETENTION),
        )

    def can_prestige(self, kingdom: Kingdom) -> bool:
        return kingdom.completed_events_count >= self.config.events_required

    def insufficient_events_message(self, kingdom: Kingdom) -> str:
        return (
            f"Insufficient completed events. Required: {self.config.events_required}, "
            f"Current: {kingdom.completed_events_count}"
        )

    def prepare_prestige_reset(self, kingdom: Kingdom, new_level: int) -> PrestigeResetData:
        """
        Build the post-reset snapshot.

        Resources return to the baseline (gold 100, everything else 0). Each
        faction keeps a fraction of its distance from neutral approval, the
        fraction being the retention bonus of the new level.
        """
        retention = self.calculate_prestige_bonuses(new_level).faction_relation_retention
        new_resources = {rt: 0.0 for rt in ResourceType}
        new_resources[ResourceType.GOLD] = BASELINE_GOLD

        # rounded to drop float noise such as 30 * 0.1 == 3.0000000000000004
        retained = {
            faction_type: round((faction.approval_rating - DEFAULT_APPROVAL) * retention, 6)
            for faction_type, faction in kingdom.factions.items()
        }
        logger.debug(f"Prestige reset to level {new_level} retains {retained}")
        return PrestigeResetData(
            new_resources=new_resources,
            retained_faction_relations=retained,
        )

    def calculate_prestige_points(self, kingdom: Kingdom) -> int:
        """
        Score a kingdom's progress.

        One point per thousand of each main resource, one per ten approval
        above neutral for each faction, and five per advisor.
        """
        points = 0
        for rt in POINT_RESOURCES:
            points += math.floor(kingdom.get_resource(rt) / 1000)

        for faction in kingdom.factions.values():
            if faction.approval_rating > DEFAULT_APPROVAL:
                points += math.floor((faction.approval_rating - DEFAULT_APPROVAL) / 10)

        points += len(kingdom.advisors) * POINTS_PER_ADVISOR
        return points

    def get_prestige_requirements(self, level: int = 0) -> PrestigeRequirements:
        """Requirements for the next reset; resource targets grow per level."""
        scale = self.config.requirement_multiplier ** level
        return PrestigeRequirements(
            events_required=self.config.events_required,
            resources={
                rt: amount * scale for rt, amount in self.config.base_requirement.items()
            },
        )
