"""
Achievement service.

Checks a kingdom against the achievement table and grants rewards for every
newly met requirement. Unlock state lives on the kingdom, so one service
instance can serve any number of kingdoms.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Sequence

from kingdom_sim.achievements.achievement_models import (
    DEFAULT_ACHIEVEMENTS,
    Achievement,
    AchievementRequirement,
    RequirementKind,
)
from kingdom_sim.data_models import ResourceType

if TYPE_CHECKING:
    from kingdom_sim.kingdom.kingdom import Kingdom

logger = logging.getLogger(__name__)

TOTAL_RESOURCE_TYPES = (
    ResourceType.GOLD,
    ResourceType.INFLUENCE,
    ResourceType.FAITH,
    ResourceType.KNOWLEDGE,
)


class AchievementService:

    def __init__(self, achievements: Optional[Sequence[Achievement]] = None):
        self.achievements = tuple(achievements if achievements is not None else DEFAULT_ACHIEVEMENTS)

    def get_all_achievements(self) -> list[Achievement]:
        return list(self.achievements)

    def get_unlocked_achievements(self, kingdom: Kingdom) -> list[Achievement]:
        return [a for a in self.achievements if a.id in kingdom.unlocked_achievements]

    def check_achievements(self, kingdom: Kingdom) -> list[Achievement]:
        """
        Unlock every achievement whose requirement the kingdom now meets.

        Rewards are granted in table order, so a reward can push the kingdom
        over a later achievement's threshold within the same call.

        Returns:
            Achievements unlocked by this call
        """
        newly_unlocked = []
        for achievement in self.achievements:
            if achievement.id in kingdom.unlocked_achievements:
                continue
            if self.is_requirement_met(achievement.requirement, kingdom):
                self.unlock_achievement(achievement, kingdom)
                newly_unlocked.append(achievement)
        return newly_unlocked

    def is_requirement_met(self, requirement: AchievementRequirement, kingdom: Kingdom) -> bool:
        kind = requirement.kind
        if kind == RequirementKind.KINGDOM_CREATED:
            return True
        if kind == RequirementKind.RESOURCE:
            if requirement.resource is None:
                return False
            return kingdom.get_resource(requirement.resource) >= requirement.amount
        if kind == RequirementKind.ALL_FACTIONS_APPROVAL:
            return all(
                f.approval_rating >= requirement.amount for f in kingdom.factions.values()
            )
        if kind == RequirementKind.EVENTS_COMPLETED:
            return kingdom.completed_events_count >= requirement.amount
        if kind == RequirementKind.PRESTIGE_LEVEL:
            return kingdom.prestige_level >= requirement.amount
        if kind == RequirementKind.ADVISORS:
            return len(kingdom.advisors) >= requirement.amount
        if kind == RequirementKind.TOTAL_RESOURCES:
            total = sum(kingdom.get_resource(rt) for rt in TOTAL_RESOURCE_TYPES)
            return total >= requirement.amount
        return False

    def unlock_achievement(self, achievement: Achievement, kingdom: Kingdom) -> bool:
        """Record and reward an achievement; False if it was already unlocked."""
        if not kingdom.add_unlocked_achievement(achievement.id):
            return False

        for rt, amount in achievement.reward.resources.items():
            kingdom.add_resource(rt, amount)
        if achievement.reward.multipliers:
            kingdom.add_achievement_multipliers(achievement.reward.multipliers)

        logger.info(f"Kingdom {kingdom.name} unlocked achievement {achievement.name}")
        return True
