"""
Achievement definitions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from kingdom_sim.data_models import ResourceType


class RequirementKind(str, Enum):
    """What an achievement measures."""
    KINGDOM_CREATED = "kingdom_created"
    RESOURCE = "resource"
    ALL_FACTIONS_APPROVAL = "all_factions_approval"
    EVENTS_COMPLETED = "events_completed"
    PRESTIGE_LEVEL = "prestige_level"
    ADVISORS = "advisors"
    TOTAL_RESOURCES = "total_resources"


@dataclass(frozen=True)
class AchievementRequirement:
    """
    Condition for unlocking an achievement.

    `amount` is the threshold for every kind except KINGDOM_CREATED; RESOURCE
    also names the resource it measures.
    """
    kind: RequirementKind
    amount: float = 0
    resource: Optional[ResourceType] = None


@dataclass(frozen=True)
class AchievementReward:
    """Resources granted once, and generation multipliers kept for good."""
    resources: dict[ResourceType, float] = field(default_factory=dict)
    multipliers: dict[ResourceType, float] = field(default_factory=dict)


@dataclass(frozen=True)
class Achievement:
    id: str
    name: str
    description: str
    requirement: AchievementRequirement
    reward: AchievementReward = field(default_factory=AchievementReward)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "requirement": {
                "kind": self.requirement.kind.value,
                "amount": self.requirement.amount,
                "resource": self.requirement.resource.value if self.requirement.resource else None,
            },
            "reward": {
                "resources": {rt.value: v for rt, v in self.reward.resources.items()},
                "multipliers": {rt.value: v for rt, v in self.reward.multipliers.items()},
            },
        }


G, I, F, K = (
    ResourceType.GOLD,
    ResourceType.INFLUENCE,
    ResourceType.FAITH,
    ResourceType.KNOWLEDGE,
)

DEFAULT_ACHIEVEMENTS: tuple[Achievement, ...] = (
    Achievement(
        "first-kingdom", "First Kingdom", "Create your first kingdom",
        AchievementRequirement(RequirementKind.KINGDOM_CREATED),
        AchievementReward(resources={G: 50, I: 25}),
    ),
    Achievement(
        "resource-hoarder", "Resource Hoarder", "Accumulate 1000 gold",
        AchievementRequirement(RequirementKind.RESOURCE, 1000, G),
        AchievementReward(resources={G: 100, I: 50}),
    ),
    Achievement(
        "influential", "Influential", "Accumulate 500 influence",
        AchievementRequirement(RequirementKind.RESOURCE, 500, I),
        AchievementReward(resources={I: 100, F: 50}),
    ),
    Achievement(
        "faithful", "Faithful", "Accumulate 500 faith",
        AchievementRequirement(RequirementKind.RESOURCE, 500, F),
        AchievementReward(resources={F: 100, K: 50}),
    ),
    Achievement(
        "scholar", "Scholar", "Accumulate 500 knowledge",
        AchievementRequirement(RequirementKind.RESOURCE, 500, K),
        AchievementReward(resources={K: 100, G: 50}),
    ),
    Achievement(
        "wealth-of-nations", "Wealth of Nations", "Accumulate 5000 gold",
        AchievementRequirement(RequirementKind.RESOURCE, 5000, G),
        AchievementReward(resources={G: 500}, multipliers={G: 1.1}),
    ),
    Achievement(
        "popular-ruler", "Popular Ruler", "All factions have at least 60 approval",
        AchievementRequirement(RequirementKind.ALL_FACTIONS_APPROVAL, 60),
        AchievementReward(resources={I: 200}),
    ),
    Achievement(
        "beloved-monarch", "Beloved Monarch", "All factions have at least 80 approval",
        AchievementRequirement(RequirementKind.ALL_FACTIONS_APPROVAL, 80),
        AchievementReward(resources={I: 500}, multipliers={I: 1.2}),
    ),
    Achievement(
        "event-master", "Event Master", "Complete 25 events",
        AchievementRequirement(RequirementKind.EVENTS_COMPLETED, 25),
        AchievementReward(resources={K: 250}),
    ),
    Achievement(
        "event-legend", "Event Legend", "Complete 100 events",
        AchievementRequirement(RequirementKind.EVENTS_COMPLETED, 100),
        AchievementReward(resources={K: 1000}, multipliers={K: 1.15}),
    ),
    Achievement(
        "prestigious", "Prestigious", "Reach prestige level 1",
        AchievementRequirement(RequirementKind.PRESTIGE_LEVEL, 1),
        AchievementReward(multipliers={G: 1.25, I: 1.25}),
    ),
    Achievement(
        "full-court", "Full Court", "Have 5 advisors in your court",
        AchievementRequirement(RequirementKind.ADVISORS, 5),
        AchievementReward(resources={I: 300}),
    ),
    Achievement(
        "balanced-ruler", "Balanced Ruler", "Have at least 1000 total resources",
        AchievementRequirement(RequirementKind.TOTAL_RESOURCES, 1000),
        AchievementReward(resources={G: 100, I: 100, F: 100, K: 100}),
    ),
    Achievement(
        "resource-magnate", "Resource Magnate", "Have at least 10000 total resources",
        AchievementRequirement(RequirementKind.TOTAL_RESOURCES, 10000),
        AchievementReward(multipliers={G: 1.1, I: 1.1, F: 1.1, K: 1.1}),
    ),
)
