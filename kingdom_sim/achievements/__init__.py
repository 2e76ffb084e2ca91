"""
Achievements: one-time rewards and permanent generation multipliers.
"""

from kingdom_sim.achievements.achievement_models import (
    DEFAULT_ACHIEVEMENTS,
    Achievement,
    AchievementRequirement,
    AchievementReward,
    RequirementKind,
)
from kingdom_sim.achievements.achievement_service import AchievementService

__all__ = [
    "Achievement",
    "AchievementRequirement",
    "AchievementReward",
    "AchievementService",
    "DEFAULT_ACHIEVEMENTS",
    "RequirementKind",
]
