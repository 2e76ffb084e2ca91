"""
Prestige resets and their permanent bonuses.
"""

from kingdom_sim.prestige.prestige_service import (
    PrestigeBonuses,
    PrestigeRequirements,
    PrestigeResetData,
    PrestigeResult,
    PrestigeService,
)

__all__ = [
    "PrestigeBonuses",
    "PrestigeRequirements",
    "PrestigeResetData",
    "PrestigeResult",
    "PrestigeService",
]
