"""
The Kingdom aggregate and the court members it owns.
"""

from kingdom_sim.kingdom.kingdom import (
    BASE_STABILITY,
    SIGNIFICANT_APPROVAL_CHANGE,
    Kingdom,
    default_factions,
)
from kingdom_sim.kingdom.kingdom_models import (
    Advisor,
    AdvisorRecruitResult,
    Character,
    Ruler,
)

__all__ = [
    "Advisor",
    "AdvisorRecruitResult",
    "BASE_STABILITY",
    "Character",
    "Kingdom",
    "Ruler",
    "SIGNIFICANT_APPROVAL_CHANGE",
    "default_factions",
]
