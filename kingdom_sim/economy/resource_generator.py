"""
Resource generator.

Derives per-second generation rates for a kingdom and turns elapsed time into
resource gains. Rates are built in this order:

1. configured base rate, plus any royal-family contribution
2. times each advisor's effect multiplier (advisors boost every resource)
3. times the prestige multiplier and the resource's own prestige factor
4. times the bonus of each faction above neutral approval, for the
   resources that faction favours
5. times any achievement multiplier

Missing configuration contributes nothing and never raises.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from kingdom_sim.config.game_config import GameConfig
from kingdom_sim.data_models import Resources, ResourceType
from kingdom_sim.factions.faction_models import DEFAULT_APPROVAL
from kingdom_sim.prestige.prestige_service import PrestigeService

if TYPE_CHECKING:
    from kingdom_sim.kingdom.kingdom import Kingdom

logger = logging.getLogger(__name__)


class ResourceGenerator:
    """Computes generation rates and offline progress from a GameConfig."""

    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig()
        self.prestige_service = PrestigeService(self.config.prestige)

    def calculate_generation_rates(self, kingdom: Kingdom) -> dict[ResourceType, float]:
        """Per-second rate for every resource type."""
        rates: dict[ResourceType, float] = {}
        for rt in ResourceType:
            resource_config = self.config.resources.get(rt)
            rates[rt] = resource_config.base_generation_rate if resource_config else 0.0

        for character in kingdom.characters:
            contribution = self.config.character_generation.get(character.character_type, {})
            for rt, amount in contribution.items():
                rates[rt] = rates.get(rt, 0.0) + amount

        for advisor in kingdom.advisors:
            advisor_config = self.config.advisors.get(advisor.advisor_type)
            if advisor_config is None:
                logger.warning(f"No config for advisor {advisor.advisor_type.value}, ignoring")
                continue
            for rt in rates:
                rates[rt] *= advisor_config.effect_multiplier

        prestige_multiplier = self.prestige_service.calculate_prestige_bonuses(
            kingdom.prestige_level
        ).resource_multiplier
        for rt in rates:
            resource_config = self.config.resources.get(rt)
            own_factor = resource_config.prestige_multiplier if resource_config else 1.0
            rates[rt] *= prestige_multiplier * own_factor

        for faction_type, faction in kingdom.factions.items():
            if faction.approval_rating <= DEFAULT_APPROVAL:
                continue
            faction_config = self.config.factions.get(faction_type)
            if faction_config is None:
                continue
            strength = (faction.approval_rating - DEFAULT_APPROVAL) / 100
            for rt, multiplier in faction_config.bonuses.items():
                if rt in rates:
                    rates[rt] *= 1 + strength * multiplier

        for rt, multiplier in kingdom.resource_multipliers.items():
            if rt in rates:
                rates[rt] *= multiplier

        return rates

    def calculate_offline_progress(
        self, kingdom: Kingdom, seconds: float
    ) -> dict[ResourceType, float]:
        """
        Gains over an idle period, never pushing a resource past the lower of
        the kingdom's cap and the configured general.resource_cap.

        Returns:
            Amount to add per resource type (all non-negative)
        """
        if seconds <= 0:
            return {rt: 0.0 for rt in ResourceType}

        rates = self.calculate_generation_rates(kingdom)
        cap = min(kingdom.resource_cap, self.config.general.resource_cap)
        progress: dict[ResourceType, float] = {}
        for rt, rate in rates.items():
            headroom = max(0.0, cap - kingdom.get_resource(rt))
            progress[rt] = max(0.0, min(rate * seconds, headroom))
        return progress

    def generate_resources(self, kingdom: Kingdom, seconds: float) -> Resources:
        """Legacy view of a generation tick: only gold and influence."""
        rates = self.calculate_generation_rates(kingdom)
        return Resources(
            gold=rates.get(ResourceType.GOLD, 0.0) * seconds,
            influence=rates.get(ResourceType.INFLUENCE, 0.0) * seconds,
            loyalty=0,
            population=0,
            military_power=0,
        )
