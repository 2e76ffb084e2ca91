"""
Kingdom aggregate.

The Kingdom is plain data plus the operations that keep it consistent:
- Resource map (capped) and the legacy Resources snapshot
- Five factions with bounded approval
- Royal family and advisors
- Prestige level and completed-event counter
- Achievement unlocks and generation multipliers
- Domain events emitted by faction changes

Rules live in the services (FactionService, ResourceGenerator,
PrestigeService). Every operation that needs one accepts it as an optional
argument and falls back to a default-configured instance.
"""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional, Union

from kingdom_sim.config.game_config import GameConfig
from kingdom_sim.data_models import (
    DEFAULT_RESOURCE_CAP,
    AdvisorType,
    CharacterType,
    FactionType,
    Resources,
    ResourceType,
    empty_resource_map,
)
from kingdom_sim.economy.resource_generator import ResourceGenerator
from kingdom_sim.factions.faction_models import (
    Faction,
    FactionBonus,
    FactionEvent,
    UnknownFactionError,
    parse_faction_type,
)
from kingdom_sim.factions.faction_service import FactionService
from kingdom_sim.kingdom.kingdom_models import (
    Advisor,
    AdvisorRecruitResult,
    Character,
    Ruler,
)
from kingdom_sim.prestige.prestige_service import (
    PrestigeBonuses,
    PrestigeResult,
    PrestigeService,
)

if TYPE_CHECKING:
    from kingdom_sim.events.event_models import EventConsequence

logger = logging.getLogger(__name__)

BASE_STABILITY = 50
# Approval swings at least this large are recorded as domain events.
SIGNIFICANT_APPROVAL_CHANGE = 10

# Legacy fields mirrored into the resource map by adjust_resources.
LEGACY_MIRRORED_RESOURCES = {
    "gold": ResourceType.GOLD,
    "influence": ResourceType.INFLUENCE,
    "loyalty": ResourceType.LOYALTY,
}


def default_factions() -> dict[FactionType, Faction]:
    return {ft: Faction(ft) for ft in FactionType}


@dataclass
class Kingdom:
    """The aggregate root every subsystem reads and mutates."""
    name: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    ruler: Optional[Ruler] = None
    resources: Resources = field(default_factory=Resources)
    resource_map: dict[ResourceType, float] = field(default_factory=empty_resource_map)
    factions: dict[FactionType, Faction] = field(default_factory=default_factions)
    characters: list[Character] = field(default_factory=list)
    advisors: list[Advisor] = field(default_factory=list)
    prestige_level: int = 0
    completed_events_count: int = 0
    last_calculation: float = field(default_factory=time.time)
    unlocked_achievements: set[str] = field(default_factory=set)
    resource_multipliers: dict[ResourceType, float] = field(default_factory=dict)
    resource_cap: float = DEFAULT_RESOURCE_CAP
    domain_events: list[FactionEvent] = field(default_factory=list)

    # =========================================================================
    # RESOURCES
    # =========================================================================

    def get_resource(self, resource_type: ResourceType) -> float:
        return self.resource_map.get(resource_type, 0.0)

    def add_resource(self, resource_type: ResourceType, amount: float) -> float:
        """
        Add (or with a negative amount, remove) a resource.

        The result is clamped to [0, resource_cap].

        Returns:
            The new amount
        """
        current = self.get_resource(resource_type)
        self.resource_map[resource_type] = max(0.0, min(current + amount, self.resource_cap))
        return self.resource_map[resource_type]

    def adjust_resources(self, delta: Resources) -> Resources:
        """
        Apply a legacy resource delta (rewards, consequences).

        The legacy snapshot is floored at zero; gold, influence and loyalty
        are mirrored into the resource map so both views move together.
        """
        self.resources = self.resources.add(delta).clamped()
        for field_name, rt in LEGACY_MIRRORED_RESOURCES.items():
            amount = getattr(delta, field_name)
            if amount:
                self.add_resource(rt, amount)
        return self.resources

    def apply_consequence(self, consequence: EventConsequence) -> None:
        """
        Apply an event choice's effect.

        Stability is derived from faction moods, so stability_change is
        informational only.
        """
        self.adjust_resources(consequence.resource_change)
        if consequence.loyalty_change:
            self.add_resource(ResourceType.LOYALTY, consequence.loyalty_change)

    def get_generation_rates(
        self, generator: Optional[ResourceGenerator] = None
    ) -> dict[ResourceType, float]:
        return (generator or ResourceGenerator()).calculate_generation_rates(self)

    def calculate_resource_generation(
        self,
        seconds: float,
        now: Optional[float] = None,
        generator: Optional[ResourceGenerator] = None,
    ) -> dict[ResourceType, float]:
        """
        Advance the economy by an elapsed period.

        Adds capped offline progress to the resource map, adds the legacy
        generation to the Resources snapshot and stamps last_calculation.

        Returns:
            Amount added per resource type
        """
        generator = generator or ResourceGenerator()
        progress = generator.calculate_offline_progress(self, seconds)
        for rt, amount in progress.items():
            self.add_resource(rt, amount)

        if seconds > 0:
            self.resources = self.resources.add(generator.generate_resources(self, seconds))

        self.last_calculation = now if now is not None else time.time()
        return progress

    def catch_up(
        self,
        now: Optional[float] = None,
        generator: Optional[ResourceGenerator] = None,
    ) -> dict[ResourceType, float]:
        """Generate everything earned since last_calculation."""
        now = now if now is not None else time.time()
        elapsed = max(0.0, now - self.last_calculation)
        logger.debug(f"Kingdom {self.name} catching up {elapsed:.1f}s")
        return self.calculate_resource_generation(elapsed, now=now, generator=generator)

    # =========================================================================
    # FACTIONS
    # =========================================================================

    def get_faction(self, faction_type: Union[str, FactionType]) -> Faction:
        faction_type = parse_faction_type(faction_type)
        faction = self.factions.get(faction_type)
        if faction is None:
            raise UnknownFactionError(f"Faction {faction_type.value} does not exist")
        return faction

    def apply_faction_change(
        self,
        faction_type: Union[str, FactionType],
        delta: float,
        apply_relations: bool = False,
        faction_service: Optional[FactionService] = None,
    ) -> dict[FactionType, float]:
        """
        Change a faction's approval, optionally rippling to related factions.

        Raises:
            UnknownFactionError: If faction_type names no faction

        Returns:
            The approval delta requested for each affected faction
        """
        faction = self.get_faction(faction_type)

        if apply_relations:
            service = faction_service or FactionService()
            impacts = service.calculate_faction_impact(self, faction.faction_type, delta)
        else:
            impacts = {faction.faction_type: delta}

        applied: dict[FactionType, float] = {}
        for ft, change in impacts.items():
            if change == 0:
                continue
            self.factions[ft].change_approval(change)
            applied[ft] = change

        if abs(delta) >= SIGNIFICANT_APPROVAL_CHANGE:
            self.domain_events.append(FactionEvent(
                aggregate_id=self.id,
                event_type="FactionApprovalChanged",
                faction_type=faction.faction_type,
                description=f"{faction.name} approval changed by {delta}",
                approval_change=delta,
            ))

        return applied

    def check_faction_events(
        self, faction_service: Optional[FactionService] = None
    ) -> list[FactionEvent]:
        """Generate unrest or rebellion events for every faction that warrants one."""
        service = faction_service or FactionService()
        events = []
        for faction in self.factions.values():
            event = service.generate_faction_event(self.id, faction)
            if event is not None:
                events.append(event)
        self.domain_events.extend(events)
        return events

    def calculate_faction_bonuses(
        self, faction_service: Optional[FactionService] = None
    ) -> dict[FactionType, FactionBonus]:
        service = faction_service or FactionService()
        return {
            ft: service.calculate_mood_bonus(faction)
            for ft, faction in self.factions.items()
        }

    def get_faction_power(
        self,
        faction_type: Union[str, FactionType],
        faction_service: Optional[FactionService] = None,
    ) -> float:
        faction = self.factions.get(parse_faction_type(faction_type))
        if faction is None:
            return 0.0
        service = faction_service or FactionService()
        return service.calculate_faction_power(faction.faction_type, faction.approval_rating)

    def get_total_stability(self, faction_service: Optional[FactionService] = None) -> float:
        """Neutral 50 plus each faction's mood stability bonus, clamped to [0, 100]."""
        bonuses = self.calculate_faction_bonuses(faction_service)
        stability = BASE_STABILITY + sum(b.stability_bonus for b in bonuses.values())
        return max(0, min(100, stability))

    def clear_domain_events(self) -> list[FactionEvent]:
        events = self.domain_events
        self.domain_events = []
        return events

    # =========================================================================
    # COURT
    # =========================================================================

    def add_character(self, character_type: CharacterType) -> Character:
        count = sum(1 for c in self.characters if c.character_type == character_type)
        character = Character(character_type, f"{character_type.value.lower()} {count + 1}")
        self.characters.append(character)
        return character

    def add_advisor(self, advisor_type: AdvisorType) -> Advisor:
        count = sum(1 for a in self.advisors if a.advisor_type == advisor_type)
        advisor = Advisor(advisor_type, f"{advisor_type.value.lower()} {count + 1}")
        self.advisors.append(advisor)
        return advisor

    def court_capacity(self, config: Optional[GameConfig] = None) -> int:
        config = config or GameConfig()
        return config.general.base_court_size + self.get_prestige_bonuses(
            PrestigeService(config.prestige)
        ).advisor_slots

    def recruit_advisor(
        self,
        advisor_type: AdvisorType,
        config: Optional[GameConfig] = None,
    ) -> AdvisorRecruitResult:
        """
        Pay for and seat an advisor.

        Cost is the configured base cost reduced per prestige level. Fails
        without side effects when the court is full, the type is at its cap,
        or the treasury cannot cover the cost.
        """
        config = config or GameConfig()
        advisor_config = config.advisors.get(advisor_type)
        if advisor_config is None:
            return AdvisorRecruitResult(
                success=False, message=f"Unknown advisor type: {advisor_type}"
            )

        reduction = min(
            config.prestige.advisor_cost_reduction_per_level * self.prestige_level, 0.9
        )
        cost = {rt: amount * (1 - reduction) for rt, amount in advisor_config.base_cost.items()}

        capacity = self.court_capacity(config)
        if len(self.advisors) >= capacity:
            return AdvisorRecruitResult(
                success=False,
                message=f"Royal court is full. Maximum {capacity} advisors allowed.",
                cost=cost,
            )

        held = sum(1 for a in self.advisors if a.advisor_type == advisor_type)
        if held >= advisor_config.max_count:
            return AdvisorRecruitResult(
                success=False,
                message=(
                    f"Maximum number of {advisor_type.value} advisors reached "
                    f"({advisor_config.max_count})"
                ),
                cost=cost,
            )

        for rt, amount in cost.items():
            if self.get_resource(rt) < amount:
                return AdvisorRecruitResult(
                    success=False,
                    message=f"Insufficient {rt.value} to recruit advisor",
                    cost=cost,
                )

        for rt, amount in cost.items():
            self.add_resource(rt, -amount)
        advisor = self.add_advisor(advisor_type)
        logger.info(f"Kingdom {self.name} recruited {advisor.name}")
        return AdvisorRecruitResult(
            success=True,
            message=f"Recruited {advisor.name}",
            cost=cost,
            advisor=advisor,
        )

    # =========================================================================
    # PRESTIGE
    # =========================================================================

    def increment_completed_events(self) -> int:
        self.completed_events_count += 1
        return self.completed_events_count

    def get_prestige_bonuses(
        self, prestige_service: Optional[PrestigeService] = None
    ) -> PrestigeBonuses:
        service = prestige_service or PrestigeService()
        return service.calculate_prestige_bonuses(self.prestige_level)

    def can_prestige(self, prestige_service: Optional[PrestigeService] = None) -> bool:
        return (prestige_service or PrestigeService()).can_prestige(self)

    def perform_prestige(
        self, prestige_service: Optional[PrestigeService] = None
    ) -> PrestigeResult:
        """
        Reset the kingdom one prestige level higher.

        On failure nothing changes. On success the level rises by one, the
        resource map returns to the baseline, each faction keeps part of its
        distance from neutral, the event counter resets, and advisors and
        characters are dismissed.
        """
        service = prestige_service or PrestigeService()
        if not service.can_prestige(self):
            return PrestigeResult(success=False, error=service.insufficient_events_message(self))

        new_level = self.prestige_level + 1
        reset = service.prepare_prestige_reset(self, new_level)

        self.prestige_level = new_level
        self.resource_map = dict(reset.new_resources)
        for ft, retained in reset.retained_faction_relations.items():
            self.factions[ft].set_approval(50 + retained)
        self.completed_events_count = 0
        self.advisors = []
        self.characters = []

        bonuses = service.calculate_prestige_bonuses(new_level)
        logger.info(f"Kingdom {self.name} prestiged to level {new_level}")
        return PrestigeResult(success=True, new_prestige_level=new_level, bonuses=bonuses)

    # =========================================================================
    # ACHIEVEMENTS
    # =========================================================================

    def add_unlocked_achievement(self, achievement_id: str) -> bool:
        """Record an achievement; False if it was already unlocked."""
        if achievement_id in self.unlocked_achievements:
            return False
        self.unlocked_achievements.add(achievement_id)
        return True

    def add_achievement_multipliers(self, multipliers: dict[ResourceType, float]) -> None:
        """Fold achievement multipliers into the existing ones (multiplicatively)."""
        for rt, multiplier in multipliers.items():
            self.resource_multipliers[rt] = self.resource_multipliers.get(rt, 1.0) * multiplier

    # =========================================================================
    # SERIALIZATION
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        """Serialize for persistence. Pending domain events are not saved."""
        return {
            "id": self.id,
            "name": self.name,
            "ruler": self.ruler.to_dict() if self.ruler else None,
            "resources": self.resources.to_dict(),
            "resource_map": {rt.value: amount for rt, amount in self.resource_map.items()},
            "factions": {ft.value: f.to_dict() for ft, f in self.factions.items()},
            "characters": [c.to_dict() for c in self.characters],
            "advisors": [a.to_dict() for a in self.advisors],
            "prestige_level": self.prestige_level,
            "completed_events_count": self.completed_events_count,
            "last_calculation": self.last_calculation,
            "unlocked_achievements": sorted(self.unlocked_achievements),
            "resource_multipliers": {
                rt.value: m for rt, m in self.resource_multipliers.items()
            },
            "resource_cap": self.resource_cap,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Kingdom:
        resource_map = empty_resource_map()
        for key, amount in data.get("resource_map", {}).items():
            resource_map[ResourceType(key)] = amount

        factions = default_factions()
        for key, faction_data in data.get("factions", {}).items():
            ft = parse_faction_type(key)
            factions[ft] = Faction.from_dict({**faction_data, "type": ft.value})

        ruler = data.get("ruler")
        return cls(
            id=data["id"],
            name=data["name"],
            ruler=Ruler.from_dict(ruler) if ruler else None,
            resources=Resources.from_dict(data.get("resources", {})),
            resource_map=resource_map,
            factions=factions,
            characters=[Character.from_dict(c) for c in data.get("characters", [])],
            advisors=[Advisor.from_dict(a) for a in data.get("advisors", [])],
            prestige_level=data.get("prestige_level", 0),
            completed_events_count=data.get("completed_events_count", 0),
            last_calculation=data.get("last_calculation", time.time()),
            unlocked_achievements=set(data.get("unlocked_achievements", [])),
            resource_multipliers={
                ResourceType(k): v for k, v in data.get("resource_multipliers", {}).items()
            },
            resource_cap=data.get("resource_cap", DEFAULT_RESOURCE_CAP),
        )
