"""
Game configuration model.

Contains the tunable tables the simulation reads:
- ResourceConfig: base generation rate and multipliers per resource
- AdvisorConfig: recruitment cost, effect multiplier and cap per advisor
- FactionConfig: per-faction resource bonuses
- PrestigeConfig: reset requirements and per-level bonuses
- GeneralConfig: tick rate, event limits, resource cap, court size

Every section has a to_dict/from_dict pair; from_dict merges a partial
document over the defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from kingdom_sim.data_models import (
    DEFAULT_RESOURCE_CAP,
    AdvisorType,
    CharacterType,
    FactionType,
    ResourceType,
)
from kingdom_sim.factions.faction_relations import FactionRelationGraph


def _resource_map_from_dict(data: dict[str, Any]) -> dict[ResourceType, float]:
    return {ResourceType(k): float(v) for k, v in data.items()}


def _resource_map_to_dict(data: dict[ResourceType, float]) -> dict[str, float]:
    return {rt.value: amount for rt, amount in data.items()}


# =============================================================================
# SECTIONS
# =============================================================================


@dataclass(frozen=True)
class ResourceConfig:
    """
    Generation parameters for one resource.

    Only base_generation_rate and prestige_multiplier feed generation.
    advisor_multiplier, base_cost and cost_multiplier are stored-only admin
    schema: they round-trip through config documents for tooling that edits
    them, and the simulation does not read them.
    """
    resource_type: ResourceType
    base_generation_rate: float
    advisor_multiplier: float = 1.0
    prestige_multiplier: float = 1.0
    base_cost: float = 0.0
    cost_multiplier: float = 1.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "base_generation_rate": self.base_generation_rate,
            "advisor_multiplier": self.advisor_multiplier,
            "prestige_multiplier": self.prestige_multiplier,
            "base_cost": self.base_cost,
            "cost_multiplier": self.cost_multiplier,
        }

    @classmethod
    def from_dict(cls, resource_type: ResourceType, data: dict[str, Any]) -> ResourceConfig:
        return cls(
            resource_type=resource_type,
            base_generation_rate=float(data.get("base_generation_rate", 0.0)),
            advisor_multiplier=float(data.get("advisor_multiplier", 1.0)),
            prestige_multiplier=float(data.get("prestige_multiplier", 1.0)),
            base_cost=float(data.get("base_cost", 0.0)),
            cost_multiplier=float(data.get("cost_multiplier", 1.0)),
        )


@dataclass(frozen=True)
class AdvisorConfig:
    """Recruitment parameters for one advisor type."""
    advisor_type: AdvisorType
    base_cost: dict[ResourceType, float]
    effect_multiplier: float
    max_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "base_cost": _resource_map_to_dict(self.base_cost),
            "effect_multiplier": self.effect_multiplier,
            "max_count": self.max_count,
        }

    @classmethod
    def from_dict(cls, advisor_type: AdvisorType, data: dict[str, Any]) -> AdvisorConfig:
        return cls(
            advisor_type=advisor_type,
            base_cost=_resource_map_from_dict(data.get("base_cost", {})),
            effect_multiplier=float(data.get("effect_multiplier", 1.0)),
            max_count=int(data.get("max_count", 0)),
        )


@dataclass(frozen=True)
class FactionConfig:
    """
    Resource bonuses one faction grants while it approves of the ruler.

    Only bonuses feed generation. base_influence, max_influence, decay_rate
    and event_weight are stored-only admin schema carried through to_dict and
    from_dict.
    """
    faction_type: FactionType
    base_influence: float
    max_influence: float = 100
    decay_rate: float = 0.0
    event_weight: float = 1.0
    bonuses: dict[ResourceType, float] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "base_influence": self.base_influence,
            "max_influence": self.max_influence,
            "decay_rate": self.decay_rate,
            "event_weight": self.event_weight,
            "bonuses": _resource_map_to_dict(self.bonuses),
        }

    @classmethod
    def from_dict(cls, faction_type: FactionType, data: dict[str, Any]) -> FactionConfig:
        return cls(
            faction_type=faction_type,
            base_influence=float(data.get("base_influence", 0.0)),
            max_influence=float(data.get("max_influence", 100)),
            decay_rate=float(data.get("decay_rate", 0.0)),
            event_weight=float(data.get("event_weight", 1.0)),
            bonuses=_resource_map_from_dict(data.get("bonuses", {})),
        )


@dataclass(frozen=True)
class PrestigeConfig:
    """
    Prestige requirements and per-level bonuses.

    event_frequency_bonus_per_level is stored-only admin schema.
    """
    base_requirement: dict[ResourceType, float] = field(default_factory=lambda: {
        ResourceType.GOLD: 1000,
        ResourceType.INFLUENCE: 500,
        ResourceType.FAITH: 300,
        ResourceType.KNOWLEDGE: 200,
    })
    requirement_multiplier: float = 2.5
    resource_multiplier_per_level: float = 0.1
    advisor_cost_reduction_per_level: float = 0.05
    event_frequency_bonus_per_level: float = 0.1
    faction_retention_per_level: float = 0.1
    events_required: int = 10

    def to_dict(self) -> dict[str, Any]:
        return {
            "base_requirement": _resource_map_to_dict(self.base_requirement),
            "requirement_multiplier": self.requirement_multiplier,
            "resource_multiplier_per_level": self.resource_multiplier_per_level,
            "advisor_cost_reduction_per_level": self.advisor_cost_reduction_per_level,
            "event_frequency_bonus_per_level": self.event_frequency_bonus_per_level,
            "faction_retention_per_level": self.faction_retention_per_level,
            "events_required": self.events_required,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PrestigeConfig:
        defaults = cls()
        base_requirement = data.get("base_requirement")
        return cls(
            base_requirement=(
                _resource_map_from_dict(base_requirement)
                if base_requirement is not None
                else defaults.base_requirement
            ),
            requirement_multiplier=float(
                data.get("requirement_multiplier", defaults.requirement_multiplier)
            ),
            resource_multiplier_per_level=float(
                data.get("resource_multiplier_per_level", defaults.resource_multiplier_per_level)
            ),
            advisor_cost_reduction_per_level=float(
                data.get(
                    "advisor_cost_reduction_per_level",
                    defaults.advisor_cost_reduction_per_level,
                )
            ),
            event_frequency_bonus_per_level=float(
                data.get(
                    "event_frequency_bonus_per_level",
                    defaults.event_frequency_bonus_per_level,
                )
            ),
            faction_retention_per_level=float(
                data.get("faction_retention_per_level", defaults.faction_retention_per_level)
            ),
            events_required=int(data.get("events_required", defaults.events_required)),
        )


@dataclass(frozen=True)
class GeneralConfig:
    """
    Global knobs.

    resource_cap bounds offline generation and base_court_size sizes the
    court. tick_rate_ms, save_interval_ms, max_active_events and
    event_spawn_chance are stored-only admin schema for a hosting game loop.
    """
    tick_rate_ms: int = 1000
    save_interval_ms: int = 30000
    max_active_events: int = 3
    event_spawn_chance: float = 0.05
    resource_cap: float = DEFAULT_RESOURCE_CAP
    base_court_size: int = 5

    def to_dict(self) -> dict[str, Any]:
        return {
            "tick_rate_ms": self.tick_rate_ms,
            "save_interval_ms": self.save_interval_ms,
            "max_active_events": self.max_active_events,
            "event_spawn_chance": self.event_spawn_chance,
            "resource_cap": self.resource_cap,
            "base_court_size": self.base_court_size,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GeneralConfig:
        defaults = cls()
        return cls(
            tick_rate_ms=int(data.get("tick_rate_ms", defaults.tick_rate_ms)),
            save_interval_ms=int(data.get("save_interval_ms", defaults.save_interval_ms)),
            max_active_events=int(data.get("max_active_events", defaults.max_active_events)),
            event_spawn_chance=float(data.get("event_spawn_chance", defaults.event_spawn_chance)),
            resource_cap=float(data.get("resource_cap", defaults.resource_cap)),
            base_court_size=int(data.get("base_court_size", defaults.base_court_size)),
        )


# =============================================================================
# DEFAULTS
# =============================================================================


def default_resource_configs() -> dict[ResourceType, ResourceConfig]:
    rows = [
        (ResourceType.GOLD, 1.0, 1.5, 1.2, 100, 1.5),
        (ResourceType.INFLUENCE, 0.8, 1.3, 1.15, 150, 1.4),
        (ResourceType.FAITH, 0.5, 2.0, 1.25, 200, 1.8),
        (ResourceType.KNOWLEDGE, 0.3, 2.5, 1.3, 300, 2.0),
        (ResourceType.LOYALTY, 0.2, 3.0, 1.1, 100, 1.5),
    ]
    return {
        rt: ResourceConfig(rt, rate, advisor_mult, prestige_mult, cost, cost_mult)
        for rt, rate, advisor_mult, prestige_mult, cost, cost_mult in rows
    }


def default_advisor_configs() -> dict[AdvisorType, AdvisorConfig]:
    G, I, F, K = (
        ResourceType.GOLD,
        ResourceType.INFLUENCE,
        ResourceType.FAITH,
        ResourceType.KNOWLEDGE,
    )
    return {
        AdvisorType.TREASURER: AdvisorConfig(AdvisorType.TREASURER, {G: 100}, 1.5, 10),
        AdvisorType.CHANCELLOR: AdvisorConfig(AdvisorType.CHANCELLOR, {G: 150, I: 50}, 1.8, 8),
        AdvisorType.MARSHAL: AdvisorConfig(AdvisorType.MARSHAL, {G: 200, I: 30}, 2.0, 6),
        AdvisorType.SPYMASTER: AdvisorConfig(AdvisorType.SPYMASTER, {G: 250, K: 50}, 2.2, 5),
        AdvisorType.COURT_CHAPLAIN: AdvisorConfig(
            AdvisorType.COURT_CHAPLAIN, {G: 180, F: 40}, 1.6, 6
        ),
    }


def default_faction_configs() -> dict[FactionType, FactionConfig]:
    G, I, F = ResourceType.GOLD, ResourceType.INFLUENCE, ResourceType.FAITH
    return {
        FactionType.NOBILITY: FactionConfig(
            FactionType.NOBILITY, 30, 100, 0.1, 1.5, {G: 1.2, I: 1.1}
        ),
        FactionType.CLERGY: FactionConfig(FactionType.CLERGY, 25, 100, 0.05, 1.3, {F: 1.3}),
        FactionType.MERCHANTS: FactionConfig(FactionType.MERCHANTS, 20, 100, 0.15, 1.2, {G: 1.5}),
        FactionType.COMMONERS: FactionConfig(FactionType.COMMONERS, 15, 100, 0.2, 1.0, {I: 1.3}),
        FactionType.MILITARY: FactionConfig(
            FactionType.MILITARY, 25, 100, 0.1, 1.4, {I: 1.2, G: 1.1}
        ),
    }


def default_character_generation() -> dict[CharacterType, dict[ResourceType, float]]:
    return {
        CharacterType.KING: {ResourceType.GOLD: 1.0},
        CharacterType.QUEEN: {ResourceType.INFLUENCE: 1.0},
    }


# =============================================================================
# GAME CONFIG
# =============================================================================


@dataclass(frozen=True)
class GameConfig:
    """The full configuration document."""
    resources: dict[ResourceType, ResourceConfig] = field(default_factory=default_resource_configs)
    advisors: dict[AdvisorType, AdvisorConfig] = field(default_factory=default_advisor_configs)
    factions: dict[FactionType, FactionConfig] = field(default_factory=default_faction_configs)
    character_generation: dict[CharacterType, dict[ResourceType, float]] = field(
        default_factory=default_character_generation
    )
    prestige: PrestigeConfig = field(default_factory=PrestigeConfig)
    general: GeneralConfig = field(default_factory=GeneralConfig)
    faction_relations: Optional[FactionRelationGraph] = None

    def relation_graph(self) -> FactionRelationGraph:
        return self.faction_relations or FactionRelationGraph()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "resources": {rt.value: c.to_dict() for rt, c in self.resources.items()},
            "advisors": {at.value: c.to_dict() for at, c in self.advisors.items()},
            "factions": {ft.value: c.to_dict() for ft, c in self.factions.items()},
            "character_generation": {
                ct.value: _resource_map_to_dict(rates)
                for ct, rates in self.character_generation.items()
            },
            "prestige": self.prestige.to_dict(),
            "general": self.general.to_dict(),
        }
        if self.faction_relations is not None:
            data["faction_relations"] = self.faction_relations.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GameConfig:
        """
        Build a config, merging every section over the defaults.

        Raises:
            ValueError: If a key names an unknown resource, advisor or faction
        """
        resources = default_resource_configs()
        for key, section in data.get("resources", {}).items():
            rt = ResourceType(key)
            resources[rt] = ResourceConfig.from_dict(rt, section)

        advisors = default_advisor_configs()
        for key, section in data.get("advisors", {}).items():
            at = AdvisorType(key)
            advisors[at] = AdvisorConfig.from_dict(at, section)

        factions = default_faction_configs()
        for key, section in data.get("factions", {}).items():
            ft = FactionType(key)
            factions[ft] = FactionConfig.from_dict(ft, section)

        characters = default_character_generation()
        for key, rates in data.get("character_generation", {}).items():
            characters[CharacterType(key)] = _resource_map_from_dict(rates)

        relations = data.get("faction_relations")

        return cls(
            resources=resources,
            advisors=advisors,
            factions=factions,
            character_generation=characters,
            prestige=PrestigeConfig.from_dict(data.get("prestige", {})),
            general=GeneralConfig.from_dict(data.get("general", {})),
            faction_relations=(
                FactionRelationGraph.from_dict(relations) if relations is not None else None
            ),
        )
