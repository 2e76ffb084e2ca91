"""
Event and choice models.

Events are immutable narrative prompts; each offers ordered choices gated by
resource requirements. Events that belong to a chain carry a ChainLink with
their position and neighbours.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Sequence

from kingdom_sim.data_models import EventType, Resources


@dataclass(frozen=True)
class ResourceRequirement:
    """Minimum resources needed to take a choice. All thresholds are >= 0."""
    gold: float = 0
    influence: float = 0
    loyalty: float = 0
    population: float = 0
    military_power: float = 0

    def __post_init__(self) -> None:
        for name, value in self.to_dict().items():
            if value < 0:
                raise ValueError(f"Requirement {name} must be non-negative, got {value}")

    def is_satisfied_by(self, resources: Resources) -> bool:
        return (
            resources.gold >= self.gold
            and resources.influence >= self.influence
            and resources.loyalty >= self.loyalty
            and resources.population >= self.population
            and resources.military_power >= self.military_power
        )

    def to_dict(self) -> dict[str, float]:
        return {
            "gold": self.gold,
            "influence": self.influence,
            "loyalty": self.loyalty,
            "population": self.population,
            "military_power": self.military_power,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ResourceRequirement:
        return cls(**{k: data.get(k, 0) for k in cls().to_dict()})


@dataclass(frozen=True)
class EventConsequence:
    """Effect of taking a choice."""
    resource_change: Resources = field(default_factory=Resources.zero)
    stability_change: float = 0
    loyalty_change: float = 0
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "resource_change": self.resource_change.to_dict(),
            "stability_change": self.stability_change,
            "loyalty_change": self.loyalty_change,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EventConsequence:
        return cls(
            resource_change=Resources.from_dict(data.get("resource_change", {})),
            stability_change=data.get("stability_change", 0),
            loyalty_change=data.get("loyalty_change", 0),
            description=data.get("description", ""),
        )


@dataclass(frozen=True)
class ChoiceChainData:
    """Chain metadata attached to a choice."""
    next_event_modifier: Optional[str] = None


@dataclass(frozen=True)
class EventChoice:
    """One option the player may pick when resolving an event."""
    id: str
    description: str
    requirements: ResourceRequirement = field(default_factory=ResourceRequirement)
    immediate_effect: EventConsequence = field(default_factory=EventConsequence)
    long_term_effects: tuple[EventConsequence, ...] = ()
    chain_data: Optional[ChoiceChainData] = None

    @property
    def next_event_modifier(self) -> Optional[str]:
        return self.chain_data.next_event_modifier if self.chain_data else None

    def can_be_chosen(self, resources: Resources) -> bool:
        return self.requirements.is_satisfied_by(resources)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "requirements": self.requirements.to_dict(),
            "immediate_effect": self.immediate_effect.to_dict(),
            "long_term_effects": [e.to_dict() for e in self.long_term_effects],
            "next_event_modifier": self.next_event_modifier,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EventChoice:
        modifier = data.get("next_event_modifier")
        return cls(
            id=data["id"],
            description=data.get("description", ""),
            requirements=ResourceRequirement.from_dict(data.get("requirements", {})),
            immediate_effect=EventConsequence.from_dict(data.get("immediate_effect", {})),
            long_term_effects=tuple(
                EventConsequence.from_dict(e) for e in data.get("long_term_effects", [])
            ),
            chain_data=ChoiceChainData(modifier) if modifier else None,
        )


@dataclass(frozen=True)
class ChainLink:
    """Position of an event inside a chain."""
    chain_id: str
    chain_position: int
    chain_length: int
    previous_event_id: Optional[str] = None
    next_event_id: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "chain_id": self.chain_id,
            "chain_position": self.chain_position,
            "chain_length": self.chain_length,
            "previous_event_id": self.previous_event_id,
            "next_event_id": self.next_event_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ChainLink:
        return cls(
            chain_id=data["chain_id"],
            chain_position=data["chain_position"],
            chain_length=data["chain_length"],
            previous_event_id=data.get("previous_event_id"),
            next_event_id=data.get("next_event_id"),
        )


@dataclass(frozen=True)
class Event:
    """
    A narrative event.

    Immutable: linking events into a chain produces new Event values.
    """
    id: str
    title: str
    description: str
    event_type: EventType
    choices: tuple[EventChoice, ...] = ()
    expires_at: Optional[datetime] = None
    chain: Optional[ChainLink] = None

    # -------------------------------------------------------------------------
    # Chain accessors
    # -------------------------------------------------------------------------

    @property
    def chain_id(self) -> Optional[str]:
        return self.chain.chain_id if self.chain else None

    @property
    def chain_position(self) -> Optional[int]:
        return self.chain.chain_position if self.chain else None

    @property
    def next_event_id(self) -> Optional[str]:
        return self.chain.next_event_id if self.chain else None

    @property
    def previous_event_id(self) -> Optional[str]:
        return self.chain.previous_event_id if self.chain else None

    def is_part_of_chain(self) -> bool:
        return self.chain is not None

    def is_chain_start(self) -> bool:
        return self.previous_event_id is None

    def is_chain_end(self) -> bool:
        return self.next_event_id is None

    # -------------------------------------------------------------------------
    # Choices
    # -------------------------------------------------------------------------

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        if self.expires_at is None:
            return False
        return (now or datetime.now()) > self.expires_at

    def get_available_choices(self, resources: Resources) -> list[EventChoice]:
        return [c for c in self.choices if c.can_be_chosen(resources)]

    def get_choice(self, choice_id: str) -> Optional[EventChoice]:
        for choice in self.choices:
            if choice.id == choice_id:
                return choice
        return None

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "event_type": self.event_type.value,
            "choices": [c.to_dict() for c in self.choices],
            "expires_at": self.expires_at.isoformat() if self.expires_at else None,
            "chain": self.chain.to_dict() if self.chain else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Event:
        expires_at = data.get("expires_at")
        chain = data.get("chain")
        return cls(
            id=data["id"],
            title=data["title"],
            description=data.get("description", ""),
            event_type=EventType(data["event_type"]),
            choices=tuple(EventChoice.from_dict(c) for c in data.get("choices", [])),
            expires_at=datetime.fromisoformat(expires_at) if expires_at else None,
            chain=ChainLink.from_dict(chain) if chain else None,
        )


@dataclass
class ChainChoice:
    """A choice recorded against a chain."""
    event_id: str
    choice_id: str
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "event_id": self.event_id,
            "choice_id": self.choice_id,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ChainChoice:
        timestamp = data.get("timestamp")
        return cls(
            event_id=data["event_id"],
            choice_id=data["choice_id"],
            timestamp=datetime.fromisoformat(timestamp) if timestamp else datetime.now(),
        )


@dataclass
class ChainContext:
    """Choices made so far in one run through a chain."""
    chain_id: str
    previous_choices: list[ChainChoice] = field(default_factory=list)
    current_position: int = 1

    @property
    def choice_ids(self) -> list[str]:
        return [c.choice_id for c in self.previous_choices]

    def to_dict(self) -> dict[str, Any]:
        return {
            "chain_id": self.chain_id,
            "previous_choices": [c.to_dict() for c in self.previous_choices],
            "current_position": self.current_position,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ChainContext:
        return cls(
            chain_id=data["chain_id"],
            previous_choices=[ChainChoice.from_dict(c) for c in data.get("previous_choices", [])],
            current_position=data.get("current_position", 1),
        )


def link_events(chain_id: str, events: Sequence[Event]) -> list[Event]:
    """Copies of events carrying chain id, 1-based positions and neighbour ids."""
    linked = []
    for index, event in enumerate(events):
        link = ChainLink(
            chain_id=chain_id,
            chain_position=index + 1,
            chain_length=len(events),
            previous_event_id=events[index - 1].id if index > 0 else None,
            next_event_id=events[index + 1].id if index + 1 < len(events) else None,
        )
        linked.append(dataclasses.replace(event, chain=link))
    return linked
