"""
Data models for the faction system.

Contains:
- Faction: mutable entity with a bounded approval rating
- FactionBonus: resource and stability modifiers granted by a mood
- ApprovalThresholds: per-kind approval cut-offs
- FactionEvent: record emitted when a faction's mood crosses a threshold
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Union

from kingdom_sim.data_models import FACTION_NAMES, EventSeverity, FactionMood, FactionType


MIN_APPROVAL = 0
MAX_APPROVAL = 100
DEFAULT_APPROVAL = 50


class UnknownFactionError(ValueError):
    """Raised when a faction identifier does not name one of the five kinds."""
    pass


def parse_faction_type(value: Union[str, FactionType]) -> FactionType:
    """Coerce a string or enum member to a FactionType."""
    if isinstance(value, FactionType):
        return value
    try:
        return FactionType(value)
    except ValueError:
        raise UnknownFactionError(f"Faction {value} does not exist") from None


def mood_for_approval(approval: float) -> FactionMood:
    """Map an approval rating to its mood bucket."""
    if approval <= 20:
        return FactionMood.HOSTILE
    if approval <= 40:
        return FactionMood.UNHAPPY
    if approval <= 60:
        return FactionMood.NEUTRAL
    if approval <= 80:
        return FactionMood.CONTENT
    return FactionMood.LOYAL


def clamp_approval(value: float) -> float:
    return max(MIN_APPROVAL, min(MAX_APPROVAL, value))


@dataclass
class Faction:
    """
    One of the kingdom's five factions.

    The mood is derived from approval_rating on every read, so the two can
    never disagree.
    """
    faction_type: FactionType
    name: str = ""
    approval_rating: float = DEFAULT_APPROVAL

    def __post_init__(self) -> None:
        self.faction_type = parse_faction_type(self.faction_type)
        if not self.name:
            self.name = FACTION_NAMES[self.faction_type]
        self.approval_rating = clamp_approval(self.approval_rating)

    @property
    def mood(self) -> FactionMood:
        return mood_for_approval(self.approval_rating)

    def change_approval(self, delta: float) -> float:
        """
        Shift approval by delta, clamped to [0, 100].

        Returns:
            The new approval rating
        """
        self.approval_rating = clamp_approval(self.approval_rating + delta)
        return self.approval_rating

    def set_approval(self, value: float) -> float:
        self.approval_rating = clamp_approval(value)
        return self.approval_rating

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.faction_type.value,
            "name": self.name,
            "approval_rating": self.approval_rating,
            "mood": self.mood.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Faction:
        # mood is derived, any stored value is ignored
        return cls(
            faction_type=parse_faction_type(data["type"]),
            name=data.get("name", ""),
            approval_rating=data.get("approval_rating", DEFAULT_APPROVAL),
        )


@dataclass(frozen=True)
class FactionBonus:
    """Modifiers a faction grants in its current mood."""
    resource_multiplier: float
    stability_bonus: float
    trade_bonus: Optional[float] = None
    military_bonus: Optional[float] = None
    production_bonus: Optional[float] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "resource_multiplier": self.resource_multiplier,
            "stability_bonus": self.stability_bonus,
        }
        for key in ("trade_bonus", "military_bonus", "production_bonus"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data


@dataclass(frozen=True)
class ApprovalThresholds:
    """Approval cut-offs for one faction kind, ascending."""
    rebellion: float
    unrest: float
    discontent: float
    stable: float
    supportive: float

    def to_dict(self) -> dict[str, float]:
        return {
            "rebellion": self.rebellion,
            "unrest": self.unrest,
            "discontent": self.discontent,
            "stable": self.stable,
            "supportive": self.supportive,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ApprovalThresholds:
        return cls(
            rebellion=data["rebellion"],
            unrest=data["unrest"],
            discontent=data["discontent"],
            stable=data["stable"],
            supportive=data["supportive"],
        )


@dataclass(frozen=True)
class FactionEventTemplate:
    """Flavour entry for a generated unrest or rebellion event."""
    event_type: str
    description: str


@dataclass
class FactionEvent:
    """
    Domain event recorded against a kingdom.

    Produced both by threshold checks (unrest and rebellion) and by large
    approval swings (FactionApprovalChanged).
    """
    aggregate_id: str
    event_type: str
    faction_type: FactionType
    description: str = ""
    severity: Optional[EventSeverity] = None
    approval_change: Optional[float] = None
    occurred_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "aggregate_id": self.aggregate_id,
            "event_type": self.event_type,
            "faction_type": self.faction_type.value,
            "description": self.description,
            "severity": self.severity.value if self.severity else None,
            "approval_change": self.approval_change,
            "occurred_at": self.occurred_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FactionEvent:
        severity = data.get("severity")
        return cls(
            aggregate_id=data["aggregate_id"],
            event_type=data["event_type"],
            faction_type=parse_faction_type(data["faction_type"]),
            description=data.get("description", ""),
            severity=EventSeverity(severity) if severity else None,
            approval_change=data.get("approval_change"),
            occurred_at=datetime.fromisoformat(data["occurred_at"]),
        )
