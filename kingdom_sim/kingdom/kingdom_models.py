"""
Supporting models owned by the Kingdom aggregate.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from kingdom_sim.data_models import AdvisorType, CharacterType, ResourceType


@dataclass
class Ruler:
    """The monarch presiding over a kingdom."""
    name: str
    title: str = "King"

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "title": self.title}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Ruler:
        return cls(name=data["name"], title=data.get("title", "King"))


@dataclass
class Character:
    """A member of the royal family."""
    character_type: CharacterType
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.character_type.value, "name": self.name}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Character:
        return cls(character_type=CharacterType(data["type"]), name=data["name"])


@dataclass
class Advisor:
    """A recruited member of the royal court."""
    advisor_type: AdvisorType
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.advisor_type.value, "name": self.name}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Advisor:
        return cls(advisor_type=AdvisorType(data["type"]), name=data["name"])


@dataclass
class AdvisorRecruitResult:
    """Outcome of a recruitment attempt. Failures leave the kingdom untouched."""
    success: bool
    message: str
    cost: dict[ResourceType, float] = field(default_factory=dict)
    advisor: Optional[Advisor] = None
