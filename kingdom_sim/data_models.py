"""
Shared data structures for the kingdom simulation.

These structures are used by every subsystem:
- Closed enumerations for resources, factions, advisors, characters and events
- The legacy Resources value type
- The DiceRoller, the single source of randomness
"""

from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Sequence, TypeVar
import random


T = TypeVar("T")

# Ceiling applied to every entry of a kingdom's resource map.
DEFAULT_RESOURCE_CAP = 10_000


# =============================================================================
# ENUMS
# =============================================================================


class ResourceType(str, Enum):
    """Resources tracked in a kingdom's extensible resource map."""
    GOLD = "gold"
    INFLUENCE = "influence"
    FAITH = "faith"
    KNOWLEDGE = "knowledge"
    LOYALTY = "loyalty"


class FactionType(str, Enum):
    """The five political factions of every kingdom."""
    NOBILITY = "Nobility"
    MERCHANTS = "Merchants"
    MILITARY = "Military"
    CLERGY = "Clergy"
    COMMONERS = "Commoners"

    @property
    def display_name(self) -> str:
        return FACTION_NAMES[self]


FACTION_NAMES: dict[FactionType, str] = {
    FactionType.NOBILITY: "The Noble Houses",
    FactionType.MERCHANTS: "The Merchant Guild",
    FactionType.MILITARY: "The Royal Army",
    FactionType.CLERGY: "The Church",
    FactionType.COMMONERS: "The Common Folk",
}


class FactionMood(str, Enum):
    """Discrete mood derived from a faction's approval rating."""
    HOSTILE = "Hostile"
    UNHAPPY = "Unhappy"
    NEUTRAL = "Neutral"
    CONTENT = "Content"
    LOYAL = "Loyal"


class AdvisorType(str, Enum):
    """Advisors that can be recruited to the royal court."""
    TREASURER = "treasurer"
    CHANCELLOR = "chancellor"
    MARSHAL = "marshal"
    SPYMASTER = "spymaster"
    COURT_CHAPLAIN = "court_chaplain"


class CharacterType(str, Enum):
    """Members of the royal family."""
    KING = "King"
    QUEEN = "Queen"


class EventType(str, Enum):
    """Narrative category of an event."""
    POLITICAL = "Political"
    ECONOMIC = "Economic"
    MILITARY = "Military"
    SOCIAL = "Social"
    DIPLOMATIC = "Diplomatic"


class EventSeverity(str, Enum):
    """Severity of a generated faction event."""
    SEVERE = "severe"
    CRITICAL = "critical"


# =============================================================================
# RESOURCES
# =============================================================================


@dataclass(frozen=True)
class Resources:
    """
    Legacy five-field resource snapshot.

    Immutable; every operation returns a new value. Fields may carry negative
    numbers when the value is used as a delta (costs, consequences).
    """
    gold: float = 100
    influence: float = 10
    loyalty: float = 50
    population: float = 1000
    military_power: float = 10

    @classmethod
    def zero(cls) -> "Resources":
        return cls(gold=0, influence=0, loyalty=0, population=0, military_power=0)

    def add(self, other: "Resources") -> "Resources":
        """Field-wise sum."""
        return Resources(**{
            f.name: getattr(self, f.name) + getattr(other, f.name)
            for f in fields(self)
        })

    def subtract(self, other: "Resources") -> "Resources":
        """Field-wise difference, each field floored at zero."""
        return Resources(**{
            f.name: max(0, getattr(self, f.name) - getattr(other, f.name))
            for f in fields(self)
        })

    def negate(self) -> "Resources":
        return Resources(**{f.name: -getattr(self, f.name) for f in fields(self)})

    def clamped(self) -> "Resources":
        """Copy with every negative field raised to zero."""
        return Resources(**{f.name: max(0, getattr(self, f.name)) for f in fields(self)})

    def is_at_least(self, other: "Resources") -> bool:
        return all(getattr(self, f.name) >= getattr(other, f.name) for f in fields(self))

    def to_dict(self) -> dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Resources":
        """Build from a dict; missing fields count as zero."""
        return cls(**{f.name: data.get(f.name, 0) for f in fields(cls)})


def empty_resource_map() -> dict[ResourceType, float]:
    """A resource map with every ResourceType present at zero."""
    return {rt: 0.0 for rt in ResourceType}


# =============================================================================
# RANDOMNESS
# =============================================================================


class DiceRoller:
    """
    Centralized randomization interface.
    All random draws must go through this class for reproducibility and logging.

    Services accept any object exposing ``random()`` and ``choice(options)``,
    so tests can inject a fixed source instead.
    """

    _instance = None
    _seed: Optional[int] = None
    _roll_log: list = []

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def set_seed(cls, seed: int) -> None:
        """Set random seed for reproducibility."""
        cls._seed = seed
        random.seed(seed)

    @classmethod
    def random(cls, reason: str = "") -> float:
        """Uniform draw in [0, 1)."""
        value = random.random()
        cls._roll_log.append(RandomDraw(kind="uniform", value=value, reason=reason))
        return value

    @classmethod
    def choice(cls, options: Sequence[T], reason: str = "") -> T:
        """Pick one element of a non-empty sequence."""
        if not options:
            raise ValueError("Cannot choose from an empty sequence")
        index = random.randrange(len(options))
        cls._roll_log.append(RandomDraw(kind="choice", value=index, reason=reason))
        return options[index]

    @classmethod
    def get_roll_log(cls) -> list:
        """Get the complete draw log for the session."""
        return cls._roll_log.copy()

    @classmethod
    def clear_roll_log(cls) -> None:
        """Clear the draw log."""
        cls._roll_log = []


@dataclass
class RandomDraw:
    """A single logged random draw."""
    kind: str
    value: float
    reason: str
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        label = f" ({self.reason})" if self.reason else ""
        return f"{self.kind}: {self.value}{label}"
