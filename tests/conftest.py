"""
Pytest fixtures for the kingdom simulation test suite.

Provides seeded and fixed random sources, kingdoms in common states,
and the default services.
"""

import pytest
from typing import Any, Sequence

from kingdom_sim.config.game_config import GameConfig
from kingdom_sim.data_models import DiceRoller, Resources
from kingdom_sim.economy.resource_generator import ResourceGenerator
from kingdom_sim.events.chain_service import EventChainService
from kingdom_sim.factions.faction_service import FactionService
from kingdom_sim.kingdom.kingdom import Kingdom
from kingdom_sim.prestige.prestige_service import PrestigeService


class FixedRng:
    """
    Deterministic stand-in for DiceRoller.

    random() always returns `value`; choice() always picks `index`.
    """

    def __init__(self, value: float = 0.0, index: int = 0):
        self.value = value
        self.index = index
        self.random_calls: list[str] = []

    def random(self, reason: str = "") -> float:
        self.random_calls.append(reason)
        return self.value

    def choice(self, options: Sequence[Any], reason: str = "") -> Any:
        return options[self.index]


# =============================================================================
# DICE FIXTURES
# =============================================================================


@pytest.fixture
def seeded_dice():
    """Provide a seeded DiceRoller for reproducible tests."""
    DiceRoller.clear_roll_log()
    DiceRoller.set_seed(42)
    yield DiceRoller()
    DiceRoller.clear_roll_log()


@pytest.fixture
def make_rng():
    """Factory for FixedRng instances."""
    return FixedRng


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def game_config() -> GameConfig:
    return GameConfig()


@pytest.fixture
def faction_service() -> FactionService:
    """Faction service that always picks the first flavour entry."""
    return FactionService(rng=FixedRng())


@pytest.fixture
def generator(game_config: GameConfig) -> ResourceGenerator:
    return ResourceGenerator(game_config)


@pytest.fixture
def prestige_service() -> PrestigeService:
    return PrestigeService()


@pytest.fixture
def chain_service() -> EventChainService:
    return EventChainService(id_factory=lambda: "chain_test")


# =============================================================================
# KINGDOM FIXTURES
# =============================================================================


@pytest.fixture
def kingdom() -> Kingdom:
    """A freshly founded kingdom."""
    return Kingdom(name="Avalon", id="kingdom-1", last_calculation=1000.0)


@pytest.fixture
def wealthy_kingdom() -> Kingdom:
    """A kingdom able to afford every chain choice."""
    k = Kingdom(name="Eldoria", id="kingdom-2", last_calculation=1000.0)
    k.resources = Resources(
        gold=1000,
        influence=1000,
        loyalty=500,
        population=1000,
        military_power=1000,
    )
    return k


@pytest.fixture
def veteran_kingdom(kingdom: Kingdom) -> Kingdom:
    """A kingdom with enough completed events to prestige."""
    kingdom.completed_events_count = 10
    return kingdom
