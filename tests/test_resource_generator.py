"""
Tests for resource generation rates and offline progress.
"""

import pytest

from kingdom_sim.config import GameConfig, GeneralConfig
from kingdom_sim.data_models import AdvisorType, CharacterType, FactionType, ResourceType
from kingdom_sim.economy import ResourceGenerator


G, I, F, K, L = (
    ResourceType.GOLD,
    ResourceType.INFLUENCE,
    ResourceType.FAITH,
    ResourceType.KNOWLEDGE,
    ResourceType.LOYALTY,
)


# =============================================================================
# RATES
# =============================================================================


class TestGenerationRates:
    """Tests for calculate_generation_rates."""

    def test_default_rates(self, generator, kingdom):
        """Base rate times the resource's own prestige factor."""
        rates = generator.calculate_generation_rates(kingdom)
        assert rates[G] == pytest.approx(1.2)
        assert rates[I] == pytest.approx(0.92)
        assert rates[F] == pytest.approx(0.625)
        assert rates[K] == pytest.approx(0.39)
        assert rates[L] == pytest.approx(0.22)

    def test_rates_are_non_negative(self, generator, kingdom):
        kingdom.factions[FactionType.NOBILITY].set_approval(0)
        rates = generator.calculate_generation_rates(kingdom)
        assert all(rate >= 0 for rate in rates.values())

    def test_advisor_multiplies_every_resource(self, generator, kingdom):
        """A treasurer multiplies all rates by 1.5."""
        kingdom.add_advisor(AdvisorType.TREASURER)
        rates = generator.calculate_generation_rates(kingdom)
        assert rates[G] == pytest.approx(1.8)
        assert rates[F] == pytest.approx(0.9375)

    def test_advisors_stack(self, generator, kingdom):
        kingdom.add_advisor(AdvisorType.TREASURER)
        kingdom.add_advisor(AdvisorType.TREASURER)
        rates = generator.calculate_generation_rates(kingdom)
        assert rates[G] == pytest.approx(1.2 * 1.5 * 1.5)

    def test_character_contribution(self, generator, kingdom):
        """A king adds one gold per second before multipliers."""
        kingdom.add_character(CharacterType.KING)
        rates = generator.calculate_generation_rates(kingdom)
        assert rates[G] == pytest.approx(2.4)
        assert rates[I] == pytest.approx(0.92)

    def test_prestige_level(self, generator, kingdom):
        """Level 2 multiplies every rate by 1.2."""
        kingdom.prestige_level = 2
        rates = generator.calculate_generation_rates(kingdom)
        assert rates[G] == pytest.approx(1.44)
        assert rates[I] == pytest.approx(0.92 * 1.2)

    def test_faction_above_neutral(self, generator, kingdom):
        """Nobility at 70 boosts gold by 24% and influence by 22%."""
        kingdom.factions[FactionType.NOBILITY].set_approval(70)
        rates = generator.calculate_generation_rates(kingdom)
        assert rates[G] == pytest.approx(1.2 * 1.24)
        assert rates[I] == pytest.approx(0.92 * 1.22)
        assert rates[F] == pytest.approx(0.625)

    def test_faction_below_neutral_has_no_effect(self, generator, kingdom):
        kingdom.factions[FactionType.MERCHANTS].set_approval(10)
        rates = generator.calculate_generation_rates(kingdom)
        assert rates[G] == pytest.approx(1.2)

    def test_achievement_multiplier(self, generator, kingdom):
        kingdom.add_achievement_multipliers({G: 1.1})
        rates = generator.calculate_generation_rates(kingdom)
        assert rates[G] == pytest.approx(1.32)

    def test_missing_configuration_contributes_nothing(self, kingdom):
        """Resources without config generate zero, advisors without config are skipped."""
        config = GameConfig(resources={}, advisors={})
        kingdom.add_advisor(AdvisorType.MARSHAL)
        rates = ResourceGenerator(config).calculate_generation_rates(kingdom)
        assert all(rate == 0 for rate in rates.values())


# =============================================================================
# OFFLINE PROGRESS
# =============================================================================


class TestOfflineProgress:
    """Tests for calculate_offline_progress and generate_resources."""

    def test_linear_progress(self, generator, kingdom):
        progress = generator.calculate_offline_progress(kingdom, 100)
        assert progress[G] == pytest.approx(120)
        assert progress[L] == pytest.approx(22)

    def test_zero_or_negative_seconds(self, generator, kingdom):
        assert all(v == 0 for v in generator.calculate_offline_progress(kingdom, 0).values())
        assert all(v == 0 for v in generator.calculate_offline_progress(kingdom, -5).values())

    def test_capped_at_headroom(self, generator, kingdom):
        """Progress never carries a resource past the cap."""
        kingdom.add_resource(G, 9950)
        progress = generator.calculate_offline_progress(kingdom, 100)
        assert progress[G] == pytest.approx(50)

    def test_already_over_cap(self, generator, kingdom):
        """A resource at the cap gains nothing."""
        kingdom.add_resource(G, 20_000)
        progress = generator.calculate_offline_progress(kingdom, 100)
        assert progress[G] == 0

    def test_custom_cap(self, generator, kingdom):
        kingdom.resource_cap = 100
        progress = generator.calculate_offline_progress(kingdom, 1000)
        assert progress[G] == pytest.approx(100)

    def test_configured_cap(self, kingdom):
        """general.resource_cap limits generation below the kingdom's own cap."""
        generator = ResourceGenerator(GameConfig(general=GeneralConfig(resource_cap=500)))
        kingdom.calculate_resource_generation(10_000, now=11_000.0, generator=generator)
        assert kingdom.get_resource(G) == pytest.approx(500)
        assert kingdom.get_resource(L) == pytest.approx(500)

    def test_generate_resources_legacy_view(self, generator, kingdom):
        """Only gold and influence are reported in the legacy snapshot."""
        gained = generator.generate_resources(kingdom, 10)
        assert gained.gold == pytest.approx(12)
        assert gained.influence == pytest.approx(9.2)
        assert gained.loyalty == 0
        assert gained.population == 0
