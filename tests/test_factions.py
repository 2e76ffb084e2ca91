"""
Tests for faction models, the relation graph and the faction service.

Covers:
- Approval clamping and mood buckets
- Mood bonuses and kind-specific extras
- Threshold-triggered unrest and rebellion events
- Impact propagation and rounding
- Faction power
- Relation graph overrides and loading
"""

import json

import pytest

from kingdom_sim.data_models import EventSeverity, FactionMood, FactionType
from kingdom_sim.factions import (
    Faction,
    FactionRelationGraph,
    FactionRelationsLoader,
    FactionService,
    UnknownFactionError,
    mood_for_approval,
    parse_faction_type,
    round_half_up,
)
from kingdom_sim.kingdom.kingdom import Kingdom


N, ME, MI, CL, CO = (
    FactionType.NOBILITY,
    FactionType.MERCHANTS,
    FactionType.MILITARY,
    FactionType.CLERGY,
    FactionType.COMMONERS,
)


# =============================================================================
# FACTION ENTITY
# =============================================================================


class TestFaction:
    """Tests for the Faction entity."""

    def test_defaults(self):
        """A new faction is neutral at 50 and carries its canonical name."""
        faction = Faction(N)
        assert faction.approval_rating == 50
        assert faction.mood == FactionMood.NEUTRAL
        assert faction.name == "The Noble Houses"

    @pytest.mark.parametrize("approval,mood", [
        (0, FactionMood.HOSTILE),
        (20, FactionMood.HOSTILE),
        (21, FactionMood.UNHAPPY),
        (40, FactionMood.UNHAPPY),
        (60, FactionMood.NEUTRAL),
        (80, FactionMood.CONTENT),
        (81, FactionMood.LOYAL),
        (100, FactionMood.LOYAL),
    ])
    def test_mood_buckets(self, approval, mood):
        """Mood boundaries are inclusive upper bounds."""
        assert mood_for_approval(approval) == mood

    def test_mood_is_monotonic(self):
        """Higher approval never yields a worse mood."""
        order = list(FactionMood)
        ranks = [order.index(mood_for_approval(a)) for a in range(0, 101)]
        assert ranks == sorted(ranks)

    def test_change_approval_clamps(self):
        """Approval stays inside [0, 100] whatever the delta."""
        faction = Faction(ME)
        faction.change_approval(500)
        assert faction.approval_rating == 100
        assert faction.mood == FactionMood.LOYAL
        faction.change_approval(-1000)
        assert faction.approval_rating == 0
        assert faction.mood == FactionMood.HOSTILE

    def test_mood_follows_approval(self):
        """Mood is recomputed in the same call as the approval change."""
        faction = Faction(CL)
        faction.change_approval(25)
        assert faction.mood == FactionMood.CONTENT

    def test_parse_unknown_faction(self):
        """Unknown identifiers are rejected with UnknownFactionError."""
        with pytest.raises(UnknownFactionError):
            parse_faction_type("Pirates")
        assert parse_faction_type("Clergy") == CL

    def test_round_trip(self):
        """to_dict/from_dict preserve type, name and approval."""
        faction = Faction(MI, approval_rating=73)
        restored = Faction.from_dict(faction.to_dict())
        assert restored == faction
        assert restored.mood == FactionMood.CONTENT


# =============================================================================
# MOOD BONUS
# =============================================================================


class TestMoodBonus:
    """Tests for FactionService.calculate_mood_bonus."""

    @pytest.mark.parametrize("approval,multiplier,stability", [
        (10, 0.6, -20),
        (30, 0.8, -10),
        (50, 1.0, 0),
        (70, 1.1, 5),
        (90, 1.2, 10),
    ])
    def test_multiplier_and_stability(self, faction_service, approval, multiplier, stability):
        """Each mood maps to its resource multiplier and stability bonus."""
        bonus = faction_service.calculate_mood_bonus(Faction(N, approval_rating=approval))
        assert bonus.resource_multiplier == pytest.approx(multiplier)
        assert bonus.stability_bonus == stability

    def test_merchant_trade_bonus(self, faction_service):
        """Merchants add a trade bonus of twice the multiplier's excess."""
        bonus = faction_service.calculate_mood_bonus(Faction(ME, approval_rating=70))
        assert bonus.trade_bonus == pytest.approx(0.2)
        assert bonus.military_bonus is None

    def test_military_bonus(self, faction_service):
        """Military adds one and a half times the multiplier's excess."""
        bonus = faction_service.calculate_mood_bonus(Faction(MI, approval_rating=90))
        assert bonus.military_bonus == pytest.approx(0.3)

    def test_commoner_production_penalty(self, faction_service):
        """A hostile commoner faction gives a negative production bonus."""
        bonus = faction_service.calculate_mood_bonus(Faction(CO, approval_rating=10))
        assert bonus.production_bonus == pytest.approx(-0.6)

    def test_nobility_has_no_extras(self, faction_service):
        bonus = faction_service.calculate_mood_bonus(Faction(N))
        assert bonus.trade_bonus is None
        assert bonus.military_bonus is None
        assert bonus.production_bonus is None


# =============================================================================
# FACTION EVENTS
# =============================================================================


class TestFactionEvents:
    """Tests for threshold-triggered events."""

    def test_rebellion_at_cutoff(self, faction_service):
        """Approval at the rebellion cut-off yields a critical event."""
        event = faction_service.generate_faction_event("k1", Faction(N, approval_rating=15))
        assert event is not None
        assert event.severity == EventSeverity.CRITICAL
        assert event.event_type == "FactionRebellion"
        assert event.description == "Noble houses plot against the crown"
        assert event.aggregate_id == "k1"

    def test_unrest_band(self, faction_service):
        """Between the cut-offs a severe unrest event is produced."""
        event = faction_service.generate_faction_event("k1", Faction(N, approval_rating=30))
        assert event.severity == EventSeverity.SEVERE
        assert event.event_type == "FactionUnrest"

    def test_discontent_band_is_silent(self, faction_service):
        """Approval above the unrest cut-off produces nothing."""
        assert faction_service.generate_faction_event("k1", Faction(N, approval_rating=31)) is None
        assert faction_service.generate_faction_event("k1", Faction(N, approval_rating=45)) is None

    def test_per_kind_thresholds(self, faction_service):
        """Clergy rebels at 25 while merchants only rebel at 10."""
        clergy = faction_service.generate_faction_event("k1", Faction(CL, approval_rating=25))
        merchants = faction_service.generate_faction_event("k1", Faction(ME, approval_rating=25))
        assert clergy.severity == EventSeverity.CRITICAL
        assert merchants.severity == EventSeverity.SEVERE

    def test_flavour_drawn_from_kind_table(self, make_rng):
        """The second flavour entry is used when the rng picks index 1."""
        service = FactionService(rng=make_rng(index=1))
        event = service.generate_faction_event("k1", Faction(CO, approval_rating=5))
        assert event.event_type == "FactionRebellion"
        assert event.description == "Common folk storm the palace gates"

    def test_seeded_dice_choose_known_templates(self, seeded_dice):
        """With the default DiceRoller the event is one of the kind's rebellions."""
        service = FactionService()
        event = service.generate_faction_event("k1", Faction(MI, approval_rating=0))
        assert event.event_type in {"MilitaryCoup", "FactionRebellion"}

    def test_thresholds_lookup(self, faction_service):
        thresholds = faction_service.get_required_approval_thresholds("Military")
        assert thresholds.rebellion == 20
        assert thresholds.unrest == 35
        assert thresholds.supportive == 85


# =============================================================================
# IMPACT PROPAGATION
# =============================================================================


class TestFactionImpact:
    """Tests for calculate_faction_impact."""

    def test_nobility_plus_twenty(self, faction_service):
        """Relations scale the change by weight and one half."""
        kingdom = Kingdom(name="Test")
        impact = faction_service.calculate_faction_impact(kingdom, N, 20)
        assert impact == {N: 20, ME: -3, MI: 2, CL: 1, CO: -6}

    def test_neutral_relation_gives_zero(self, faction_service):
        """Military and Clergy ignore each other."""
        kingdom = Kingdom(name="Test")
        impact = faction_service.calculate_faction_impact(kingdom, MI, 40)
        assert impact[CL] == 0

    def test_halves_round_up(self, faction_service):
        """+0.5 rounds to 1, -0.5 rounds to 0."""
        kingdom = Kingdom(name="Test")
        assert faction_service.calculate_faction_impact(kingdom, N, 10)[CL] == 1
        assert faction_service.calculate_faction_impact(kingdom, N, -10)[CL] == 0

    def test_does_not_mutate_kingdom(self, faction_service):
        """The impact map is advisory; approvals are untouched."""
        kingdom = Kingdom(name="Test")
        faction_service.calculate_faction_impact(kingdom, CO, -40)
        assert all(f.approval_rating == 50 for f in kingdom.factions.values())

    def test_unknown_target_raises(self, faction_service):
        kingdom = Kingdom(name="Test")
        with pytest.raises(UnknownFactionError):
            faction_service.calculate_faction_impact(kingdom, "Pirates", 10)

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(-2.5) == -2
        assert round_half_up(-2.6) == -3

    def test_relations_are_copied(self, faction_service):
        """Mutating the returned table leaves the service unchanged."""
        relations = faction_service.get_faction_relations()
        relations[N][CO] = 1.0
        assert faction_service.get_faction_relations()[N][CO] == -0.6


# =============================================================================
# POWER
# =============================================================================


class TestFactionPower:
    """Tests for calculate_faction_power."""

    def test_full_approval(self, faction_service):
        assert faction_service.calculate_faction_power(N, 100) == pytest.approx(1.5)

    def test_linear_at_thirty(self, faction_service):
        """At exactly 30 the modifier is not squared."""
        assert faction_service.calculate_faction_power(N, 30) == pytest.approx(0.45)

    def test_squared_below_thirty(self, faction_service):
        assert faction_service.calculate_faction_power(N, 20) == pytest.approx(0.06)

    def test_commoners(self, faction_service):
        assert faction_service.calculate_faction_power(CO, 50) == pytest.approx(0.4)


# =============================================================================
# RELATION GRAPH
# =============================================================================


class TestFactionRelationGraph:
    """Tests for the injected relation graph."""

    def test_defaults(self):
        graph = FactionRelationGraph()
        assert graph.relation(N, CO) == -0.6
        assert graph.relation(CO, CL) == 0.3
        assert graph.relation(N, N) == 0.0
        assert graph.power_base(MI) == 1.3

    def test_partial_override(self):
        """Overrides merge over the defaults."""
        graph = FactionRelationGraph(relations={N: {ME: 1.0}})
        assert graph.relation(N, ME) == 1.0
        assert graph.relation(N, CO) == -0.6

    def test_custom_graph_drives_service(self):
        """The service uses whatever graph it was given."""
        graph = FactionRelationGraph(relations={N: {ME: 1.0}})
        service = FactionService(graph=graph)
        impact = service.calculate_faction_impact(Kingdom(name="Test"), N, 10)
        assert impact[ME] == 5

    def test_from_dict_rejects_out_of_range(self):
        with pytest.raises(ValueError):
            FactionRelationGraph.from_dict({"relations": {"Nobility": {"Clergy": 2}}})

    def test_from_dict_rejects_unknown_faction(self):
        with pytest.raises(UnknownFactionError):
            FactionRelationGraph.from_dict({"power_base": {"Pirates": 1.0}})

    def test_dict_round_trip(self):
        """A serialized graph rebuilds with the same tables."""
        graph = FactionRelationGraph(power_base={CL: 2.0})
        restored = FactionRelationGraph.from_dict(graph.to_dict())
        assert restored.relations() == graph.relations()
        assert restored.power_base(CL) == 2.0
        assert restored.thresholds(N) == graph.thresholds(N)


class TestFactionRelationsLoader:
    """Tests for loading a graph from disk."""

    def test_missing_file_uses_defaults(self, tmp_path):
        result = FactionRelationsLoader(tmp_path / "missing.json").load()
        assert result.success
        assert result.warnings
        assert result.graph.relation(N, CO) == -0.6

    def test_valid_file(self, tmp_path):
        path = tmp_path / "relations.json"
        path.write_text(json.dumps({"relations": {"Clergy": {"Merchants": 0.5}}}))
        result = FactionRelationsLoader(path).load()
        assert result.success
        assert result.graph.relation(CL, ME) == 0.5

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "relations.json"
        path.write_text("{not json")
        result = FactionRelationsLoader(path).load()
        assert not result.success
        assert result.errors

    def test_unknown_faction_is_an_error(self, tmp_path):
        path = tmp_path / "relations.json"
        path.write_text(json.dumps({"relations": {"Pirates": {"Clergy": 0.1}}}))
        result = FactionRelationsLoader(path).load()
        assert not result.success
        assert "Pirates" in result.errors[0]
