"""
Tests for event models and the event chain service.
"""

from datetime import datetime, timedelta

import pytest

from kingdom_sim.data_models import EventType, Resources
from kingdom_sim.events import (
    ChainChoice,
    ChainContext,
    ChainConstructionError,
    ChainPath,
    Event,
    EventChainService,
    EventChoice,
    ResourceRequirement,
    determine_chain_path,
    infer_chain_path,
    link_events,
)
from kingdom_sim.events.chains.chain_builders import choice, effect, requires


def make_event(event_id: str, choices=()) -> Event:
    return Event(
        id=event_id,
        title=f"Event {event_id}",
        description="Something happens",
        event_type=EventType.POLITICAL,
        choices=tuple(choices),
    )


# =============================================================================
# MODELS
# =============================================================================


class TestResourceRequirement:
    """Tests for choice gating."""

    def test_negative_threshold_rejected(self):
        with pytest.raises(ValueError):
            ResourceRequirement(gold=-1)

    def test_satisfied_at_threshold(self):
        requirement = ResourceRequirement(gold=100, influence=10)
        assert requirement.is_satisfied_by(Resources())

    def test_not_satisfied(self):
        requirement = ResourceRequirement(military_power=11)
        assert not requirement.is_satisfied_by(Resources())


class TestEvent:
    """Tests for Event accessors."""

    def test_available_choices(self):
        cheap = choice("cheap", "Cheap", requires(gold=10), effect("ok"))
        dear = choice("dear", "Dear", requires(gold=10_000), effect("ok"))
        event = make_event("e1", [cheap, dear])
        assert [c.id for c in event.get_available_choices(Resources())] == ["cheap"]
        assert event.get_choice("dear") is dear
        assert event.get_choice("missing") is None

    def test_standalone_event(self):
        event = make_event("solo")
        assert not event.is_part_of_chain()
        assert event.chain_id is None
        assert event.is_chain_start()
        assert event.is_chain_end()

    def test_expiry(self):
        now = datetime(2024, 1, 1, 12, 0)
        event = Event(
            id="x", title="x", description="", event_type=EventType.SOCIAL,
            expires_at=now,
        )
        assert not event.is_expired(now)
        assert event.is_expired(now + timedelta(seconds=1))
        assert not make_event("never").is_expired(now)

    def test_builders(self):
        """effect() lists only the given resource fields; others are zero."""
        consequence = effect("Paid", stability=5, gold=-50)
        assert consequence.resource_change == Resources(
            gold=-50, influence=0, loyalty=0, population=0, military_power=0
        )
        assert consequence.stability_change == 5

        option = choice("c", "C", requires(), consequence, modifier="tag")
        assert option.next_event_modifier == "tag"
        assert choice("d", "D", requires(), consequence).next_event_modifier is None

    def test_dict_round_trip(self):
        """Chain links, choices and expiry survive serialization."""
        option = choice(
            "pay", "Pay up", requires(gold=5), effect("Paid", gold=-5),
            long_term=(effect("Later", influence=1),), modifier="paid",
        )
        linked = link_events("c1", [make_event("a", [option]), make_event("b")])
        first = linked[0]
        restored = Event.from_dict(first.to_dict())
        assert restored == first

    def test_choice_from_dict_defaults(self):
        restored = EventChoice.from_dict({"id": "bare"})
        assert restored.requirements == ResourceRequirement()
        assert restored.chain_data is None


class TestLinkEvents:
    """Tests for link_events."""

    def test_positions_and_neighbours(self):
        a, b, c = link_events("c1", [make_event("a"), make_event("b"), make_event("c")])
        assert [e.chain_position for e in (a, b, c)] == [1, 2, 3]
        assert a.previous_event_id is None and a.next_event_id == "b"
        assert b.previous_event_id == "a" and b.next_event_id == "c"
        assert c.next_event_id is None
        assert all(e.chain.chain_length == 3 for e in (a, b, c))
        assert a.is_chain_start() and c.is_chain_end()
        assert not b.is_chain_start() and not b.is_chain_end()

    def test_originals_untouched(self):
        original = make_event("a")
        link_events("c1", [original, make_event("b")])
        assert original.chain is None


# =============================================================================
# PATH INFERENCE
# =============================================================================


class TestPathInference:
    """Tests for infer_chain_path and determine_chain_path."""

    def test_peaceful_majority(self):
        assert infer_chain_path(["investigate_peacefully", "negotiate_compromise"]) == ChainPath.PEACEFUL

    def test_tie_is_aggressive(self):
        assert infer_chain_path(["negotiate_terms", "show_force"]) == ChainPath.AGGRESSIVE

    def test_no_markers_is_aggressive(self):
        assert infer_chain_path([]) == ChainPath.AGGRESSIVE
        assert infer_chain_path(["ignore_rumors"]) == ChainPath.AGGRESSIVE

    def test_peaceful_marker_checked_first(self):
        """An id with both kinds of marker counts as peaceful only."""
        assert infer_chain_path(["negotiate_control"]) == ChainPath.PEACEFUL

    def test_path_keys_per_chain(self):
        peaceful = ["embrace_movement"]
        assert determine_chain_path("noble_rebellion", peaceful) == "path_peaceful"
        assert determine_chain_path("merchant_expansion", peaceful) == "path_cooperation"
        assert determine_chain_path("religious_awakening", peaceful) == "path_embrace"
        assert determine_chain_path("religious_awakening", []) == "path_secular"

    def test_unknown_chain(self):
        assert determine_chain_path("dragon_attack", ["negotiate"]) == "default"


# =============================================================================
# CHAIN SERVICE
# =============================================================================


class TestEventChainService:
    """Tests for EventChainService."""

    def test_create_event_chain(self, chain_service):
        linked = chain_service.create_event_chain([make_event("a"), make_event("b")])
        assert all(e.chain_id == "chain_test" for e in linked)
        assert linked[0].next_event_id == "b"

    def test_single_event_rejected(self, chain_service):
        with pytest.raises(ChainConstructionError):
            chain_service.create_event_chain([make_event("a")])

    def test_default_ids_are_unique(self):
        service = EventChainService()
        first = service.create_event_chain([make_event("a"), make_event("b")])
        second = service.create_event_chain([make_event("a"), make_event("b")])
        assert first[0].chain_id != second[0].chain_id

    def test_get_next_in_chain(self, chain_service):
        a, b = chain_service.create_event_chain([make_event("a"), make_event("b")])
        assert chain_service.get_next_in_chain(a) == "b"
        assert chain_service.get_next_in_chain(b) is None
        assert chain_service.get_next_in_chain(make_event("solo")) is None

    def test_process_chain_choice(self, chain_service):
        """The choice is recorded and its modifier reported."""
        option = choice("negotiate", "Talk", requires(), effect("ok"), modifier="talked")
        a, b = chain_service.create_event_chain([make_event("a", [option]), make_event("b")])
        context = chain_service.get_chain_context(a.chain_id)
        stamp = datetime(2024, 5, 1)

        outcome = chain_service.process_chain_choice(a, option, context, timestamp=stamp)

        assert outcome.next_event_id == "b"
        assert outcome.modifiers == {"choice_modifier": "talked"}
        assert context.choice_ids == ["negotiate"]
        assert context.previous_choices[0].event_id == "a"
        assert context.previous_choices[0].timestamp == stamp
        assert context.current_position == 1

    def test_process_choice_outside_chain(self, chain_service):
        option = choice("x", "X", requires(), effect("ok"))
        event = make_event("solo", [option])
        context = ChainContext(chain_id="none")
        outcome = chain_service.process_chain_choice(event, option, context)
        assert outcome.next_event_id is None
        assert outcome.modifiers == {}
        assert context.previous_choices == []

    def test_completion_reward(self, chain_service):
        context = ChainContext(
            chain_id="noble_rebellion",
            previous_choices=[
                ChainChoice(event_id="noble_rebellion_1", choice_id="show_force"),
                ChainChoice(event_id="noble_rebellion_2", choice_id="prepare_suppression"),
                ChainChoice(event_id="noble_rebellion_3", choice_id="force_surrender"),
            ],
        )
        reward = chain_service.get_chain_completion_reward("noble_rebellion", context)
        assert reward.title == "Iron Fist Victory"
        assert reward.resources.military_power == 150
        assert reward.unlocks == ("military_advisor_upgrade",)

    def test_no_reward_for_unknown_chain(self, chain_service):
        assert chain_service.get_chain_completion_reward(
            "dragon_attack", ChainContext(chain_id="dragon_attack")
        ) is None

    def test_is_chain_complete(self, chain_service):
        a, b = chain_service.create_event_chain([make_event("a"), make_event("b")])
        assert not chain_service.is_chain_complete(a)
        assert chain_service.is_chain_complete(b)

    def test_fresh_context(self, chain_service):
        context = chain_service.get_chain_context("c1")
        assert context.chain_id == "c1"
        assert context.previous_choices == []
        assert context.current_position == 1
