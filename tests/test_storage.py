"""
Tests for the in-memory and JSON store adapters.
"""

import json

import pytest

from kingdom_sim.data_models import AdvisorType, FactionType, ResourceType
from kingdom_sim.events.chains import create_noble_rebellion_chain
from kingdom_sim.events.event_models import ChainChoice
from kingdom_sim.storage import InMemoryEventStore, InMemoryKingdomStore, JsonKingdomStore


# =============================================================================
# KINGDOM STORES
# =============================================================================


class TestInMemoryKingdomStore:

    def test_save_and_find(self, kingdom):
        store = InMemoryKingdomStore()
        assert store.find_by_id(kingdom.id) is None
        store.save(kingdom)
        assert store.exists(kingdom.id)
        assert store.find_by_id(kingdom.id).name == "Avalon"
        assert store.find_by_name("Avalon").id == kingdom.id
        assert store.find_by_name("Camelot") is None

    def test_reads_are_copies(self, kingdom):
        """Mutating a loaded kingdom does not change the stored one."""
        store = InMemoryKingdomStore()
        store.save(kingdom)
        loaded = store.find_by_id(kingdom.id)
        loaded.add_resource(ResourceType.GOLD, 999)
        assert store.find_by_id(kingdom.id).get_resource(ResourceType.GOLD) == 0

    def test_clear(self, kingdom):
        store = InMemoryKingdomStore()
        store.save(kingdom)
        store.clear()
        assert not store.exists(kingdom.id)


class TestJsonKingdomStore:
    """Tests for the JSON file store."""

    def test_save_writes_versioned_document(self, tmp_path, kingdom):
        store = JsonKingdomStore(tmp_path)
        store.save(kingdom)
        data = json.loads((tmp_path / "kingdom-1.json").read_text(encoding="utf-8"))
        assert data["version"] == 1
        assert data["kingdom"]["name"] == "Avalon"

    def test_round_trip(self, tmp_path, kingdom):
        kingdom.add_resource(ResourceType.FAITH, 42)
        kingdom.factions[FactionType.MILITARY].set_approval(12)
        kingdom.add_advisor(AdvisorType.SPYMASTER)
        store = JsonKingdomStore(tmp_path)
        store.save(kingdom)

        loaded = store.find_by_id("kingdom-1")
        assert loaded.get_resource(ResourceType.FAITH) == 42
        assert loaded.factions[FactionType.MILITARY].approval_rating == 12
        assert loaded.advisors[0].name == "spymaster 1"

    def test_find_by_name(self, tmp_path, kingdom, wealthy_kingdom):
        store = JsonKingdomStore(tmp_path)
        store.save(kingdom)
        store.save(wealthy_kingdom)
        assert store.find_by_name("Eldoria").id == "kingdom-2"
        assert store.find_by_name("Nowhere") is None

    def test_missing_and_corrupt(self, tmp_path):
        store = JsonKingdomStore(tmp_path)
        assert store.find_by_id("absent") is None
        (tmp_path / "broken.json").write_text("{nope")
        assert store.find_by_id("broken") is None

    def test_list_and_delete(self, tmp_path, kingdom, wealthy_kingdom):
        store = JsonKingdomStore(tmp_path)
        store.save(wealthy_kingdom)
        store.save(kingdom)
        assert [s["name"] for s in store.list_kingdoms()] == ["Avalon", "Eldoria"]
        assert store.delete("kingdom-1")
        assert not store.exists("kingdom-1")
        assert not store.delete("kingdom-1")

    def test_creates_directory(self, tmp_path):
        target = tmp_path / "deep" / "saves"
        JsonKingdomStore(target)
        assert target.is_dir()


# =============================================================================
# EVENT STORE
# =============================================================================


@pytest.fixture
def event_store() -> InMemoryEventStore:
    store = InMemoryEventStore()
    store.save_all(create_noble_rebellion_chain())
    return store


class TestInMemoryEventStore:
    """Tests for per-kingdom event bookkeeping."""

    def test_find_by_chain_sorted(self, event_store):
        events = event_store.find_by_chain_id("noble_rebellion")
        assert [e.chain_position for e in events] == [1, 2, 3]

    def test_activation_is_per_kingdom(self, event_store):
        event_store.activate_for_kingdom("noble_rebellion_1", "k1")
        assert [e.id for e in event_store.find_active_events("k1")] == ["noble_rebellion_1"]
        assert event_store.find_active_events("k2") == []

    def test_mark_processed(self, event_store):
        event_store.activate_for_kingdom("noble_rebellion_1", "k1")
        event_store.mark_as_processed("noble_rebellion_1", "k1")
        assert event_store.find_active_events("k1") == []

    def test_unknown_event(self, event_store):
        with pytest.raises(KeyError):
            event_store.activate_for_kingdom("missing", "k1")
        with pytest.raises(KeyError):
            event_store.mark_as_processed("missing", "k1")

    def test_next_event(self, event_store):
        assert event_store.get_next_event_in_chain("noble_rebellion_1").id == "noble_rebellion_2"
        assert event_store.get_next_event_in_chain("noble_rebellion_3") is None

    def test_chain_choices(self, event_store):
        choice = ChainChoice(event_id="noble_rebellion_1", choice_id="show_force")
        event_store.save_chain_choice("k1", "noble_rebellion", choice)
        assert event_store.get_chain_choices("k1", "noble_rebellion") == [choice]
        assert event_store.get_chain_choices("k2", "noble_rebellion") == []

    def test_chain_complete_after_last_event(self, event_store):
        assert not event_store.is_chain_complete("k1", "noble_rebellion")
        event_store.mark_as_processed("noble_rebellion_3", "k1")
        assert event_store.is_chain_complete("k1", "noble_rebellion")
        assert not event_store.is_chain_complete("k2", "noble_rebellion")
        assert not event_store.is_chain_complete("k1", "unknown_chain")

    def test_reset_chain(self, event_store):
        """Resetting forgets one kingdom's run of a chain and nothing else."""
        event_store.activate_for_kingdom("noble_rebellion_1", "k1")
        event_store.activate_for_kingdom("noble_rebellion_1", "k2")
        for event_id in ("noble_rebellion_1", "noble_rebellion_2", "noble_rebellion_3"):
            event_store.mark_as_processed(event_id, "k1")
        event_store.save_chain_choice(
            "k1", "noble_rebellion", ChainChoice(event_id="noble_rebellion_1", choice_id="x")
        )

        event_store.reset_chain("k1", "noble_rebellion")
        assert not event_store.is_chain_complete("k1", "noble_rebellion")
        assert event_store.get_chain_choices("k1", "noble_rebellion") == []
        assert event_store.find_active_events("k1") == []
        assert [e.id for e in event_store.find_active_events("k2")] == ["noble_rebellion_1"]

        event_store.activate_for_kingdom("noble_rebellion_1", "k1")
        assert [e.id for e in event_store.find_active_events("k1")] == ["noble_rebellion_1"]
