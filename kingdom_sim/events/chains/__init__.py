"""
Authored event chains and their registry.
"""

from typing import Callable

from kingdom_sim.events.chains.merchant_guild import create_merchant_guild_chain
from kingdom_sim.events.chains.noble_rebellion import create_noble_rebellion_chain
from kingdom_sim.events.chains.religious_awakening import create_religious_awakening_chain
from kingdom_sim.events.event_models import Event

# Registered chain id -> factory producing the linked events in order.
CHAIN_FACTORIES: dict[str, Callable[[], list[Event]]] = {
    "noble_rebellion": create_noble_rebellion_chain,
    "merchant_expansion": create_merchant_guild_chain,
    "religious_awakening": create_religious_awakening_chain,
}

__all__ = [
    "CHAIN_FACTORIES",
    "create_merchant_guild_chain",
    "create_noble_rebellion_chain",
    "create_religious_awakening_chain",
]
