"""
The religious awakening: a prophet's movement reshapes the realm's faith.
"""

from kingdom_sim.data_models import EventType
from kingdom_sim.events.chains.chain_builders import choice, effect, requires
from kingdom_sim.events.event_models import Event, link_events

CHAIN_ID = "religious_awakening"


def create_religious_awakening_chain() -> list[Event]:
    prophet = Event(
        id="religious_awakening_1",
        title="The Prophet Arrives",
        description=(
            "A charismatic prophet has arrived in your kingdom, preaching a message of "
            "spiritual renewal and social reform. Crowds gather wherever they speak, and "
            "their following grows daily. How will you respond to this religious movement?"
        ),
        event_type=EventType.SOCIAL,
        choices=(
            choice(
                "embrace_prophet",
                "Welcome the prophet and embrace the movement",
                requires(gold=100, influence=150, loyalty=50),
                effect(
                    "The people rejoice at your spiritual leadership.",
                    stability=15, loyalty_change=30,
                    gold=-100, influence=-150, loyalty=80, population=100,
                ),
                modifier="religious_supporter",
            ),
            choice(
                "tolerate_movement",
                "Allow the movement but maintain distance",
                requires(influence=50, military_power=50),
                effect(
                    "Your tolerance is noted but lacks enthusiasm.",
                    stability=5, loyalty_change=10,
                    influence=-50, loyalty=20, population=50,
                ),
                modifier="neutral_stance",
            ),
            choice(
                "suppress_prophet",
                "Declare the prophet a heretic and ban the movement",
                requires(gold=200, military_power=200),
                effect(
                    "Your suppression angers many faithful citizens.",
                    stability=-20, loyalty_change=-30,
                    gold=-200, influence=100, loyalty=-60, population=-50,
                    military_power=-100,
                ),
                modifier="religious_opponent",
            ),
        ),
    )

    schism = Event(
        id="religious_awakening_2",
        title="The Great Schism",
        description=(
            "The religious movement has split your kingdom. Traditional clergy oppose the "
            "new teachings, while commoners embrace them enthusiastically. Tensions rise "
            "between old and new believers, threatening civil unrest."
        ),
        event_type=EventType.SOCIAL,
        choices=(
            choice(
                "reform_church",
                "Reform the official church to incorporate new teachings",
                requires(gold=500, influence=250, loyalty=100),
                effect(
                    "Religious unity is restored through reform.",
                    stability=20, loyalty_change=25,
                    gold=-500, influence=-250, loyalty=60, population=150,
                ),
                long_term=(
                    effect(
                        "The reformed church brings new vitality.",
                        stability=10, loyalty_change=10,
                        gold=50, influence=40, loyalty=20, population=50,
                    ),
                ),
                modifier="reformed_faith",
            ),
            choice(
                "enforce_tradition",
                "Support traditional clergy and suppress reformers",
                requires(gold=300, influence=100, military_power=300),
                effect(
                    "Enforcing tradition creates underground resistance.",
                    stability=-15, loyalty_change=-20,
                    gold=-300, influence=-100, loyalty=-40, population=-100,
                    military_power=-150,
                ),
                modifier="traditionalist",
            ),
            choice(
                "secular_state",
                "Declare religious neutrality and separate church from state",
                requires(gold=400, influence=300, loyalty=50, military_power=150),
                effect(
                    "Your secular approach confuses many citizens.",
                    stability=0, loyalty_change=-10,
                    gold=-400, influence=-300, loyalty=-20, population=50,
                    military_power=-50,
                ),
                modifier="secularist",
            ),
        ),
    )

    mandate = Event(
        id="religious_awakening_3",
        title="The Divine Mandate",
        description=(
            "The religious movement has reached its climax. The prophet claims to have "
            "received a divine vision about your kingdom's destiny. This moment will "
            "determine whether your realm becomes a theocracy, remains secular, or finds "
            "a middle path."
        ),
        event_type=EventType.SOCIAL,
        choices=(
            choice(
                "divine_kingdom",
                "Proclaim a holy kingdom under divine guidance",
                requires(gold=800, influence=400, loyalty=200),
                effect(
                    "Your kingdom is transformed into a beacon of faith.",
                    stability=50, loyalty_change=60,
                    gold=-800, influence=-400, loyalty=150, population=300,
                    military_power=100,
                ),
                long_term=(
                    effect(
                        "Divine blessing brings prosperity and unity.",
                        stability=20, loyalty_change=20,
                        gold=100, influence=80, loyalty=40, population=100,
                        military_power=50,
                    ),
                ),
            ),
            choice(
                "enlightened_monarchy",
                "Maintain secular rule while respecting all faiths",
                requires(gold=600, influence=350, loyalty=100, military_power=200),
                effect(
                    "You achieve a balance between faith and reason.",
                    stability=30, loyalty_change=20,
                    gold=-600, influence=-350, loyalty=40, population=200,
                    military_power=-100,
                ),
                long_term=(
                    effect(
                        "Religious tolerance fosters innovation.",
                        stability=15, loyalty_change=10,
                        gold=150, influence=60, loyalty=20, population=75,
                        military_power=25,
                    ),
                ),
            ),
            choice(
                "exile_prophet",
                "Exile the prophet and restore old order",
                requires(gold=400, influence=200, military_power=400),
                effect(
                    "The prophet's exile sparks riots and unrest.",
                    stability=-30, loyalty_change=-40,
                    gold=-400, influence=-200, loyalty=-80, population=-150,
                    military_power=-200,
                ),
                long_term=(
                    effect(
                        "Religious wounds heal slowly.",
                        stability=-10, loyalty_change=-10,
                        gold=50, influence=30, loyalty=-10, population=-25,
                        military_power=50,
                    ),
                ),
            ),
        ),
    )

    return link_events(CHAIN_ID, [prophet, schism, mandate])
