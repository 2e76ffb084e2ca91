"""
The merchant expansion: four economic events following the guild's rise.
"""

from kingdom_sim.data_models import EventType
from kingdom_sim.events.chains.chain_builders import choice, effect, requires
from kingdom_sim.events.event_models import Event, link_events

CHAIN_ID = "merchant_expansion"


def create_merchant_guild_chain() -> list[Event]:
    proposal = Event(
        id="merchant_guild_1",
        title="The Guild Proposal",
        description=(
            "The Merchant Guild approaches you with an ambitious proposal: they wish to "
            "establish new trade routes to distant lands. They promise great wealth, but "
            "request reduced tariffs and greater autonomy in return."
        ),
        event_type=EventType.ECONOMIC,
        choices=(
            choice(
                "full_support",
                "Fully support the guild with funding and privileges",
                requires(gold=500, influence=100),
                effect(
                    "The merchants are delighted with your support.",
                    stability=10, loyalty_change=15,
                    gold=-500, influence=-100, loyalty=20, population=50,
                ),
                modifier="full_cooperation",
            ),
            choice(
                "limited_support",
                "Offer limited support with strict royal oversight",
                requires(gold=200, influence=50, military_power=50),
                effect(
                    "The guild accepts your terms reluctantly.",
                    stability=5,
                    gold=-200, influence=-50, population=25,
                ),
                modifier="controlled_expansion",
            ),
            choice(
                "royal_monopoly",
                "Reject the guild and establish a royal trading company",
                requires(gold=800, influence=150, military_power=100),
                effect(
                    "The guild is outraged by your power grab.",
                    stability=-10, loyalty_change=-20,
                    gold=-800, influence=-150, loyalty=-30, military_power=-50,
                ),
                modifier="royal_control",
            ),
        ),
    )

    returns = Event(
        id="merchant_guild_2",
        title="First Trade Returns",
        description=(
            "The first merchant caravans have returned from their journeys. The results are "
            "mixed - some routes are highly profitable, others face bandit attacks and "
            "political obstacles. The guild requests additional resources to secure the routes."
        ),
        event_type=EventType.ECONOMIC,
        choices=(
            choice(
                "military_escort",
                "Provide military escorts for all trade caravans",
                requires(gold=300, military_power=200),
                effect(
                    "Trade routes are now secure and profitable.",
                    stability=15, loyalty_change=10,
                    gold=-300, influence=50, loyalty=10, military_power=-100,
                ),
                long_term=(
                    effect(
                        "Secure trade brings steady income.",
                        stability=5, loyalty_change=5,
                        gold=150, influence=10, loyalty=5, population=25,
                    ),
                ),
                modifier="secured_routes",
            ),
            choice(
                "diplomatic_solution",
                "Use diplomacy to secure safe passage agreements",
                requires(gold=400, influence=200),
                effect(
                    "Treaties ensure peaceful trade relations.",
                    stability=20, loyalty_change=15,
                    gold=-400, influence=-200, loyalty=30, population=50,
                ),
                modifier="diplomatic_trade",
            ),
            choice(
                "abandon_risky",
                "Abandon risky routes and focus on safe ones",
                requires(influence=50),
                effect(
                    "The guild is disappointed but complies.",
                    loyalty_change=-5,
                    gold=100, influence=-50, loyalty=-10,
                ),
                modifier="conservative_approach",
            ),
        ),
    )

    competition = Event(
        id="merchant_guild_3",
        title="Foreign Competition",
        description=(
            "A powerful foreign trading company has arrived, offering better prices and "
            "exotic goods. The local Merchant Guild demands protection from this "
            "competition, warning that many local traders may go bankrupt."
        ),
        event_type=EventType.ECONOMIC,
        choices=(
            choice(
                "protect_local",
                "Impose heavy tariffs on foreign traders",
                requires(influence=150, military_power=100),
                effect(
                    "Local merchants cheer your protectionist policies.",
                    stability=10, loyalty_change=20,
                    gold=200, influence=-150, loyalty=40, military_power=-50,
                ),
                modifier="protectionist",
            ),
            choice(
                "free_market",
                "Allow free competition to benefit consumers",
                requires(influence=100, loyalty=50),
                effect(
                    "Cheaper goods please the people, but merchants suffer.",
                    stability=-10, loyalty_change=-20,
                    gold=300, influence=-100, loyalty=-40, population=100,
                ),
                modifier="open_market",
            ),
            choice(
                "merge_companies",
                "Negotiate a merger between local and foreign traders",
                requires(gold=600, influence=250),
                effect(
                    "A new powerful trading consortium is formed.",
                    stability=25, loyalty_change=15,
                    gold=-600, influence=-250, loyalty=20, population=150,
                ),
                long_term=(
                    effect(
                        "The merged company brings prosperity.",
                        stability=10, loyalty_change=5,
                        gold=200, influence=30, loyalty=10, population=50,
                    ),
                ),
                modifier="merged_trade",
            ),
        ),
    )

    empire = Event(
        id="merchant_guild_4",
        title="The Trade Empire",
        description=(
            "Your kingdom has become a major trading hub. The Merchant Guild now wields "
            "enormous influence and wealth. They propose creating a formal Trade Council "
            "with significant political power. This decision will shape your kingdom's "
            "economic future."
        ),
        event_type=EventType.ECONOMIC,
        choices=(
            choice(
                "trade_council",
                "Establish the Trade Council as a formal institution",
                requires(gold=1000, influence=300, loyalty=100),
                effect(
                    "The Trade Council ushers in an era of prosperity.",
                    stability=40, loyalty_change=30,
                    gold=-1000, influence=-300, loyalty=50, population=300,
                ),
                long_term=(
                    effect(
                        "The Trade Council generates wealth and stability.",
                        stability=15, loyalty_change=10,
                        gold=300, influence=50, loyalty=20, population=100,
                    ),
                ),
            ),
            choice(
                "royal_commerce",
                "Maintain royal control over all major trade",
                requires(gold=500, influence=200, military_power=300),
                effect(
                    "You maintain control but face merchant resentment.",
                    stability=10, loyalty_change=-10,
                    gold=-500, influence=-200, loyalty=-20, population=100,
                    military_power=-150,
                ),
                long_term=(
                    effect(
                        "Royal trade monopoly provides steady income.",
                        stability=5, loyalty_change=-5,
                        gold=150, influence=30, loyalty=-5, population=25,
                        military_power=25,
                    ),
                ),
            ),
            choice(
                "merchant_republic",
                "Transform into a merchant republic",
                requires(gold=2000, influence=500, loyalty=200),
                effect(
                    "A new era of merchant rule begins!",
                    stability=50, loyalty_change=40,
                    gold=-2000, influence=-500, loyalty=100, population=500,
                ),
                long_term=(
                    effect(
                        "The merchant republic thrives.",
                        stability=20, loyalty_change=15,
                        gold=500, influence=100, loyalty=30, population=150,
                    ),
                ),
            ),
        ),
    )

    return link_events(CHAIN_ID, [proposal, returns, competition, empire])
