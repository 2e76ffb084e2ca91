"""
The noble rebellion: a three-step political crisis with the noble houses.
"""

from kingdom_sim.data_models import EventType
from kingdom_sim.events.chains.chain_builders import choice, effect, requires
from kingdom_sim.events.event_models import Event, link_events

CHAIN_ID = "noble_rebellion"


def create_noble_rebellion_chain() -> list[Event]:
    conspiracy = Event(
        id="noble_rebellion_1",
        title="The Noble Conspiracy",
        description=(
            "Your spies have uncovered a conspiracy among several noble houses. They are "
            "dissatisfied with recent tax increases and are secretly meeting to discuss "
            "their grievances. How will you respond to this early warning?"
        ),
        event_type=EventType.POLITICAL,
        choices=(
            choice(
                "investigate_peacefully",
                "Send diplomats to investigate and address their concerns",
                requires(gold=50, influence=100),
                effect(
                    "Your diplomatic approach is appreciated by some nobles.",
                    stability=5, loyalty_change=10,
                    gold=-50, influence=-100, loyalty=20,
                ),
                modifier="diplomatic_approach",
            ),
            choice(
                "show_force",
                "Deploy troops near noble estates as a show of strength",
                requires(gold=100, military_power=150),
                effect(
                    "The nobles see your military display as a threat.",
                    stability=-10, loyalty_change=-15,
                    gold=-100, influence=50, loyalty=-30, military_power=-50,
                ),
                modifier="military_approach",
            ),
            choice(
                "ignore_rumors",
                "Dismiss the reports as mere rumors and take no action",
                requires(),
                effect(
                    "Your inaction emboldens the conspirators.",
                    stability=-5, loyalty_change=-5,
                    influence=-20, loyalty=-10,
                ),
                modifier="ignored_warning",
            ),
        ),
    )

    demands = Event(
        id="noble_rebellion_2",
        title="The Demands Escalate",
        description=(
            "The noble houses have now formed a formal coalition and present a list of "
            "demands: reduced taxes, greater autonomy, and positions in your royal court. "
            "Their movement is gaining support among lesser nobles."
        ),
        event_type=EventType.POLITICAL,
        choices=(
            choice(
                "negotiate_compromise",
                "Negotiate a compromise, granting some concessions",
                requires(gold=200, influence=150),
                effect(
                    "The nobles appreciate your willingness to negotiate.",
                    stability=15, loyalty_change=20,
                    gold=-200, influence=-150, loyalty=50,
                ),
                long_term=(
                    effect(
                        "Ongoing tax reduction as per agreement.",
                        stability=5, loyalty_change=5,
                        gold=-50, influence=25, loyalty=10,
                    ),
                ),
                modifier="negotiated_peace",
            ),
            choice(
                "divide_conquer",
                "Attempt to divide the coalition by bribing key nobles",
                requires(gold=500, influence=100),
                effect(
                    "Some nobles accept your bribes, weakening the coalition.",
                    stability=0, loyalty_change=-10,
                    gold=-500, influence=-100,
                ),
                modifier="coalition_weakened",
            ),
            choice(
                "prepare_suppression",
                "Reject all demands and prepare to suppress the rebellion",
                requires(gold=300, military_power=250),
                effect(
                    "Your rejection sparks immediate unrest.",
                    stability=-20, loyalty_change=-25,
                    gold=-300, influence=100, loyalty=-50, population=-50,
                    military_power=-100,
                ),
                modifier="prepared_for_war",
            ),
        ),
    )

    confrontation = Event(
        id="noble_rebellion_3",
        title="The Final Confrontation",
        description=(
            "The situation has reached a critical point. The noble coalition stands at the "
            "gates of your capital with their armies. This is the moment that will define "
            "your reign and the future relationship with the nobility."
        ),
        event_type=EventType.POLITICAL,
        choices=(
            choice(
                "peaceful_resolution",
                "Achieve a peaceful resolution through a grand council",
                requires(gold=300, influence=200, loyalty=50),
                effect(
                    "A historic peace accord is signed, ending the crisis.",
                    stability=30, loyalty_change=40,
                    gold=-300, influence=-200, loyalty=100, population=100,
                ),
                long_term=(
                    effect(
                        "The new noble council brings prosperity.",
                        stability=10, loyalty_change=10,
                        gold=100, influence=50, loyalty=20, population=50,
                    ),
                ),
            ),
            choice(
                "force_surrender",
                "Use overwhelming force to crush the rebellion",
                requires(gold=500, military_power=500),
                effect(
                    "The rebellion is crushed, but at great cost.",
                    stability=-30, loyalty_change=-50,
                    gold=-500, influence=150, loyalty=-100, population=-200,
                    military_power=-300,
                ),
                long_term=(
                    effect(
                        "Fear keeps the nobles in line, but resentment lingers.",
                        stability=-5, loyalty_change=-5,
                        gold=50, influence=25, loyalty=-10, population=-25,
                        military_power=50,
                    ),
                ),
            ),
            choice(
                "abdicate_compromise",
                "Abdicate in favor of a compromise candidate",
                requires(influence=300, loyalty=100),
                effect(
                    "Your noble sacrifice prevents civil war.",
                    stability=20, loyalty_change=0,
                    gold=1000, influence=-300,
                ),
            ),
        ),
    )

    return link_events(CHAIN_ID, [conspiracy, demands, confrontation])
