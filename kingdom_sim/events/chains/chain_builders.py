"""
Small constructors that keep the chain content files readable.
"""

from __future__ import annotations

from typing import Optional

from kingdom_sim.data_models import Resources
from kingdom_sim.events.event_models import (
    ChoiceChainData,
    EventChoice,
    EventConsequence,
    ResourceRequirement,
)


def requires(**amounts: float) -> ResourceRequirement:
    return ResourceRequirement(**amounts)


def effect(
    description: str,
    stability: float = 0,
    loyalty_change: float = 0,
    **resources: float,
) -> EventConsequence:
    """Consequence whose resource change lists only the non-zero fields."""
    return EventConsequence(
        resource_change=Resources.from_dict(resources),
        stability_change=stability,
        loyalty_change=loyalty_change,
        description=description,
    )


def choice(
    choice_id: str,
    description: str,
    requirements: ResourceRequirement,
    immediate: EventConsequence,
    long_term: tuple[EventConsequence, ...] = (),
    modifier: Optional[str] = None,
) -> EventChoice:
    return EventChoice(
        id=choice_id,
        description=description,
        requirements=requirements,
        immediate_effect=immediate,
        long_term_effects=long_term,
        chain_data=ChoiceChainData(modifier) if modifier else None,
    )

