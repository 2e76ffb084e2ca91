"""
Faction relation graph and its loader.

The graph bundles every static table the faction service reads:
- Directed relation weights in [-1, 1] between each ordered pair of kinds
- Base power per kind
- Approval thresholds per kind, with a fallback entry
- Unrest and rebellion flavour text per kind

It is immutable once built. Callers get copies, never the internal tables.
"""

from __future__ import annotations

import copy
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

from kingdom_sim.data_models import FactionType
from kingdom_sim.factions.faction_models import (
    ApprovalThresholds,
    FactionEventTemplate,
    UnknownFactionError,
    parse_faction_type,
)

logger = logging.getLogger(__name__)

RelationTable = dict[FactionType, dict[FactionType, float]]
TemplateTable = dict[FactionType, tuple[FactionEventTemplate, ...]]


# =============================================================================
# DEFAULT TABLES
# =============================================================================

N, ME, MI, CL, CO = (
    FactionType.NOBILITY,
    FactionType.MERCHANTS,
    FactionType.MILITARY,
    FactionType.CLERGY,
    FactionType.COMMONERS,
)

DEFAULT_RELATIONS: RelationTable = {
    N: {ME: -0.3, MI: 0.2, CL: 0.1, CO: -0.6},
    ME: {N: -0.3, MI: -0.4, CL: -0.2, CO: 0.1},
    MI: {N: 0.2, ME: -0.4, CL: 0.0, CO: -0.2},
    CL: {N: 0.1, ME: -0.2, MI: 0.0, CO: 0.3},
    CO: {N: -0.6, ME: 0.1, MI: -0.2, CL: 0.3},
}

DEFAULT_POWER_BASE: dict[FactionType, float] = {
    N: 1.5,
    ME: 1.2,
    MI: 1.3,
    CL: 1.0,
    CO: 0.8,
}

DEFAULT_THRESHOLDS: dict[FactionType, ApprovalThresholds] = {
    N: ApprovalThresholds(rebellion=15, unrest=30, discontent=45, stable=60, supportive=80),
    ME: ApprovalThresholds(rebellion=10, unrest=25, discontent=40, stable=55, supportive=75),
    MI: ApprovalThresholds(rebellion=20, unrest=35, discontent=50, stable=65, supportive=85),
    CL: ApprovalThresholds(rebellion=25, unrest=40, discontent=55, stable=70, supportive=85),
    CO: ApprovalThresholds(rebellion=20, unrest=35, discontent=50, stable=60, supportive=75),
}

FALLBACK_THRESHOLDS = ApprovalThresholds(
    rebellion=20, unrest=35, discontent=50, stable=65, supportive=80
)

DEFAULT_REBELLION_EVENTS: TemplateTable = {
    N: (
        FactionEventTemplate("FactionRebellion", "Noble houses plot against the crown"),
        FactionEventTemplate("NobleRevolt", "Major lords withdraw their support"),
    ),
    ME: (
        FactionEventTemplate("EconomicSabotage", "Merchants organize trade embargo"),
        FactionEventTemplate("FactionRebellion", "Guild masters refuse to pay taxes"),
    ),
    MI: (
        FactionEventTemplate("MilitaryCoup", "Generals plot to seize power"),
        FactionEventTemplate("FactionRebellion", "Army units refuse orders"),
    ),
    CL: (
        FactionEventTemplate("ReligiousSchism", "Church declares ruler illegitimate"),
        FactionEventTemplate("FactionRebellion", "Priests incite religious uprising"),
    ),
    CO: (
        FactionEventTemplate("PeasantUprising", "Widespread riots in the streets"),
        FactionEventTemplate("FactionRebellion", "Common folk storm the palace gates"),
    ),
}

DEFAULT_UNREST_EVENTS: TemplateTable = {
    N: (
        FactionEventTemplate("FactionUnrest", "Noble families openly criticize the crown"),
        FactionEventTemplate("NobleProtest", "Lords refuse to attend court"),
    ),
    ME: (
        FactionEventTemplate("FactionUnrest", "Merchants raise prices in protest"),
        FactionEventTemplate("TradeStrike", "Guilds threaten to close shops"),
    ),
    MI: (
        FactionEventTemplate("FactionUnrest", "Soldiers grumble about conditions"),
        FactionEventTemplate("MilitaryComplaint", "Officers petition for better treatment"),
    ),
    CL: (
        FactionEventTemplate("FactionUnrest", "Priests speak against royal policies"),
        FactionEventTemplate("ReligiousProtest", "Church bells ring in protest"),
    ),
    CO: (
        FactionEventTemplate("FactionUnrest", "Angry crowds gather in squares"),
        FactionEventTemplate("CommonerStrike", "Workers abandon their posts"),
    ),
}

GENERIC_REBELLION_EVENT = FactionEventTemplate("FactionRebellion", "Faction rises in open revolt")
GENERIC_UNREST_EVENT = FactionEventTemplate("FactionUnrest", "Faction shows signs of unrest")


# =============================================================================
# RELATION GRAPH
# =============================================================================


class FactionRelationGraph:
    """
    Immutable bundle of faction tables.

    Built from the defaults above unless explicit tables are given; partial
    tables are merged over the defaults.
    """

    def __init__(
        self,
        relations: Optional[RelationTable] = None,
        power_base: Optional[dict[FactionType, float]] = None,
        thresholds: Optional[dict[FactionType, ApprovalThresholds]] = None,
        fallback_thresholds: Optional[ApprovalThresholds] = None,
        rebellion_events: Optional[TemplateTable] = None,
        unrest_events: Optional[TemplateTable] = None,
    ):
        self._relations: RelationTable = copy.deepcopy(DEFAULT_RELATIONS)
        for source, row in (relations or {}).items():
            self._relations.setdefault(source, {}).update(row)

        self._power_base = {**DEFAULT_POWER_BASE, **(power_base or {})}
        self._thresholds = {**DEFAULT_THRESHOLDS, **(thresholds or {})}
        self._fallback_thresholds = fallback_thresholds or FALLBACK_THRESHOLDS
        self._rebellion_events = {**DEFAULT_REBELLION_EVENTS, **(rebellion_events or {})}
        self._unrest_events = {**DEFAULT_UNREST_EVENTS, **(unrest_events or {})}

    def relation(self, source: FactionType, target: FactionType) -> float:
        """Directed weight from source to target; 0 for self or unknown pairs."""
        if source == target:
            return 0.0
        return self._relations.get(source, {}).get(target, 0.0)

    def relations(self) -> RelationTable:
        """Deep copy of the full relation table."""
        return copy.deepcopy(self._relations)

    def power_base(self, faction_type: FactionType) -> float:
        return self._power_base.get(faction_type, 1.0)

    def thresholds(self, faction_type: FactionType) -> ApprovalThresholds:
        return self._thresholds.get(faction_type, self._fallback_thresholds)

    def rebellion_events(self, faction_type: FactionType) -> tuple[FactionEventTemplate, ...]:
        return self._rebellion_events.get(faction_type) or (GENERIC_REBELLION_EVENT,)

    def unrest_events(self, faction_type: FactionType) -> tuple[FactionEventTemplate, ...]:
        return self._unrest_events.get(faction_type) or (GENERIC_UNREST_EVENT,)

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "relations": {
                source.value: {target.value: weight for target, weight in row.items()}
                for source, row in self._relations.items()
            },
            "power_base": {ft.value: power for ft, power in self._power_base.items()},
            "thresholds": {ft.value: t.to_dict() for ft, t in self._thresholds.items()},
            "fallback_thresholds": self._fallback_thresholds.to_dict(),
            "rebellion_events": _templates_to_dict(self._rebellion_events),
            "unrest_events": _templates_to_dict(self._unrest_events),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FactionRelationGraph:
        """
        Build a graph from a (possibly partial) document.

        Raises:
            UnknownFactionError: If a key does not name a faction kind
            ValueError: If a relation weight lies outside [-1, 1]
        """
        relations: RelationTable = {}
        for source_id, row in data.get("relations", {}).items():
            source = parse_faction_type(source_id)
            relations[source] = {}
            for target_id, weight in row.items():
                weight = float(weight)
                if not -1.0 <= weight <= 1.0:
                    raise ValueError(
                        f"Relation weight {source_id}->{target_id} out of range: {weight}"
                    )
                relations[source][parse_faction_type(target_id)] = weight

        power_base = {
            parse_faction_type(k): float(v)
            for k, v in data.get("power_base", {}).items()
        }
        thresholds = {
            parse_faction_type(k): ApprovalThresholds.from_dict(v)
            for k, v in data.get("thresholds", {}).items()
        }
        fallback = data.get("fallback_thresholds")

        return cls(
            relations=relations,
            power_base=power_base,
            thresholds=thresholds,
            fallback_thresholds=ApprovalThresholds.from_dict(fallback) if fallback else None,
            rebellion_events=_templates_from_dict(data.get("rebellion_events", {})),
            unrest_events=_templates_from_dict(data.get("unrest_events", {})),
        )


def _templates_to_dict(table: TemplateTable) -> dict[str, list[dict[str, str]]]:
    return {
        ft.value: [{"event_type": t.event_type, "description": t.description} for t in entries]
        for ft, entries in table.items()
    }


def _templates_from_dict(data: dict[str, Any]) -> TemplateTable:
    return {
        parse_faction_type(ft): tuple(
            FactionEventTemplate(entry["event_type"], entry["description"])
            for entry in entries
        )
        for ft, entries in data.items()
    }


# =============================================================================
# LOADER
# =============================================================================


@dataclass
class RelationsLoadResult:
    """Result of loading a relation graph document."""
    success: bool
    graph: Optional[FactionRelationGraph] = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


class FactionRelationsLoader:
    """Loads a FactionRelationGraph from a JSON file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> RelationsLoadResult:
        """
        Load the graph document.

        A missing file is not an error: the default graph is returned with a
        warning.
        """
        result = RelationsLoadResult(success=False)

        if not self.path.exists():
            result.warnings.append(f"Relations file not found: {self.path}, using defaults")
            logger.warning(f"Relations file not found: {self.path}, using defaults")
            result.graph = FactionRelationGraph()
            result.success = True
            return result

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            result.errors.append(f"Invalid JSON in {self.path}: {e}")
            return result

        try:
            result.graph = FactionRelationGraph.from_dict(data)
        except (UnknownFactionError, ValueError, KeyError, TypeError) as e:
            result.errors.append(f"Invalid relation graph in {self.path}: {e}")
            return result

        result.success = True
        logger.info(f"Loaded faction relation graph from {self.path}")
        return result
