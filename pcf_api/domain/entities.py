"""Internal domain entities used by the emissions aggregator.

Loose JSON from the graph editor and rows from the dataset catalog are turned
into these types once, at the boundary (see ``ingestion`` and the dataset
repository). Everything downstream works with closed enums.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class LifecyclePhase(str, Enum):
    MATERIAL = "material"
    PRODUCTION = "production"
    DISTRIBUTION = "distribution"
    USE = "use"
    EOL = "eol"

    @property
    def label(self) -> str:
        return LIFECYCLE_PHASE_LABELS[self]

    @classmethod
    def coerce(cls, value: Any) -> LifecyclePhase:
        """Map any stage value onto a phase; unknown values count as production."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except (ValueError, TypeError):
            return cls.PRODUCTION


LIFECYCLE_PHASE_LABELS: Dict[LifecyclePhase, str] = {
    LifecyclePhase.MATERIAL: "Rohstofferwerb",
    LifecyclePhase.PRODUCTION: "Produktion",
    LifecyclePhase.DISTRIBUTION: "Verteilung",
    LifecyclePhase.USE: "Nutzung",
    LifecyclePhase.EOL: "Behandlung am Ende des Lebenswegs",
}


class FlowKind(str, Enum):
    MATERIAL = "material"
    ENERGY = "energy"
    WASTE = "waste"
    EMISSIONS = "emissions"


# Datasets are classified with the same four kinds as elementary flows
DatasetKind = FlowKind

INPUT_KINDS = frozenset({FlowKind.MATERIAL, FlowKind.ENERGY})
OUTPUT_KINDS = frozenset({FlowKind.WASTE, FlowKind.EMISSIONS})


@dataclass(frozen=True)
class Dataset:
    """Emission factor record; value_co2e is kg CO2e per one ``unit``."""
    id: int
    name: str
    unit: str
    value_co2e: float
    kind: DatasetKind = DatasetKind.MATERIAL
    source: Optional[str] = None
    year: Optional[int] = None
    geo: Optional[str] = None
    method_id: Optional[int] = None


@dataclass(frozen=True)
class ElementaryItem:
    kind: FlowKind
    name: str
    amount: float
    unit: str
    dataset_id: Optional[int] = None


@dataclass(frozen=True)
class ProcessNode:
    id: str
    title: Optional[str] = None
    stage: LifecyclePhase = LifecyclePhase.PRODUCTION
    inputs: Tuple[ElementaryItem, ...] = ()
    outputs: Tuple[ElementaryItem, ...] = ()

    @property
    def display_name(self) -> str:
        return self.title or self.id


@dataclass(frozen=True)
class FlowEdge:
    source: str
    target: str
    dataset_id: Optional[int] = None
    amount: Optional[float] = None


@dataclass(frozen=True)
class Hotspot:
    label: str
    value: float

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "value": self.value}


@dataclass(frozen=True)
class ProcessEmissions:
    process_id: str
    process_name: str
    total_emissions: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "processId": self.process_id,
            "processName": self.process_name,
            "totalEmissions": self.total_emissions,
        }


@dataclass
class AggregationResult:
    total_kg_co2e: float
    hotspots: List[Hotspot] = field(default_factory=list)
    by_phase: Optional[Dict[LifecyclePhase, float]] = None
    by_process: Optional[List[ProcessEmissions]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Render with the wire names used by the web client."""
        result: Dict[str, Any] = {"totalKgCO2e": self.total_kg_co2e}
        if self.by_phase is not None:
            result["byPhase"] = {phase.value: value for phase, value in self.by_phase.items()}
        if self.by_process is not None:
            result["byProcess"] = [p.to_dict() for p in self.by_process]
        result["hotspots"] = [h.to_dict() for h in self.hotspots]
        return result
