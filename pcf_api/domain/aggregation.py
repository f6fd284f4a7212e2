"""
Emissions aggregation over a process graph snapshot.

Two entry points:

- ``aggregate`` walks the elementary flows of every process node and rolls the
  emissions up per process and per lifecycle phase.
- ``aggregate_edges`` walks directed flow edges only and ranks every edge as a
  hotspot of its own.

Both are pure functions of their arguments. Missing or dangling dataset
references, zero emission factors and unknown stages never raise; the affected
flow simply contributes nothing (or counts under production, for stages).
No unit conversion takes place: ``amount`` is multiplied with ``value_co2e``
as given, even when the flow unit differs from the dataset unit.
"""
from __future__ import annotations

import logging
import math
from decimal import Context, Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional, Sequence, Set

from pcf_api.domain.entities import (
    AggregationResult,
    Dataset,
    FlowEdge,
    Hotspot,
    LifecyclePhase,
    ProcessEmissions,
    ProcessNode,
)
from pcf_api.domain.hotspots import rank_hotspots

logger = logging.getLogger(__name__)

EDGE_HOTSPOT_LIMIT = 10
EDGE_TOTAL_DECIMALS = 4


def index_datasets(datasets: Iterable[Dataset]) -> Dict[int, Dataset]:
    """Build an id lookup; the last record wins on duplicate ids."""
    return {dataset.id: dataset for dataset in datasets}


def round_half_up(value: float, decimals: int) -> float:
    """Round the exact binary value of a float, ties away from zero (0.03125 -> 0.0313)."""
    if not math.isfinite(value):
        return value
    # Enough digits for any finite float plus the requested decimals
    context = Context(prec=400, rounding=ROUND_HALF_UP)
    return float(Decimal(value).quantize(Decimal(1).scaleb(-decimals), context=context))


def empty_phase_totals() -> Dict[LifecyclePhase, float]:
    return {phase: 0.0 for phase in LifecyclePhase}


def aggregate(
    nodes: Sequence[ProcessNode],
    datasets: Iterable[Dataset],
    hotspot_limit: Optional[int] = None,
) -> AggregationResult:
    """
    Compute total, per-phase and per-process emissions for a graph snapshot.

    Args:
        nodes: Process nodes with their elementary inputs and outputs
        datasets: Emission factor datasets the flows may reference
        hotspot_limit: Cap on returned hotspots (None keeps all processes)

    Returns:
        AggregationResult with unrounded totals, byPhase for all five phases,
        byProcess sorted by emissions descending and the matching hotspots
    """
    lookup = index_datasets(datasets)
    by_phase = empty_phase_totals()
    grand_total = 0.0
    subtotals: List[float] = []

    for node in nodes:
        stage = LifecyclePhase.coerce(node.stage)
        process_total = 0.0

        # Inputs are fully processed before outputs
        for item in (*node.inputs, *node.outputs):
            if not item.dataset_id:
                continue
            dataset = lookup.get(item.dataset_id)
            if dataset is None:
                logger.debug(f"Skipping flow {item.name!r} in {node.id}: unknown dataset {item.dataset_id}")
                continue
            if not dataset.value_co2e:
                continue

            emission = (item.amount or 0.0) * dataset.value_co2e
            logger.debug(
                f"Emission {node.id}/{item.name}: {item.amount} {item.unit} x "
                f"{dataset.value_co2e} ({dataset.name}) = {emission}"
            )
            process_total += emission
            by_phase[stage] += emission
            grand_total += emission

        subtotals.append(process_total)

    by_process = [
        ProcessEmissions(
            process_id=node.id,
            process_name=node.display_name,
            total_emissions=subtotal,
        )
        for node, subtotal in zip(nodes, subtotals)
        if subtotal > 0
    ]
    # Stable: equal totals keep node order
    by_process.sort(key=lambda p: p.total_emissions, reverse=True)

    hotspots = rank_hotspots(
        (Hotspot(label=p.process_name, value=p.total_emissions) for p in by_process),
        limit=hotspot_limit,
    )

    return AggregationResult(
        total_kg_co2e=grand_total,
        by_phase=by_phase,
        by_process=by_process,
        hotspots=hotspots,
    )


def referenced_item_dataset_ids(nodes: Iterable[ProcessNode]) -> Set[int]:
    """Distinct dataset ids referenced by the elementary flows of the nodes."""
    return {
        item.dataset_id
        for node in nodes
        for item in (*node.inputs, *node.outputs)
        if item.dataset_id
    }


def referenced_dataset_ids(edges: Iterable[FlowEdge]) -> Set[int]:
    """Distinct dataset ids referenced by edges; edges without one are ignored."""
    return {edge.dataset_id for edge in edges if edge.dataset_id}


def aggregate_edges(
    edges: Sequence[FlowEdge],
    datasets: Iterable[Dataset],
    limit: int = EDGE_HOTSPOT_LIMIT,
    decimals: int = EDGE_TOTAL_DECIMALS,
) -> AggregationResult:
    """
    Compute the total and top hotspots from directed flow edges.

    Every edge with a resolvable dataset becomes its own hotspot candidate,
    labelled with the dataset name. Candidates sharing a label are not merged.

    Returns:
        AggregationResult with the total rounded to ``decimals`` places and at
        most ``limit`` hotspots; byPhase and byProcess are not computed
    """
    lookup = index_datasets(datasets)
    total = 0.0
    candidates: List[Hotspot] = []

    for edge in edges:
        dataset = lookup.get(edge.dataset_id) if edge.dataset_id else None
        if dataset is None:
            continue
        kg = (edge.amount or 0.0) * dataset.value_co2e
        total += kg
        candidates.append(Hotspot(label=f"{dataset.name}", value=kg))

    return AggregationResult(
        total_kg_co2e=round_half_up(total, decimals),
        hotspots=rank_hotspots(candidates, limit=limit),
    )
