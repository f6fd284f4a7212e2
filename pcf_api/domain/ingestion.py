"""
Graph snapshot ingestion.

The graph editor stores nodes and edges as loose JSON. This module is the one
place where that JSON is defaulted and typed:

- unknown or missing stages become ``production``
- a missing ``elementary`` block means no flows
- legacy ``inflows``/``outflows`` are migrated to ``inputs``/``outputs``
- invalid flow kinds fall back to ``material`` (inputs) or ``waste`` (outputs)
- amounts that are not finite numbers become 0
- dataset ids that are not positive integers are dropped

Nothing here raises on malformed entries; non-object entries are skipped.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pcf_api.domain.entities import (
    INPUT_KINDS,
    OUTPUT_KINDS,
    ElementaryItem,
    FlowEdge,
    FlowKind,
    LifecyclePhase,
    ProcessNode,
)

logger = logging.getLogger(__name__)

DEFAULT_UNIT = "kg"

# Largest id the catalog's integer primary key can hold
MAX_DATASET_ID = 2**31 - 1


def coerce_dataset_id(value: Any) -> Optional[int]:
    """Return a positive integer dataset id within the catalog's id range, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)
    if isinstance(value, str):
        value = value.strip()
        if not value.isdecimal():
            return None
        try:
            value = int(value)
        except ValueError:
            return None
    if isinstance(value, int) and 0 < value <= MAX_DATASET_ID:
        return value
    return None


def coerce_amount(value: Any) -> float:
    """Return a finite float amount, 0.0 for anything unusable."""
    if isinstance(value, bool):
        return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    return amount if math.isfinite(amount) else 0.0


def _text(value: Any, default: str) -> str:
    return value if isinstance(value, str) and value else default


def _node_data(raw: Dict[str, Any]) -> Dict[str, Any]:
    # Editor nodes nest their fields under "data"; plain snapshots do not
    data = raw.get("data")
    return data if isinstance(data, dict) else raw


def _migrate_item(item: Dict[str, Any], allowed: frozenset, fallback: FlowKind) -> Dict[str, Any]:
    kind = item.get("kind")
    return {
        "kind": kind if isinstance(kind, str) and kind in {k.value for k in allowed} else fallback.value,
        "name": _text(item.get("name"), ""),
        "amount": coerce_amount(item.get("amount")),
        "unit": _text(item.get("unit"), DEFAULT_UNIT),
        "datasetId": coerce_dataset_id(item.get("datasetId")),
    }


def _dict_items(items: Any) -> List[Dict[str, Any]]:
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, dict)]


def migrate_elementary(elementary: Any) -> Dict[str, List[Dict[str, Any]]]:
    """
    Bring an elementary block into the current ``{inputs, outputs}`` shape.

    Legacy blocks use ``inflows``/``outflows``: an inflow of kind material stays
    material, any other inflow becomes energy; an outflow of kind material
    becomes waste, any other outflow becomes emissions.
    """
    if not isinstance(elementary, dict):
        return {"inputs": [], "outputs": []}

    if "inflows" in elementary or "outflows" in elementary:
        inputs = [
            {**_migrate_item(item, INPUT_KINDS, FlowKind.MATERIAL),
             "kind": (FlowKind.MATERIAL if item.get("kind") == "material" else FlowKind.ENERGY).value}
            for item in _dict_items(elementary.get("inflows"))
        ]
        outputs = [
            {**_migrate_item(item, OUTPUT_KINDS, FlowKind.WASTE),
             "kind": (FlowKind.WASTE if item.get("kind") == "material" else FlowKind.EMISSIONS).value}
            for item in _dict_items(elementary.get("outflows"))
        ]
        return {"inputs": inputs, "outputs": outputs}

    return {
        "inputs": [
            _migrate_item(item, INPUT_KINDS, FlowKind.MATERIAL)
            for item in _dict_items(elementary.get("inputs"))
        ],
        "outputs": [
            _migrate_item(item, OUTPUT_KINDS, FlowKind.WASTE)
            for item in _dict_items(elementary.get("outputs"))
        ],
    }


def migrate_node(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of an editor node with its elementary block migrated."""
    data = _node_data(raw)
    if "elementary" not in data:
        return dict(raw)

    migrated = dict(data)
    migrated["elementary"] = migrate_elementary(data.get("elementary"))
    if data is raw:
        return migrated
    return {**raw, "data": migrated}


def _items(entries: List[Dict[str, Any]]) -> Tuple[ElementaryItem, ...]:
    return tuple(
        ElementaryItem(
            kind=FlowKind(entry["kind"]),
            name=entry["name"],
            amount=entry["amount"],
            unit=entry["unit"],
            dataset_id=entry["datasetId"],
        )
        for entry in entries
    )


def parse_node(raw: Dict[str, Any]) -> ProcessNode:
    data = _node_data(raw)
    elementary = migrate_elementary(data.get("elementary"))
    title = data.get("title")
    return ProcessNode(
        id=str(raw.get("id", "")),
        title=str(title) if title else None,
        stage=LifecyclePhase.coerce(data.get("stage")),
        inputs=_items(elementary["inputs"]),
        outputs=_items(elementary["outputs"]),
    )


def parse_nodes(raw_nodes: Iterable[Any]) -> List[ProcessNode]:
    """Type a list of editor nodes, skipping entries that are not objects."""
    nodes = []
    for raw in raw_nodes or []:
        if not isinstance(raw, dict):
            logger.debug(f"Skipping non-object node entry: {raw!r}")
            continue
        nodes.append(parse_node(raw))
    return nodes


def parse_edge(raw: Dict[str, Any]) -> FlowEdge:
    data = raw.get("data") if isinstance(raw.get("data"), dict) else {}
    amount = data.get("amount")
    return FlowEdge(
        source=str(raw.get("source", "")),
        target=str(raw.get("target", "")),
        dataset_id=coerce_dataset_id(data.get("datasetId")),
        amount=None if amount is None else coerce_amount(amount),
    )


def parse_edges(raw_edges: Iterable[Any]) -> List[FlowEdge]:
    """Type a list of editor edges, skipping entries that are not objects."""
    return [parse_edge(raw) for raw in raw_edges or [] if isinstance(raw, dict)]
