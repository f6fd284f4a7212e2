"""Service wiring the graph store and dataset catalog to the emissions aggregator."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from pcf_api.db.repositories import DatasetRepository
from pcf_api.db.repositories.datasets import to_entity
from pcf_api.domain.aggregation import (
    EDGE_HOTSPOT_LIMIT,
    EDGE_TOTAL_DECIMALS,
    aggregate,
    aggregate_edges,
    empty_phase_totals,
    referenced_dataset_ids,
    referenced_item_dataset_ids,
)
from pcf_api.domain.entities import AggregationResult, Dataset, LifecyclePhase
from pcf_api.domain.errors import CatalogUnavailableError
from pcf_api.domain.ingestion import parse_edges, parse_nodes
from pcf_api.application.project_service import ProjectService

logger = logging.getLogger(__name__)

RESULTS_TOP_PROCESSES = 5


class PcfService:
    """
    Computes PCF results.

    All I/O (graph snapshot, dataset lookup) happens here, before the pure
    aggregation functions run.
    """

    def __init__(
        self,
        projects: ProjectService,
        datasets: DatasetRepository,
        edge_hotspot_limit: int = EDGE_HOTSPOT_LIMIT,
        edge_total_decimals: int = EDGE_TOTAL_DECIMALS,
        top_processes: int = RESULTS_TOP_PROCESSES,
    ) -> None:
        self._projects = projects
        self._datasets = datasets
        self._edge_hotspot_limit = edge_hotspot_limit
        self._edge_total_decimals = edge_total_decimals
        self._top_processes = top_processes

    def _fetch_datasets(self, dataset_ids: Iterable[int]) -> List[Dataset]:
        """Single batched catalog lookup for the referenced ids."""
        try:
            return [to_entity(row) for row in self._datasets.get_by_ids(dataset_ids)]
        except SQLAlchemyError as exc:
            raise CatalogUnavailableError(f"Dataset catalog unavailable: {exc}") from exc

    def compute_edges(self, raw_edges: List[Any]) -> AggregationResult:
        """Edge variant: total and top hotspots over directed flow edges."""
        edges = parse_edges(raw_edges)
        datasets = self._fetch_datasets(referenced_dataset_ids(edges))
        return aggregate_edges(
            edges,
            datasets,
            limit=self._edge_hotspot_limit,
            decimals=self._edge_total_decimals,
        )

    def aggregate_snapshot(self, raw_nodes: List[Any]) -> Dict[str, Any]:
        """
        Phase/process variant for a graph snapshot.

        A catalog failure does not fail the request: the empty result is
        returned with a warning instead.
        """
        nodes = parse_nodes(raw_nodes)
        warning: Optional[str] = None
        try:
            datasets = self._fetch_datasets(referenced_item_dataset_ids(nodes))
        except CatalogUnavailableError as exc:
            logger.warning(f"Returning empty PCF result: {exc}")
            datasets = []
            warning = "Emission factor datasets could not be loaded; results are incomplete."

        result = aggregate(nodes, datasets)
        return self._present(result, warning)

    def project_results(self, project_id: str) -> Dict[str, Any]:
        """Phase/process results for a project's stored graph."""
        graph = self._projects.load_graph(project_id)
        response = self.aggregate_snapshot(graph["nodes"])
        response["projectId"] = project_id
        return response

    def _present(self, result: AggregationResult, warning: Optional[str]) -> Dict[str, Any]:
        by_phase = result.by_phase or empty_phase_totals()
        response = result.to_dict()
        response["phases"] = [
            {"phase": phase.value, "label": phase.label, "value": by_phase[phase]}
            for phase in LifecyclePhase
        ]
        response["topProcesses"] = response["byProcess"][:self._top_processes]
        response["warning"] = warning
        return response
