"""Event handlers for domain events."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pcf_api.domain.events import (
        DatasetCreated,
        DatasetUpdated,
        DatasetDeleted,
        ProjectCreated,
        ProjectDeleted,
        GraphSaved,
    )

logger = logging.getLogger(__name__)


class AuditLogHandler:
    """Logs catalog and project changes for audit trail."""

    def handle_dataset_created(self, event: DatasetCreated) -> None:
        logger.info(f"[AUDIT] Dataset created: {event.aggregate_id} - {event.name} ({event.kind}, {event.value_co2e} kgCO2e)")

    def handle_dataset_updated(self, event: DatasetUpdated) -> None:
        logger.info(f"[AUDIT] Dataset updated: {event.aggregate_id} - fields {sorted(event.changes)}")

    def handle_dataset_deleted(self, event: DatasetDeleted) -> None:
        logger.info(f"[AUDIT] Dataset deleted: {event.aggregate_id} - {event.name}")

    def handle_project_created(self, event: ProjectCreated) -> None:
        logger.info(f"[AUDIT] Project created: {event.aggregate_id} - {event.name}")

    def handle_project_deleted(self, event: ProjectDeleted) -> None:
        logger.info(f"[AUDIT] Project deleted: {event.aggregate_id} - {event.name}")

    def handle_graph_saved(self, event: GraphSaved) -> None:
        logger.info(f"[AUDIT] Graph saved for project {event.aggregate_id}: {event.node_count} nodes, {event.edge_count} edges")


class CatalogChangeHandler:
    """Flags catalog edits that change results of already modelled graphs."""

    def handle_dataset_updated(self, event: DatasetUpdated) -> None:
        if "value_co2e" in event.changes:
            logger.info(f"[CATALOG] Emission factor of dataset {event.aggregate_id} changed; PCF results will differ")

    def handle_dataset_deleted(self, event: DatasetDeleted) -> None:
        # Flows still referencing the id now contribute nothing
        logger.warning(f"[CATALOG] Dataset {event.aggregate_id} ({event.name}) deleted; references to it are skipped")


_registered = False


def register_event_handlers():
    """Register all event handlers with the publisher (once per process)."""
    global _registered
    if _registered:
        return
    _registered = True

    from pcf_api.domain.events import (
        event_publisher,
        DatasetCreated,
        DatasetUpdated,
        DatasetDeleted,
        ProjectCreated,
        ProjectDeleted,
        GraphSaved,
    )

    audit = AuditLogHandler()
    catalog = CatalogChangeHandler()

    # Audit handlers (all events)
    event_publisher.subscribe(DatasetCreated, audit.handle_dataset_created)
    event_publisher.subscribe(DatasetUpdated, audit.handle_dataset_updated)
    event_publisher.subscribe(DatasetDeleted, audit.handle_dataset_deleted)
    event_publisher.subscribe(ProjectCreated, audit.handle_project_created)
    event_publisher.subscribe(ProjectDeleted, audit.handle_project_deleted)
    event_publisher.subscribe(GraphSaved, audit.handle_graph_saved)

    # Catalog change notices
    event_publisher.subscribe(DatasetUpdated, catalog.handle_dataset_updated)
    event_publisher.subscribe(DatasetDeleted, catalog.handle_dataset_deleted)
