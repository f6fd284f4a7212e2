"""Service for project validation and lifecycle."""
from __future__ import annotations

import logging
from typing import Any, Dict, List

from pcf_api.graphstore import GraphStorage
from pcf_api.domain.errors import ValidationError, ConflictError, NotFoundError
from pcf_api.domain.events import event_publisher, ProjectCreated, ProjectDeleted, GraphSaved

logger = logging.getLogger(__name__)


class ProjectService:
    """Validates project operations and keeps each project's graph snapshot."""

    def __init__(self, storage: GraphStorage) -> None:
        self._storage = storage

    def validate_name(self, name: str) -> str:
        """Validate and normalize project name."""
        if not name or not name.strip():
            raise ValidationError("Project name is required and cannot be empty")
        return name.strip()

    def check_duplicate_name(self, name: str, exclude_id: str | None = None) -> None:
        """Check if project name already exists."""
        for project in self._storage.get_all_projects():
            if project["name"].lower() == name.lower():
                if exclude_id is None or project["id"] != exclude_id:
                    raise ConflictError(f"Project with name '{name}' already exists")

    def require_project(self, project_id: str) -> Dict[str, Any]:
        """Return the project or raise NotFoundError."""
        project = self._storage.get_project(project_id)
        if not project:
            raise NotFoundError(f"Project not found: {project_id}")
        return project

    def list_projects(self) -> List[Dict[str, Any]]:
        return self._storage.get_all_projects()

    def create_project(self, name: str, description: str | None = "") -> Dict[str, Any]:
        name = self.validate_name(name)
        self.check_duplicate_name(name)
        project = self._storage.create_project(name=name, description=(description or "").strip())

        event_publisher.publish(ProjectCreated(
            event_id="",
            timestamp=None,
            aggregate_id=project["id"],
            name=project["name"],
            description=project["description"],
        ))
        return project

    def update_project(self, project_id: str, name: str, description: str | None = "") -> Dict[str, Any]:
        self.require_project(project_id)
        name = self.validate_name(name)
        self.check_duplicate_name(name, exclude_id=project_id)
        return self._storage.update_project(project_id, name, (description or "").strip())

    def delete_project(self, project_id: str) -> None:
        """Delete a project together with its graph snapshot."""
        project = self.require_project(project_id)
        self._storage.delete_project(project_id)

        event_publisher.publish(ProjectDeleted(
            event_id="",
            timestamp=None,
            aggregate_id=project_id,
            name=project["name"],
        ))

    def load_graph(self, project_id: str) -> Dict[str, Any]:
        self.require_project(project_id)
        return self._storage.load_graph(project_id)

    def save_graph(self, project_id: str, nodes: List[Dict[str, Any]], edges: List[Dict[str, Any]]) -> Dict[str, Any]:
        self.require_project(project_id)
        graph = self._storage.save_graph(project_id, nodes, edges)
        logger.info(f"Saved graph for project {project_id}: {len(graph['nodes'])} nodes, {len(graph['edges'])} edges")

        event_publisher.publish(GraphSaved(
            event_id="",
            timestamp=None,
            aggregate_id=project_id,
            node_count=len(graph["nodes"]),
            edge_count=len(graph["edges"]),
        ))
        return graph
