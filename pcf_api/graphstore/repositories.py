from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from .metadata import MetadataStore

logger = logging.getLogger(__name__)


def empty_graph() -> Dict[str, Any]:
    return {"nodes": [], "edges": [], "updated_at": None}


class ProjectsRepository:
    """Projects live only in the index; each one owns at most one graph file."""

    def __init__(self, metadata: MetadataStore) -> None:
        self._metadata = metadata

    def create(self, name: str, description: str = "") -> Dict[str, Any]:
        project_id = str(uuid.uuid4())
        project = {
            'id': project_id,
            'project_id': project_id,
            'name': name,
            'description': description,
            'created_at': datetime.now().isoformat(),
        }
        self._metadata.projects[project_id] = project
        self._metadata.save()
        logger.debug(f"Indexed project {project_id} ({name})")
        return project

    def get(self, project_id: str) -> Optional[Dict[str, Any]]:
        return self._metadata.projects.get(project_id)

    def all(self) -> List[Dict[str, Any]]:
        return sorted(self._metadata.projects.values(), key=lambda p: p['created_at'])

    def count(self) -> int:
        return len(self._metadata.projects)

    def update(self, project_id: str, name: str, description: str) -> Optional[Dict[str, Any]]:
        project = self._metadata.projects.get(project_id)
        if project is None:
            return None
        project.update(name=name, description=description)
        self._metadata.save()
        return project

    def delete(self, project_id: str) -> bool:
        if self._metadata.projects.pop(project_id, None) is None:
            return False
        self._metadata.save()
        return True


class GraphsRepository:
    """One graph snapshot per project, stored as ``graphs/<project_id>.json``."""

    def __init__(self, base_path: Path) -> None:
        self.graphs_path = base_path / "graphs"
        self.graphs_path.mkdir(parents=True, exist_ok=True)

    def _graph_file(self, project_id: str) -> Path:
        return self.graphs_path / f"{project_id}.json"

    def load(self, project_id: str) -> Dict[str, Any]:
        graph_file = self._graph_file(project_id)
        if not graph_file.exists():
            return empty_graph()
        try:
            with graph_file.open('r', encoding='utf-8') as f:
                raw = json.load(f)
        except json.JSONDecodeError:
            logger.warning(f"Graph snapshot for project {project_id} is unreadable, using empty graph")
            return empty_graph()
        if not isinstance(raw, dict):
            return empty_graph()
        return {
            'nodes': raw.get('nodes') if isinstance(raw.get('nodes'), list) else [],
            'edges': raw.get('edges') if isinstance(raw.get('edges'), list) else [],
            'updated_at': raw.get('updated_at'),
        }

    def save(self, project_id: str, nodes: List[Dict[str, Any]], edges: List[Dict[str, Any]]) -> Dict[str, Any]:
        graph = {
            'nodes': nodes,
            'edges': edges,
            'updated_at': datetime.now().isoformat(),
        }
        with self._graph_file(project_id).open('w', encoding='utf-8') as f:
            json.dump(graph, f, indent=2)
        return graph

    def delete(self, project_id: str) -> bool:
        graph_file = self._graph_file(project_id)
        if not graph_file.exists():
            return False
        graph_file.unlink()
        return True

    def count(self) -> int:
        return sum(1 for _ in self.graphs_path.glob("*.json"))
