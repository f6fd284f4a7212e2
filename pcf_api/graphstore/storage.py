"""
Graph Storage - Composed façade over the project index and graph snapshots.
"""
from pathlib import Path
from typing import Dict, List, Optional, Any

from .metadata import MetadataStore
from .repositories import GraphsRepository, ProjectsRepository
from pcf_api.domain.ingestion import migrate_node


class GraphStorage:
    """File-based storage for projects and their process graphs."""

    def __init__(self, base_path: str = "data/graphs"):
        self.base_path = Path(base_path)
        self.metadata_file = self.base_path / "metadata.json"
        self.base_path.mkdir(parents=True, exist_ok=True)

        # Compose repositories
        self._metadata = MetadataStore(self.metadata_file)
        self._projects = ProjectsRepository(self._metadata)
        self._graphs = GraphsRepository(self.base_path)

    # Project operations
    def create_project(self, name: str, description: str = "") -> Dict[str, Any]:
        return self._projects.create(name, description)

    def get_project(self, project_id: str) -> Optional[Dict[str, Any]]:
        return self._projects.get(project_id)

    def get_all_projects(self) -> List[Dict[str, Any]]:
        return self._projects.all()

    def update_project(self, project_id: str, name: str, description: str) -> Optional[Dict[str, Any]]:
        return self._projects.update(project_id, name, description)

    def delete_project(self, project_id: str) -> bool:
        if not self._projects.get(project_id):
            return False
        self._graphs.delete(project_id)
        return self._projects.delete(project_id)

    # Graph operations
    def load_graph(self, project_id: str) -> Dict[str, Any]:
        """Return the stored snapshot, or an empty graph when none was saved."""
        return self._graphs.load(project_id)

    def save_graph(self, project_id: str, nodes: List[Dict[str, Any]], edges: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Store a snapshot; node elementary blocks are migrated to the current shape first."""
        migrated = [migrate_node(node) for node in nodes if isinstance(node, dict)]
        return self._graphs.save(project_id, migrated, [edge for edge in edges if isinstance(edge, dict)])

    def get_storage_stats(self) -> Dict[str, Any]:
        return {
            "base_path": str(self.base_path),
            "metadata_file_exists": self.metadata_file.exists(),
            "projects": self._projects.count(),
            "graphs": self._graphs.count(),
        }
