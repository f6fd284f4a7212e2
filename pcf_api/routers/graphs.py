from fastapi import APIRouter, Depends
from pcf_api.schemas.api_schemas import GraphSnapshot, GraphResponse
from pcf_api.dependencies import get_project_service
from pcf_api.application.project_service import ProjectService

router = APIRouter()

@router.get("/projects/{project_id}/graph", response_model=GraphResponse)
def get_graph(
    project_id: str,
    service: ProjectService = Depends(get_project_service),
):
    """
    Get the project's process graph; empty if it was never saved.
    """
    graph = service.load_graph(project_id)
    return GraphResponse(project_id=project_id, **graph)

@router.put("/projects/{project_id}/graph", response_model=GraphResponse)
def save_graph(
    project_id: str,
    snapshot: GraphSnapshot,
    service: ProjectService = Depends(get_project_service),
):
    """
    Replace the project's process graph with a new snapshot.

    Elementary flows are migrated to the current inputs/outputs shape on save.
    """
    graph = service.save_graph(project_id, snapshot.nodes, snapshot.edges)
    return GraphResponse(project_id=project_id, **graph)
