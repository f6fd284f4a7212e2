from fastapi import APIRouter, Path, Depends
from pcf_api.schemas.api_schemas import ProjectCreate, ProjectResponse, ProjectDetail, ProjectDeleteResponse
from pcf_api.dependencies import get_project_service
from pcf_api.application.project_service import ProjectService
from typing import Any, Dict, List

router = APIRouter()

def _detail(project: Dict[str, Any]) -> ProjectDetail:
    return ProjectDetail(
        project_id=project["id"],
        name=project["name"],
        created_at=project["created_at"],
        description=project.get("description", "")
    )

@router.post("/projects/", response_model=ProjectResponse, status_code=201)
def create_project(
    project_data: ProjectCreate,
    service: ProjectService = Depends(get_project_service)
):
    """
    Create a project that holds one process graph.
    """
    project = service.create_project(project_data.name, project_data.description)
    return ProjectResponse(project_id=project["id"])

@router.get("/projects", response_model=List[ProjectDetail])
def get_all_projects(service: ProjectService = Depends(get_project_service)):
    """
    Retrieve all available projects.
    """
    return [_detail(project) for project in service.list_projects()]

@router.get("/projects/{project_id}", response_model=ProjectDetail)
def get_project(
    project_id: str = Path(..., title="The ID of the project to retrieve"),
    service: ProjectService = Depends(get_project_service)
):
    """
    Get a specific project by ID.
    """
    return _detail(service.require_project(project_id))

@router.put("/projects/{project_id}", response_model=ProjectDetail)
def update_project(
    project_data: ProjectCreate,
    project_id: str = Path(..., title="The ID of the project to update"),
    service: ProjectService = Depends(get_project_service)
):
    """
    Update a project's name and description.
    """
    return _detail(service.update_project(project_id, project_data.name, project_data.description))

@router.delete("/projects/{project_id}", response_model=ProjectDeleteResponse)
def delete_project(
    project_id: str = Path(..., title="The ID of the project to delete"),
    service: ProjectService = Depends(get_project_service)
):
    """
    Delete a project and its graph.
    """
    service.delete_project(project_id)
    return ProjectDeleteResponse(success=True)
