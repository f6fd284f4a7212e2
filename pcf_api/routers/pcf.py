from fastapi import APIRouter, Depends
from pcf_api.schemas.api_schemas import AggregateRequest, ComputeRequest, ComputeResponse, PcfResultResponse
from pcf_api.dependencies import get_pcf_service
from pcf_api.application.pcf_service import PcfService

router = APIRouter()

@router.post("/api/pcf/compute", response_model=ComputeResponse)
def compute_pcf(
    body: ComputeRequest,
    service: PcfService = Depends(get_pcf_service),
):
    """
    Total and top 10 hotspots over the flow edges of a graph.
    """
    return service.compute_edges(body.edges).to_dict()

@router.post("/api/pcf/aggregate", response_model=PcfResultResponse)
def aggregate_pcf(
    body: AggregateRequest,
    service: PcfService = Depends(get_pcf_service),
):
    """
    Emissions by lifecycle phase and process for an unsaved graph snapshot.
    """
    return service.aggregate_snapshot(body.nodes)

@router.get("/projects/{project_id}/results", response_model=PcfResultResponse)
def get_results(
    project_id: str,
    service: PcfService = Depends(get_pcf_service),
):
    """
    Emissions by lifecycle phase and process for the project's stored graph.
    """
    return service.project_results(project_id)
