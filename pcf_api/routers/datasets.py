from fastapi import APIRouter, Depends, Path, Query
from pcf_api.schemas.api_schemas import (
    DatasetCreate,
    DatasetUpdate,
    DatasetResponse,
    DatasetDeleteResponse,
    MethodResponse,
)
from pcf_api.dependencies import get_dataset_service, get_method_repository
from pcf_api.application.dataset_service import DatasetService
from pcf_api.db.repositories import MethodRepository
from pcf_api.domain.sorting import SortDirection
from typing import List, Optional

router = APIRouter()

@router.get("/api/datasets", response_model=List[DatasetResponse])
def list_datasets(
    source: Optional[str] = Query(None, description="Substring of the data source"),
    geo: Optional[str] = Query(None, description="Substring of the geography"),
    name: Optional[str] = Query(None, description="Substring of the dataset name"),
    sort: Optional[str] = Query(None, description="Field to sort by, e.g. name or valueCO2e"),
    direction: SortDirection = Query(SortDirection.ASC, description="asc, desc or none"),
    service: DatasetService = Depends(get_dataset_service),
):
    """
    List emission factor datasets, ordered by id unless a sort field is given.
    """
    return service.list_datasets(source=source, geo=geo, name=name, sort=sort, direction=direction)

@router.get("/api/datasets/{dataset_id}", response_model=DatasetResponse)
def get_dataset(
    dataset_id: int = Path(..., title="The ID of the dataset to retrieve"),
    service: DatasetService = Depends(get_dataset_service),
):
    """
    Get a single dataset by ID.
    """
    return service.get_dataset(dataset_id)

@router.post("/api/datasets", response_model=DatasetResponse, status_code=201)
def create_dataset(
    dataset_data: DatasetCreate,
    service: DatasetService = Depends(get_dataset_service),
):
    """
    Add a dataset to the catalog. The kind is normalized before it is stored.
    """
    return service.create_dataset(dataset_data.model_dump())

@router.put("/api/datasets/{dataset_id}", response_model=DatasetResponse)
def update_dataset(
    dataset_data: DatasetUpdate,
    dataset_id: int = Path(..., title="The ID of the dataset to update"),
    service: DatasetService = Depends(get_dataset_service),
):
    """
    Partially update a dataset; only the fields sent are changed.
    """
    return service.update_dataset(dataset_id, dataset_data.model_dump(exclude_unset=True))

@router.delete("/api/datasets/{dataset_id}", response_model=DatasetDeleteResponse)
def delete_dataset(
    dataset_id: int = Path(..., title="The ID of the dataset to delete"),
    service: DatasetService = Depends(get_dataset_service),
):
    """
    Remove a dataset. Flows still referencing it contribute nothing afterwards.
    """
    service.delete_dataset(dataset_id)
    return DatasetDeleteResponse(ok=True)

@router.get("/api/methods", response_model=List[MethodResponse])
def list_methods(methods: MethodRepository = Depends(get_method_repository)):
    """
    List characterisation methods.
    """
    return methods.get_all_methods()
