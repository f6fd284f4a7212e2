from __future__ import annotations

from fastapi import Depends
from sqlalchemy.orm import Session

from pcf_api.config import settings
from pcf_api.db.database import get_db
from pcf_api.db.repositories import DatasetRepository, MethodRepository
from pcf_api.graphstore import GraphStorage
from pcf_api.application.dataset_service import DatasetService
from pcf_api.application.project_service import ProjectService
from pcf_api.application.pcf_service import PcfService


def get_graph_storage() -> GraphStorage:
    return GraphStorage(base_path=str(settings.GRAPH_STORAGE_DIR))


def get_dataset_repository(db: Session = Depends(get_db)) -> DatasetRepository:
    return DatasetRepository(db)


def get_method_repository(db: Session = Depends(get_db)) -> MethodRepository:
    return MethodRepository(db)


def get_dataset_service(
    datasets: DatasetRepository = Depends(get_dataset_repository),
    methods: MethodRepository = Depends(get_method_repository),
) -> DatasetService:
    return DatasetService(datasets, methods)


def get_project_service(storage: GraphStorage = Depends(get_graph_storage)) -> ProjectService:
    return ProjectService(storage=storage)


def get_pcf_service(
    projects: ProjectService = Depends(get_project_service),
    datasets: DatasetRepository = Depends(get_dataset_repository),
) -> PcfService:
    return PcfService(
        projects=projects,
        datasets=datasets,
        edge_hotspot_limit=settings.EDGE_HOTSPOT_LIMIT,
        edge_total_decimals=settings.EDGE_TOTAL_DECIMALS,
        top_processes=settings.RESULTS_TOP_PROCESSES,
    )
