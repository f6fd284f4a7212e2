"""
Health check endpoints for the API.
"""
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import Dict, Any
from datetime import datetime

from pcf_api.config import settings
from pcf_api.db.database import get_db
from pcf_api.dependencies import get_graph_storage
from pcf_api.graphstore import GraphStorage

router = APIRouter()

@router.get("/health")
def health_check() -> Dict[str, Any]:
    """
    Basic health check endpoint.
    Returns API status and version information.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT
    }

@router.get("/health/catalog")
def catalog_health(db: Session = Depends(get_db)) -> Dict[str, Any]:
    """
    Check that the dataset catalog database answers and report its size.
    """
    try:
        dataset_count = db.execute(text("SELECT COUNT(*) FROM datasets")).scalar()
        return {
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
            "datasets": dataset_count,
        }
    except SQLAlchemyError as e:
        return {
            "status": "unhealthy",
            "timestamp": datetime.now().isoformat(),
            "error": str(e)
        }

@router.get("/health/storage")
def storage_health(storage: GraphStorage = Depends(get_graph_storage)) -> Dict[str, Any]:
    """
    Check graph storage health.
    Verifies the storage directory and project index are accessible.
    """
    try:
        return {
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
            **storage.get_storage_stats(),
        }
    except OSError as e:
        return {
            "status": "unhealthy",
            "timestamp": datetime.now().isoformat(),
            "error": str(e)
        }
