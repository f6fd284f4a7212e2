"""
Seed data for the dataset catalog.
"""
import logging
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from pcf_api.db.repositories import DatasetRepository, MethodRepository
from pcf_api.domain.normalization import normalize_kind

logger = logging.getLogger(__name__)

DEFAULT_METHOD = {"method_id": 1, "name": "Default", "gwp_set": "GWP100"}

DEFAULT_DATASETS: List[Dict[str, Any]] = [
    {"name": "Strommix DE", "source": "UBA", "year": 2022, "geo": "DE", "unit": "kWh", "value_co2e": 0.401, "kind": "energy"},
    {"name": "Diesel", "source": "ecoinvent", "year": 2020, "geo": "EU", "unit": "l", "value_co2e": 2.68, "kind": "energy"},
    {"name": "LKW-Transport", "source": "ecoinvent", "year": 2020, "geo": "EU", "unit": "tkm", "value_co2e": 0.12, "kind": "emissions"},
]


def seed_datasets(db: Session) -> int:
    """
    Ensure the default method exists and replace its datasets with the defaults.

    Returns:
        Number of datasets written
    """
    method = MethodRepository(db).upsert_method(**DEFAULT_METHOD)
    records = [{**record, "kind": normalize_kind(record["kind"]).value} for record in DEFAULT_DATASETS]
    datasets = DatasetRepository(db).replace_method_datasets(method.id, records)
    logger.info(f"Seeded {len(datasets)} datasets for method '{method.name}'")
    return len(datasets)
