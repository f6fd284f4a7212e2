"""Service for the emission factor dataset catalog."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from pcf_api.db.models import Dataset
from pcf_api.db.repositories import DatasetRepository, MethodRepository
from pcf_api.domain.errors import NotFoundError, ValidationError
from pcf_api.domain.events import event_publisher, DatasetCreated, DatasetUpdated, DatasetDeleted
from pcf_api.domain.normalization import normalize_kind
from pcf_api.domain.sorting import SortDirection, stable_sort

logger = logging.getLogger(__name__)

# Sortable table columns, by wire name and by column name
SORT_FIELDS = {
    "id": "id",
    "name": "name",
    "unit": "unit",
    "valueCO2e": "value_co2e",
    "value_co2e": "value_co2e",
    "source": "source",
    "year": "year",
    "geo": "geo",
    "kind": "kind",
    "methodId": "method_id",
    "method_id": "method_id",
}


class DatasetService:
    """Catalog operations; kind is normalized identically on create and update."""

    def __init__(self, datasets: DatasetRepository, methods: MethodRepository) -> None:
        self._datasets = datasets
        self._methods = methods

    def list_datasets(
        self,
        source: Optional[str] = None,
        geo: Optional[str] = None,
        name: Optional[str] = None,
        sort: Optional[str] = None,
        direction: SortDirection = SortDirection.NONE,
    ) -> List[Dataset]:
        rows = self._datasets.list_datasets(source=source, geo=geo, name=name)
        if not sort:
            return rows
        column = SORT_FIELDS.get(sort)
        if column is None:
            raise ValidationError(f"Cannot sort datasets by '{sort}'")
        return stable_sort(rows, lambda row: getattr(row, column), direction)

    def get_dataset(self, dataset_id: int) -> Dataset:
        dataset = self._datasets.get_dataset(dataset_id)
        if not dataset:
            raise NotFoundError(f"Dataset not found: {dataset_id}")
        return dataset

    def _require_method(self, method_id: Optional[int]) -> None:
        if method_id is not None and not self._methods.get_method(method_id):
            raise ValidationError(f"Method not found: {method_id}")

    def create_dataset(self, fields: Dict[str, Any]) -> Dataset:
        if not fields.get("name") or not str(fields["name"]).strip():
            raise ValidationError("Dataset name is required and cannot be empty")
        self._require_method(fields.get("method_id"))

        data = {**fields, "name": str(fields["name"]).strip(), "kind": normalize_kind(fields.get("kind")).value}
        dataset = self._datasets.create_dataset(data)
        logger.info(f"Created dataset {dataset.id} '{dataset.name}' ({dataset.kind})")

        event_publisher.publish(DatasetCreated(
            event_id="",
            timestamp=None,
            aggregate_id=str(dataset.id),
            name=dataset.name,
            kind=dataset.kind,
            value_co2e=dataset.value_co2e,
        ))
        return dataset

    def update_dataset(self, dataset_id: int, changes: Dict[str, Any]) -> Dataset:
        for required in ("name", "unit", "value_co2e"):
            if required in changes and changes[required] is None:
                raise ValidationError(f"Dataset {required} cannot be null")
        if "name" in changes and not str(changes["name"]).strip():
            raise ValidationError("Dataset name cannot be empty")
        self._require_method(changes.get("method_id"))

        data = dict(changes)
        if "name" in data:
            data["name"] = str(data["name"]).strip()
        if "kind" in data:
            data["kind"] = normalize_kind(data["kind"]).value

        dataset = self._datasets.update_dataset(dataset_id, data)
        if not dataset:
            raise NotFoundError(f"Dataset not found: {dataset_id}")
        logger.info(f"Updated dataset {dataset_id}: {sorted(data)}")

        event_publisher.publish(DatasetUpdated(
            event_id="",
            timestamp=None,
            aggregate_id=str(dataset_id),
            changes=data,
        ))
        return dataset

    def delete_dataset(self, dataset_id: int) -> None:
        dataset = self.get_dataset(dataset_id)
        name = dataset.name
        self._datasets.delete_dataset(dataset_id)
        logger.info(f"Deleted dataset {dataset_id} '{name}'")

        event_publisher.publish(DatasetDeleted(
            event_id="",
            timestamp=None,
            aggregate_id=str(dataset_id),
            name=name,
        ))
