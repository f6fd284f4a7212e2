from sqlalchemy.orm import Session
from pcf_api.db.models import Dataset
from pcf_api.domain.entities import Dataset as DatasetEntity, DatasetKind
from pcf_api.domain.normalization import normalize_kind
from typing import Any, Dict, Iterable, List, Optional

# Columns a client may set on create or update
WRITABLE_FIELDS = ("name", "source", "year", "geo", "unit", "value_co2e", "kind", "method_id")


def to_entity(row: Dataset) -> DatasetEntity:
    """Convert a catalog row into the immutable entity the aggregator reads."""
    return DatasetEntity(
        id=row.id,
        name=row.name,
        unit=row.unit,
        value_co2e=row.value_co2e,
        kind=normalize_kind(row.kind),
        source=row.source,
        year=row.year,
        geo=row.geo,
        method_id=row.method_id,
    )


class DatasetRepository:
    """Repository for emission factor dataset operations."""

    def __init__(self, db: Session):
        self.db = db

    def list_datasets(
        self,
        source: Optional[str] = None,
        geo: Optional[str] = None,
        name: Optional[str] = None,
    ) -> List[Dataset]:
        """
        List datasets ordered by id, optionally filtered.

        Args:
            source: Substring the source must contain (optional)
            geo: Substring the geography must contain (optional)
            name: Substring the name must contain (optional)

        Returns:
            Matching datasets
        """
        query = self.db.query(Dataset)
        if source:
            query = query.filter(Dataset.source.contains(source))
        if geo:
            query = query.filter(Dataset.geo.contains(geo))
        if name:
            query = query.filter(Dataset.name.contains(name))
        return query.order_by(Dataset.id.asc()).all()

    def get_dataset(self, dataset_id: int) -> Optional[Dataset]:
        """
        Get a dataset by ID.

        Args:
            dataset_id: Dataset ID

        Returns:
            Dataset if found, None otherwise
        """
        return self.db.query(Dataset).filter(Dataset.id == dataset_id).first()

    def get_by_ids(self, dataset_ids: Iterable[int]) -> List[Dataset]:
        """Fetch all datasets for an id set in a single query."""
        ids = sorted(set(dataset_ids))
        if not ids:
            return []
        return self.db.query(Dataset).filter(Dataset.id.in_(ids)).all()

    def create_dataset(self, fields: Dict[str, Any]) -> Dataset:
        """
        Create a new dataset.

        Args:
            fields: Column values; ``kind`` must already be normalized

        Returns:
            Created dataset
        """
        dataset = Dataset(**{key: value for key, value in fields.items() if key in WRITABLE_FIELDS})
        if dataset.kind is None:
            dataset.kind = DatasetKind.MATERIAL.value
        self.db.add(dataset)
        self.db.commit()
        self.db.refresh(dataset)
        return dataset

    def update_dataset(self, dataset_id: int, changes: Dict[str, Any]) -> Optional[Dataset]:
        """
        Apply a partial update to a dataset.

        Args:
            dataset_id: Dataset ID
            changes: Column values to change

        Returns:
            Updated dataset or None if not found
        """
        dataset = self.get_dataset(dataset_id)
        if not dataset:
            return None

        for key, value in changes.items():
            if key in WRITABLE_FIELDS:
                setattr(dataset, key, value)
        self.db.commit()
        self.db.refresh(dataset)
        return dataset

    def delete_dataset(self, dataset_id: int) -> bool:
        """
        Delete a dataset by ID.

        Args:
            dataset_id: Dataset ID

        Returns:
            True if dataset was deleted, False otherwise
        """
        dataset = self.get_dataset(dataset_id)
        if not dataset:
            return False

        self.db.delete(dataset)
        self.db.commit()
        return True

    def replace_method_datasets(self, method_id: int, records: List[Dict[str, Any]]) -> List[Dataset]:
        """Delete every dataset of a method and insert the given records instead."""
        self.db.query(Dataset).filter(Dataset.method_id == method_id).delete(synchronize_session=False)
        datasets = [
            Dataset(**{**{k: v for k, v in record.items() if k in WRITABLE_FIELDS}, "method_id": method_id})
            for record in records
        ]
        self.db.add_all(datasets)
        self.db.commit()
        for dataset in datasets:
            self.db.refresh(dataset)
        return datasets
