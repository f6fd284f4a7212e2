from sqlalchemy.orm import Session
from pcf_api.db.models import Method
from typing import List, Optional

class MethodRepository:
    """Repository for characterisation method operations."""

    def __init__(self, db: Session):
        self.db = db

    def get_method(self, method_id: int) -> Optional[Method]:
        """
        Get a method by ID.

        Args:
            method_id: Method ID

        Returns:
            Method if found, None otherwise
        """
        return self.db.query(Method).filter(Method.id == method_id).first()

    def get_all_methods(self) -> List[Method]:
        """
        Get all methods.

        Returns:
            List of all methods ordered by id
        """
        return self.db.query(Method).order_by(Method.id.asc()).all()

    def upsert_method(self, method_id: int, name: str, gwp_set: str = None, description: str = None) -> Method:
        """
        Create a method with a fixed ID unless it already exists.

        Existing methods are returned unchanged.
        """
        method = self.get_method(method_id)
        if method:
            return method

        method = Method(id=method_id, name=name, gwp_set=gwp_set, description=description)
        self.db.add(method)
        self.db.commit()
        self.db.refresh(method)
        return method
