from pcf_api.db.repositories.datasets import DatasetRepository
from pcf_api.db.repositories.methods import MethodRepository

__all__ = ['DatasetRepository', 'MethodRepository']
