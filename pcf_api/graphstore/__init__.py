# Project and graph snapshot store (JSON files)
from .storage import GraphStorage

__all__ = ['GraphStorage']
