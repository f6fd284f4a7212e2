"""Errors raised at the service boundary.

The emissions aggregator never raises; bad references inside a graph are
soft-skipped. These errors cover requests that cannot be served at all.
"""
from __future__ import annotations


class DomainError(Exception):
    """Base for all PCF domain errors."""


class NotFoundError(DomainError):
    """Dataset, method or project not found."""


class ValidationError(DomainError):
    """Invalid request data (empty names, malformed snapshots)."""


class ConflictError(DomainError):
    """Resource conflict (e.g., duplicate project name)."""


class CatalogUnavailableError(DomainError):
    """The dataset catalog could not be read."""
