"""Domain events for decoupled side effects such as the audit log."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List
from uuid import uuid4

logger = logging.getLogger(__name__)


@dataclass
class DomainEvent:
    """Base class for all domain events."""
    event_id: str
    timestamp: datetime
    aggregate_id: str

    def __post_init__(self):
        if not self.event_id:
            object.__setattr__(self, 'event_id', str(uuid4()))
        if not self.timestamp:
            object.__setattr__(self, 'timestamp', datetime.now())


@dataclass
class DatasetCreated(DomainEvent):
    """Raised when an emission factor dataset is added to the catalog."""
    name: str
    kind: str
    value_co2e: float


@dataclass
class DatasetUpdated(DomainEvent):
    """Raised when a dataset changes."""
    changes: Dict[str, Any]


@dataclass
class DatasetDeleted(DomainEvent):
    """Raised when a dataset is removed from the catalog."""
    name: str


@dataclass
class ProjectCreated(DomainEvent):
    """Raised when a new project is created."""
    name: str
    description: str


@dataclass
class ProjectDeleted(DomainEvent):
    """Raised when a project is deleted."""
    name: str


@dataclass
class GraphSaved(DomainEvent):
    """Raised when a project's graph snapshot is stored."""
    node_count: int
    edge_count: int


class DomainEventPublisher:
    """Singleton publisher for domain events."""

    _instance: DomainEventPublisher | None = None
    _subscribers: Dict[type, List[Callable[[DomainEvent], None]]]

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._subscribers = {}
        return cls._instance

    def subscribe(self, event_type: type[DomainEvent], handler: Callable[[DomainEvent], None]) -> None:
        """Subscribe a handler to an event type."""
        if event_type not in self._subscribers:
            self._subscribers[event_type] = []
        self._subscribers[event_type].append(handler)

    def publish(self, event: DomainEvent) -> None:
        """Publish an event to all subscribers."""
        for handler in self._subscribers.get(type(event), []):
            try:
                handler(event)
            except Exception:
                # Handlers never fail the main operation
                logger.exception(f"Event handler error for {type(event).__name__}")

    def clear_subscribers(self) -> None:
        """Clear all subscribers (useful for testing)."""
        self._subscribers = {}


# Singleton instance
event_publisher = DomainEventPublisher()
