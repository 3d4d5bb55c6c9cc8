"""Domain events for decoupled side effects such as auditing."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional

from saral.util.helpers import generate_id, utc_now

logger = logging.getLogger(__name__)


@dataclass
class DomainEvent:
    """Base class for all domain events."""
    event_id: str
    timestamp: Optional[datetime]
    aggregate_id: str

    def __post_init__(self):
        if not self.event_id:
            self.event_id = generate_id()
        if not self.timestamp:
            self.timestamp = utc_now()


@dataclass
class ProjectCreated(DomainEvent):
    """Raised when a new project is created."""
    name: str
    description: str


@dataclass
class ProjectUpdated(DomainEvent):
    """Raised when a project or one of its nested collections changes."""
    name: str
    changed_fields: List[str] = field(default_factory=list)


@dataclass
class ProjectDeleted(DomainEvent):
    """Raised when a project is deleted."""
    name: str


Handler = Callable[[DomainEvent], None]


class DomainEventPublisher:
    """Dispatches events to subscribers registered per event type.

    Constructed explicitly and handed to the services that publish, so
    separate sessions and tests never share subscribers.
    """

    def __init__(self) -> None:
        self._subscribers: Dict[type, List[Handler]] = {}

    def subscribe(self, event_type: type[DomainEvent], handler: Handler) -> None:
        """Subscribe a handler to an event type."""
        self._subscribers.setdefault(event_type, []).append(handler)

    def publish(self, event: DomainEvent) -> None:
        """Publish an event to all subscribers of its exact type."""
        for handler in self._subscribers.get(type(event), []):
            try:
                handler(event)
            except Exception:
                # A failing handler must not fail the mutation that raised the event
                logger.exception(f"Event handler error for {type(event).__name__}")

    def clear_subscribers(self) -> None:
        """Clear all subscribers (useful for testing)."""
        self._subscribers = {}
