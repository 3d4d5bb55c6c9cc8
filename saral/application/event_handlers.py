"""Event handlers for domain events."""
from __future__ import annotations

import logging

from saral.domain.events import (
    DomainEventPublisher,
    ProjectCreated,
    ProjectDeleted,
    ProjectUpdated,
)

logger = logging.getLogger(__name__)


class AuditLogHandler:
    """Logs every project lifecycle event."""

    def handle_project_created(self, event: ProjectCreated) -> None:
        logger.info(f"[AUDIT] Project created: {event.aggregate_id} - {event.name}")

    def handle_project_updated(self, event: ProjectUpdated) -> None:
        fields = ", ".join(event.changed_fields) or "timestamp"
        logger.info(f"[AUDIT] Project updated: {event.aggregate_id} ({fields})")

    def handle_project_deleted(self, event: ProjectDeleted) -> None:
        logger.info(f"[AUDIT] Project deleted: {event.aggregate_id} - {event.name}")


def register_event_handlers(publisher: DomainEventPublisher) -> DomainEventPublisher:
    """Register all event handlers with the publisher."""
    audit = AuditLogHandler()

    publisher.subscribe(ProjectCreated, audit.handle_project_created)
    publisher.subscribe(ProjectUpdated, audit.handle_project_updated)
    publisher.subscribe(ProjectDeleted, audit.handle_project_deleted)
    return publisher
