from __future__ import annotations

from typing import Optional

from saral.config import Settings, settings
from saral.application.event_handlers import register_event_handlers
from saral.application.project_service import ProjectService
from saral.domain.events import DomainEventPublisher
from saral.storage.factory import get_medium
from saral.storage.interface import KeyValueMedium
from saral.storage.namespaced import NamespacedStore


def get_store(medium: Optional[KeyValueMedium] = None, config: Optional[Settings] = None) -> NamespacedStore:
    config = config or settings
    return NamespacedStore(medium or get_medium(config), namespace=config.STORAGE_NAMESPACE)


def get_event_publisher() -> DomainEventPublisher:
    return register_event_handlers(DomainEventPublisher())


def get_project_service(store: Optional[NamespacedStore] = None, config: Optional[Settings] = None) -> ProjectService:
    config = config or settings
    return ProjectService(
        store=store or get_store(config=config),
        storage_key=config.PROJECTS_STORAGE_KEY,
        publisher=get_event_publisher(),
    )
