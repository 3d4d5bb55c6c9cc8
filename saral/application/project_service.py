"""Project configuration service: CRUD over the persisted project collection."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, List, Mapping, Optional, Type, Union

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from saral.domain.entities import (
    CaptureConfig,
    CaptureType,
    DocumentCaptureConfig,
    ImageCaptureConfig,
    Project,
    SinkConfig,
    SourceConfig,
    default_capture_config,
    sink_adapter,
    source_adapter,
)
from saral.domain.errors import ValidationError
from saral.domain.events import DomainEventPublisher, ProjectCreated, ProjectDeleted, ProjectUpdated
from saral.domain.validation import is_valid_project_name
from saral.storage.namespaced import NamespacedStore
from saral.util.helpers import generate_id, utc_now

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "projects"

# Fields a caller can never override through update()
_PROTECTED_FIELDS = ("id", "created_at")

Changes = Union[Mapping[str, Any], BaseModel]

# Fallbacks for sub-config edits when a project has no stored sub-config keys
_DOCUMENT_CONFIG_DEFAULTS = {
    "allowed_types": ["application/pdf", "image/jpeg", "image/png"],
    "max_size_mb": 10,
    "require_ocr": False,
}
_IMAGE_CONFIG_DEFAULTS = {
    "allowed_types": ["image/jpeg", "image/png", "image/gif"],
    "max_size_mb": 5,
    "resize_options": {"max_width": 1920, "max_height": 1080, "maintain_aspect_ratio": True},
}


def _field_values(model: BaseModel) -> dict:
    """Top-level field values; nested models are kept as they are (shallow)."""
    return {name: getattr(model, name) for name in type(model).model_fields}


def _normalize(model_cls: Type[BaseModel], changes: Changes) -> dict:
    """Turn a partial update into a dict keyed by field name.

    Mappings may use either field names or persisted aliases. Models
    contribute only the fields that were explicitly set.
    """
    if isinstance(changes, BaseModel):
        return changes.model_dump(exclude_unset=True)
    by_alias = {info.alias: name for name, info in model_cls.model_fields.items() if info.alias}
    return {by_alias.get(key, key): value for key, value in changes.items()}


def _validated(validate: Callable[[Any], Any], data: Any) -> Any:
    try:
        return validate(data)
    except PydanticValidationError as e:
        raise ValidationError(str(e)) from e


def _find_index(entries: List[Any], entry_id: str) -> Optional[int]:
    return next((i for i, entry in enumerate(entries) if entry.id == entry_id), None)


class ProjectService:
    """Manages projects stored as one JSON list under a single store key.

    Every mutation reads the whole collection, changes it in memory and
    writes it back whole. Lookups that miss return None (or False for
    delete); invalid input raises ValidationError.
    """

    def __init__(
        self,
        store: NamespacedStore,
        storage_key: str = DEFAULT_STORAGE_KEY,
        id_factory: Callable[[], str] = generate_id,
        name_validator: Callable[[str], bool] = is_valid_project_name,
        clock: Callable[[], datetime] = utc_now,
        publisher: Optional[DomainEventPublisher] = None,
    ) -> None:
        self._store = store
        self._storage_key = storage_key
        self._new_id = id_factory
        self._is_valid_name = name_validator
        self._now = clock
        self._publisher = publisher

    @property
    def storage_key(self) -> str:
        return self._storage_key

    # Persistence

    def _read_all(self) -> List[Project]:
        raw = self._store.get(self._storage_key, [])
        if not isinstance(raw, list):
            logger.warning(f"Ignoring non-list value under '{self._storage_key}'")
            return []
        projects: List[Project] = []
        for item in raw:
            try:
                projects.append(Project.from_storage(item))
            except PydanticValidationError as e:
                logger.warning(f"Skipping unreadable project entry under '{self._storage_key}': {e}")
        return projects

    def _write_all(self, projects: List[Project]) -> None:
        self._store.set(self._storage_key, [project.to_storage() for project in projects])

    def _publish(self, event) -> None:
        if self._publisher is not None:
            self._publisher.publish(event)

    # Projects

    def list(self) -> List[Project]:
        """All projects in insertion order, timestamps as datetime values."""
        return self._read_all()

    def get_by_id(self, project_id: str) -> Optional[Project]:
        return next((p for p in self._read_all() if p.id == project_id), None)

    def create(self, name: str, description: str = "") -> Project:
        """Create and persist a project with empty sources/sinks and default capture settings.

        Raises:
            ValidationError: if the name is blank or longer than 100 characters
        """
        if not self._is_valid_name(name):
            raise ValidationError("Invalid project name. Project name must be between 1-100 characters.")

        now = self._now()
        project = _validated(Project.model_validate, {
            "id": self._new_id(),
            "name": name,
            "description": description,
            "created_at": now,
            "updated_at": now,
            "sources": [],
            "sinks": [],
            "capture_config": default_capture_config(self._new_id()),
        })

        projects = self._read_all()
        projects.append(project)
        self._write_all(projects)

        logger.info(f"Created project {project.id} ({project.name})")
        self._publish(ProjectCreated(
            event_id="",
            timestamp=None,
            aggregate_id=project.id,
            name=project.name,
            description=project.description,
        ))
        return project

    def update(self, project_id: str, changes: Changes) -> Optional[Project]:
        """Shallow-merge top-level fields into a project.

        Nested values (capture_config, sources, sinks) given here replace the
        stored ones wholesale. ``id`` and ``created_at`` are ignored;
        ``updated_at`` is always set to now.
        """
        projects = self._read_all()
        index = _find_index(projects, project_id)
        if index is None:
            return None

        allowed = _normalize(Project, changes)
        for protected in _PROTECTED_FIELDS:
            allowed.pop(protected, None)

        merged = {**_field_values(projects[index]), **allowed, "updated_at": self._now()}
        updated = _validated(Project.model_validate, merged)

        projects[index] = updated
        self._write_all(projects)

        changed = sorted(key for key in allowed if key in Project.model_fields and key != "updated_at")
        logger.debug(f"Updated project {project_id}: {', '.join(changed) or 'timestamp only'}")
        self._publish(ProjectUpdated(
            event_id="",
            timestamp=None,
            aggregate_id=project_id,
            name=updated.name,
            changed_fields=changed,
        ))
        return updated

    def delete(self, project_id: str) -> bool:
        projects = self._read_all()
        index = _find_index(projects, project_id)
        if index is None:
            return False

        removed = projects.pop(index)
        self._write_all(projects)

        logger.info(f"Deleted project {project_id} ({removed.name})")
        self._publish(ProjectDeleted(
            event_id="",
            timestamp=None,
            aggregate_id=project_id,
            name=removed.name,
        ))
        return True

    # Nested collections (read-modify-write through update)

    def _add_entry(self, project_id: str, collection: str, adapter: TypeAdapter, entry: Any) -> Optional[Project]:
        project = self.get_by_id(project_id)
        if project is None:
            return None
        entries = list(getattr(project, collection))
        entries.append(_validated(adapter.validate_python, entry))
        return self.update(project_id, {collection: entries})

    def _update_entry(self, project_id: str, collection: str, adapter: TypeAdapter,
                      entry_id: str, changes: Changes) -> Optional[Project]:
        project = self.get_by_id(project_id)
        if project is None:
            return None
        entries = list(getattr(project, collection))
        index = _find_index(entries, entry_id)
        if index is None:
            return None
        current = entries[index]
        merged = {**_field_values(current), **_normalize(type(current), changes)}
        entries[index] = _validated(adapter.validate_python, merged)
        return self.update(project_id, {collection: entries})

    def _remove_entry(self, project_id: str, collection: str, entry_id: str) -> Optional[Project]:
        project = self.get_by_id(project_id)
        if project is None:
            return None
        entries = list(getattr(project, collection))
        index = _find_index(entries, entry_id)
        if index is None:
            return None
        del entries[index]
        return self.update(project_id, {collection: entries})

    def add_source(self, project_id: str, source: Union[SourceConfig, Mapping[str, Any]]) -> Optional[Project]:
        return self._add_entry(project_id, "sources", source_adapter, source)

    def update_source(self, project_id: str, source_id: str, changes: Changes) -> Optional[Project]:
        return self._update_entry(project_id, "sources", source_adapter, source_id, changes)

    def remove_source(self, project_id: str, source_id: str) -> Optional[Project]:
        return self._remove_entry(project_id, "sources", source_id)

    def add_sink(self, project_id: str, sink: Union[SinkConfig, Mapping[str, Any]]) -> Optional[Project]:
        return self._add_entry(project_id, "sinks", sink_adapter, sink)

    def update_sink(self, project_id: str, sink_id: str, changes: Changes) -> Optional[Project]:
        return self._update_entry(project_id, "sinks", sink_adapter, sink_id, changes)

    def remove_sink(self, project_id: str, sink_id: str) -> Optional[Project]:
        return self._remove_entry(project_id, "sinks", sink_id)

    # Capture configuration

    def update_capture_config(self, project_id: str, changes: Changes) -> Optional[Project]:
        """Shallow-merge into the capture config: a sub-config given here
        (document_config, image_config) replaces the stored one entirely."""
        project = self.get_by_id(project_id)
        if project is None:
            return None
        merged = {**_field_values(project.capture_config), **_normalize(CaptureConfig, changes)}
        capture_config = _validated(CaptureConfig.model_validate, merged)
        return self.update(project_id, {"capture_config": capture_config})

    def toggle_capture_type(self, project_id: str, capture_type: CaptureType, enabled: bool) -> Optional[Project]:
        project = self.get_by_id(project_id)
        if project is None:
            return None
        capture_types = list(project.capture_config.capture_type)
        if enabled and capture_type not in capture_types:
            capture_types.append(capture_type)
        elif not enabled:
            capture_types = [t for t in capture_types if t != capture_type]
        return self.update_capture_config(project_id, {"capture_type": capture_types})

    def _update_sub_config(self, project_id: str, field: str, model_cls: Type[BaseModel],
                           capture_type: CaptureType, defaults: dict, changes: Changes) -> Optional[Project]:
        project = self.get_by_id(project_id)
        if project is None:
            return None
        current = getattr(project.capture_config, field)
        existing = {} if current is None else {k: v for k, v in _field_values(current).items() if v is not None}
        merged = {**defaults, **existing, **_normalize(model_cls, changes)}
        sub_config = _validated(model_cls.model_validate, merged)

        capture_types = list(project.capture_config.capture_type)
        if capture_type not in capture_types:
            capture_types.append(capture_type)
        return self.update_capture_config(project_id, {"capture_type": capture_types, field: sub_config})

    def update_document_config(self, project_id: str, changes: Changes) -> Optional[Project]:
        """Merge defaults, the stored document config and ``changes`` (in that
        order), and turn document capture on."""
        return self._update_sub_config(project_id, "document_config", DocumentCaptureConfig,
                                       CaptureType.DOCUMENT, _DOCUMENT_CONFIG_DEFAULTS, changes)

    def update_image_config(self, project_id: str, changes: Changes) -> Optional[Project]:
        """Same as update_document_config, for the image config and image capture."""
        return self._update_sub_config(project_id, "image_config", ImageCaptureConfig,
                                       CaptureType.IMAGE, _IMAGE_CONFIG_DEFAULTS, changes)
