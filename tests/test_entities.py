"""Tests for project configuration entities."""
from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError as PydanticValidationError

from saral.domain.entities import (
    ApiEndpointSink,
    CaptureConfig,
    CloudStorageSource,
    LocalStorageSource,
    Project,
    default_capture_config,
    new_api_endpoint_sink,
    new_cloud_storage_source,
    new_database_sink,
    new_local_storage_source,
    sink_adapter,
    source_adapter,
)

NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def _project(**overrides) -> Project:
    fields = dict(
        id="proj-1",
        name="Test Project",
        created_at=NOW,
        updated_at=NOW,
        capture_config=default_capture_config("capture-1"),
    )
    fields.update(overrides)
    return Project(**fields)


class TestTaggedUnions:
    """Test discriminated source and sink payloads."""

    def test_source_type_selects_config_shape(self):
        cloud = source_adapter.validate_python({
            "id": "s1", "name": "Bucket", "type": "cloudStorage",
            "config": {"provider": "gcp", "bucketName": "data", "region": "europe-west1"},
        })
        local = source_adapter.validate_python({
            "id": "s2", "name": "Disk", "type": "localStorage",
            "config": {"path": "/data", "fileTypes": ["pdf", "png"]},
        })

        assert isinstance(cloud, CloudStorageSource)
        assert cloud.config.bucket_name == "data"
        assert isinstance(local, LocalStorageSource)
        assert local.config.file_types == ["pdf", "png"]

    def test_mismatched_config_is_rejected(self):
        with pytest.raises(PydanticValidationError):
            source_adapter.validate_python({
                "id": "s1", "name": "Bad", "type": "localStorage",
                "config": {"provider": "aws", "bucketName": "b"},
            })

    def test_unknown_type_is_rejected(self):
        with pytest.raises(PydanticValidationError):
            sink_adapter.validate_python({"id": "k1", "name": "Bad", "type": "ftp", "config": {}})

    def test_api_endpoint_sink(self):
        sink = sink_adapter.validate_python({
            "id": "k1", "name": "Webhook", "type": "apiEndpoint",
            "config": {
                "url": "https://example.com/hook",
                "method": "POST",
                "headers": {"X-Trace-Id": "abc"},
                "authType": "apiKey",
                "authConfig": {"apiKeyName": "X-Key", "apiKeyValue": "secret", "apiKeyLocation": "header"},
            },
        })

        assert isinstance(sink, ApiEndpointSink)
        assert sink.config.headers == {"X-Trace-Id": "abc"}
        assert sink.config.auth_config.api_key_location == "header"


class TestCaptureConfig:
    """Test capture configuration defaults and normalization."""

    def test_default_capture_config(self):
        config = default_capture_config("capture-1")

        assert config.id == "capture-1"
        assert config.capture_type == []
        assert config.document_config.allowed_types == ["application/pdf", "image/jpeg", "image/png"]
        assert config.document_config.max_size_mb == 10
        assert config.document_config.require_ocr is False
        assert config.image_config.max_size_mb == 5
        assert config.image_config.resize_options.max_width == 1920
        assert config.image_config.resize_options.max_height == 1080

    def test_default_capture_config_generates_id(self):
        assert default_capture_config().id != default_capture_config().id

    def test_capture_types_are_deduplicated_in_order(self):
        config = CaptureConfig(id="c1", capture_type=["image", "document", "image"])
        assert config.capture_type == ["image", "document"]

    def test_unknown_capture_type_is_rejected(self):
        with pytest.raises(PydanticValidationError):
            CaptureConfig(id="c1", capture_type=["video"])

    def test_aliases_keep_original_casing(self):
        dumped = default_capture_config("c1").model_dump(by_alias=True, exclude_none=True)
        assert dumped["documentConfig"]["maxSizeMB"] == 10
        assert dumped["documentConfig"]["requireOCR"] is False
        assert dumped["imageConfig"]["resizeOptions"]["maintainAspectRatio"] is True


class TestProject:
    """Test the project aggregate."""

    def test_updated_before_created_is_rejected(self):
        with pytest.raises(PydanticValidationError):
            _project(updated_at=datetime(2023, 1, 1, tzinfo=timezone.utc))

    def test_storage_round_trip(self):
        project = _project(
            sources=[new_local_storage_source("Disk", {"path": "/in", "fileTypes": ["pdf"]})],
            sinks=[new_database_sink("Db", {"type": "postgresql", "connectionString": "postgresql://h/db"})],
        )

        stored = project.to_storage()
        assert datetime.fromisoformat(stored["createdAt"].replace("Z", "+00:00")) == NOW
        assert stored["captureConfig"]["id"] == "capture-1"
        assert stored["sources"][0]["type"] == "localStorage"

        restored = Project.from_storage(stored)
        assert restored.created_at == project.created_at
        assert restored.updated_at == project.updated_at
        assert restored.model_dump() == project.model_dump()

    def test_snake_case_input_accepted(self):
        project = Project.model_validate({
            "id": "p1",
            "name": "Snake",
            "created_at": "2024-01-01T12:00:00+00:00",
            "updated_at": "2024-01-01T12:00:00+00:00",
            "capture_config": {"id": "c1"},
        })
        assert project.sources == []
        assert project.capture_config.document_config is None


def test_factories_assign_fresh_ids():
    first = new_cloud_storage_source("A", {"provider": "aws", "bucketName": "a"})
    second = new_cloud_storage_source("B", {"provider": "aws", "bucketName": "b"})
    hook = new_api_endpoint_sink("Hook", {"url": "https://example.com", "method": "PUT"})

    assert first.id != second.id
    assert first.type == "cloudStorage"
    assert hook.type == "apiEndpoint"
