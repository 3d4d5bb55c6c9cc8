"""
Test configuration and fixtures for saral tests.
"""
import pytest
from datetime import datetime, timedelta, timezone

from saral.application.project_service import ProjectService
from saral.config import Settings
from saral.domain.entities import (
    CloudStorageConfig,
    CloudStorageSource,
    DatabaseConfig,
    DatabaseSink,
)
from saral.storage.memory import InMemoryMedium
from saral.storage.namespaced import NamespacedStore


class FakeClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)):
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + timedelta(seconds=1)
        return value


@pytest.fixture
def test_settings(tmp_path):
    """Settings pointing every medium at test-only locations."""
    return Settings(
        STORAGE_TYPE="memory",
        STORAGE_NAMESPACE="test",
        PROJECTS_STORAGE_KEY="test_projects",
        KV_STORAGE_FILE=str(tmp_path / "kv_store.json"),
    )


@pytest.fixture
def medium():
    """Create a fresh in-memory medium."""
    return InMemoryMedium()


@pytest.fixture
def store(medium):
    """Create a namespaced store over the shared test medium."""
    return NamespacedStore(medium, namespace="test")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(store, clock):
    """Create a project service with a deterministic clock."""
    return ProjectService(store, storage_key="test_projects", clock=clock)


@pytest.fixture
def sample_project(service):
    """Create a sample project for testing."""
    return service.create("Test Project", "A test project")


@pytest.fixture
def cloud_source():
    return CloudStorageSource(
        id="source-1",
        name="Test Source",
        config=CloudStorageConfig(provider="aws", bucket_name="test-bucket"),
    )


@pytest.fixture
def database_sink():
    return DatabaseSink(
        id="sink-1",
        name="Test Sink",
        config=DatabaseConfig(type="mongodb", connection_string="mongodb://localhost:27017/test"),
    )
