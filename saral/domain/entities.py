"""Project configuration entities.

Persisted and exchanged with camelCase keys (``createdAt``, ``captureConfig``);
Python code uses the snake_case field names. Both spellings are accepted on
input.
"""
from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator, model_validator
from pydantic.alias_generators import to_camel

from saral.util.helpers import generate_id


class EntityModel(BaseModel):
    """Base for all configuration entities."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )


# Sources

class CloudCredentials(EntityModel):
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None


class CloudStorageConfig(EntityModel):
    provider: Literal["aws", "gcp", "azure"]
    bucket_name: str
    region: Optional[str] = None
    prefix: Optional[str] = None
    credentials: Optional[CloudCredentials] = None


class LocalStorageConfig(EntityModel):
    path: str
    file_types: List[str] = Field(default_factory=list)


class CloudStorageSource(EntityModel):
    id: str
    name: str
    type: Literal["cloudStorage"] = "cloudStorage"
    config: CloudStorageConfig


class LocalStorageSource(EntityModel):
    id: str
    name: str
    type: Literal["localStorage"] = "localStorage"
    config: LocalStorageConfig


SourceConfig = Annotated[
    Union[CloudStorageSource, LocalStorageSource],
    Field(discriminator="type"),
]


# Sinks

class DatabaseConfig(EntityModel):
    type: Literal["mongodb", "postgresql", "mysql"]
    connection_string: str
    table_name: Optional[str] = None
    collection_name: Optional[str] = None


class ApiAuthConfig(EntityModel):
    username: Optional[str] = None
    password: Optional[str] = None
    token: Optional[str] = None
    api_key_name: Optional[str] = None
    api_key_value: Optional[str] = None
    api_key_location: Optional[Literal["header", "query"]] = None


class ApiEndpointConfig(EntityModel):
    url: str
    method: Literal["GET", "POST", "PUT", "DELETE"]
    headers: Optional[Dict[str, str]] = None
    auth_type: Optional[Literal["none", "basic", "bearer", "apiKey"]] = None
    auth_config: Optional[ApiAuthConfig] = None


class DatabaseSink(EntityModel):
    id: str
    name: str
    type: Literal["database"] = "database"
    config: DatabaseConfig


class ApiEndpointSink(EntityModel):
    id: str
    name: str
    type: Literal["apiEndpoint"] = "apiEndpoint"
    config: ApiEndpointConfig


SinkConfig = Annotated[
    Union[DatabaseSink, ApiEndpointSink],
    Field(discriminator="type"),
]

source_adapter: TypeAdapter = TypeAdapter(SourceConfig)
sink_adapter: TypeAdapter = TypeAdapter(SinkConfig)


# Capture

class CaptureType(str, Enum):
    DOCUMENT = "document"
    IMAGE = "image"


class OcrConfig(EntityModel):
    language: str
    enhance_quality: bool = False


class DocumentCaptureConfig(EntityModel):
    allowed_types: List[str]
    max_size_mb: float = Field(alias="maxSizeMB")
    require_ocr: bool = Field(alias="requireOCR")
    ocr_config: Optional[OcrConfig] = None


class ResizeOptions(EntityModel):
    max_width: int
    max_height: int
    maintain_aspect_ratio: bool = True


class ImageCaptureConfig(EntityModel):
    allowed_types: List[str]
    max_size_mb: float = Field(alias="maxSizeMB")
    resize_options: Optional[ResizeOptions] = None


class CaptureConfig(EntityModel):
    id: str
    capture_type: List[CaptureType] = Field(default_factory=list)
    document_config: Optional[DocumentCaptureConfig] = None
    image_config: Optional[ImageCaptureConfig] = None

    @field_validator("capture_type")
    @classmethod
    def _dedupe_capture_types(cls, value: List[str]) -> List[str]:
        # first occurrence wins, order kept
        return list(dict.fromkeys(value))

    @property
    def has_document_capture(self) -> bool:
        return CaptureType.DOCUMENT in self.capture_type

    @property
    def has_image_capture(self) -> bool:
        return CaptureType.IMAGE in self.capture_type


def default_capture_config(capture_id: str | None = None) -> CaptureConfig:
    """Capture settings every new project starts with."""
    return CaptureConfig(
        id=capture_id or generate_id(),
        capture_type=[],
        document_config=DocumentCaptureConfig(
            allowed_types=["application/pdf", "image/jpeg", "image/png"],
            max_size_mb=10,
            require_ocr=False,
        ),
        image_config=ImageCaptureConfig(
            allowed_types=["image/jpeg", "image/png"],
            max_size_mb=5,
            resize_options=ResizeOptions(
                max_width=1920,
                max_height=1080,
                maintain_aspect_ratio=True,
            ),
        ),
    )


# Project

class Project(EntityModel):
    id: str
    name: str
    description: str = ""
    created_at: datetime
    updated_at: datetime
    sources: List[SourceConfig] = Field(default_factory=list)
    sinks: List[SinkConfig] = Field(default_factory=list)
    capture_config: CaptureConfig

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # stored text without an offset is UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @model_validator(mode="after")
    def _check_timestamps(self) -> "Project":
        if self.updated_at < self.created_at:
            raise ValueError("updatedAt must not be earlier than createdAt")
        return self

    def to_storage(self) -> dict:
        """JSON-ready dict with camelCase keys and ISO-8601 timestamps."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_storage(cls, data: dict) -> "Project":
        return cls.model_validate(data)


# Factories for nested entries

def new_cloud_storage_source(name: str, config: CloudStorageConfig | dict) -> CloudStorageSource:
    return CloudStorageSource(id=generate_id(), name=name, config=config)


def new_local_storage_source(name: str, config: LocalStorageConfig | dict) -> LocalStorageSource:
    return LocalStorageSource(id=generate_id(), name=name, config=config)


def new_database_sink(name: str, config: DatabaseConfig | dict) -> DatabaseSink:
    return DatabaseSink(id=generate_id(), name=name, config=config)


def new_api_endpoint_sink(name: str, config: ApiEndpointConfig | dict) -> ApiEndpointSink:
    return ApiEndpointSink(id=generate_id(), name=name, config=config)
