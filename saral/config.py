from pydantic_settings import BaseSettings
from pathlib import Path

# Get the repository root directory (parent of saral directory)
REPO_ROOT = Path(__file__).parent.parent.absolute()

class Settings(BaseSettings):
    """Application settings."""

    # Version and environment
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Storage settings
    STORAGE_TYPE: str = "filesystem"  # "memory", "filesystem" or "s3"
    STORAGE_NAMESPACE: str = "saral"
    PROJECTS_STORAGE_KEY: str = "projects"
    KV_STORAGE_FILE: str = str(REPO_ROOT / "storage" / "kv_store.json")

    # S3 settings (only used if STORAGE_TYPE = "s3")
    AWS_ACCESS_KEY_ID: str = ""
    AWS_SECRET_ACCESS_KEY: str = ""
    AWS_REGION: str = "us-east-1"
    S3_BUCKET: str = "saral-config"
    S3_KEY_PREFIX: str = "kv/"

    class Config:
        env_file = ".env"

settings = Settings()
