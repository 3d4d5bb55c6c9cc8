from typing import Optional

from saral.config import Settings, settings as default_settings
from saral.storage.filesystem import FilesystemMedium
from saral.storage.interface import KeyValueMedium
from saral.storage.memory import InMemoryMedium
from saral.storage.s3 import S3Medium

def get_medium(config: Optional[Settings] = None) -> KeyValueMedium:
    """
    Factory function to create the appropriate key-value medium
    based on settings.

    Args:
        config: Settings to read; the module-level settings when None

    Returns:
        A medium implementation (memory, filesystem or S3)
    """
    config = config or default_settings
    storage_type = config.STORAGE_TYPE.lower()

    if storage_type == "memory":
        return InMemoryMedium()

    if storage_type == "s3":
        if not config.S3_BUCKET:
            raise ValueError("S3_BUCKET must be set when using S3 storage")

        return S3Medium(
            bucket_name=config.S3_BUCKET,
            key_prefix=config.S3_KEY_PREFIX,
            aws_access_key_id=config.AWS_ACCESS_KEY_ID or None,
            aws_secret_access_key=config.AWS_SECRET_ACCESS_KEY or None,
            region_name=config.AWS_REGION
        )

    if storage_type == "filesystem":
        return FilesystemMedium(file_path=config.KV_STORAGE_FILE)

    raise ValueError(f"Unknown STORAGE_TYPE: {config.STORAGE_TYPE}")
