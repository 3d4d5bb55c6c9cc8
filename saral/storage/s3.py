from typing import Any, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from saral.domain.errors import StorageError
from saral.storage.interface import KeyValueMedium


class S3Medium(KeyValueMedium):
    """
    Implements the key-value medium on AWS S3: one object per key, all under
    a common key prefix inside one bucket.
    """

    def __init__(self, bucket_name: str, key_prefix: str = "kv/",
                 aws_access_key_id: str = None, aws_secret_access_key: str = None,
                 region_name: str = None, client: Any = None):
        """
        Initialize S3 medium.

        Args:
            bucket_name: S3 bucket name
            key_prefix: Prefix prepended to every object key
            aws_access_key_id: AWS access key ID (if None, uses environment variables)
            aws_secret_access_key: AWS secret access key (if None, uses environment variables)
            region_name: AWS region name (if None, uses environment variables)
            client: Pre-built S3 client; skips client construction when given
        """
        self.bucket_name = bucket_name
        self.key_prefix = key_prefix

        if client is None:
            # If credentials are not provided, boto3 will look for them in environment variables
            client = boto3.client(
                's3',
                aws_access_key_id=aws_access_key_id,
                aws_secret_access_key=aws_secret_access_key,
                region_name=region_name
            )
        self.s3_client = client

    def _object_key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    def get_item(self, key: str) -> Optional[str]:
        try:
            response = self.s3_client.get_object(Bucket=self.bucket_name, Key=self._object_key(key))
            return response['Body'].read().decode('utf-8')
        except ClientError as e:
            if e.response.get('Error', {}).get('Code') in ('NoSuchKey', '404'):
                return None
            raise StorageError(f"S3 read failed for key {key}: {e}") from e
        except BotoCoreError as e:
            raise StorageError(f"S3 read failed for key {key}: {e}") from e

    def set_item(self, key: str, value: str) -> None:
        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=self._object_key(key),
                Body=value.encode('utf-8'),
                ContentType='application/json'
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"S3 write failed for key {key}: {e}") from e

    def remove_item(self, key: str) -> None:
        try:
            self.s3_client.delete_object(Bucket=self.bucket_name, Key=self._object_key(key))
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"S3 delete failed for key {key}: {e}") from e

    def keys(self) -> List[str]:
        found: List[str] = []
        try:
            paginator = self.s3_client.get_paginator('list_objects_v2')
            for page in paginator.paginate(Bucket=self.bucket_name, Prefix=self.key_prefix):
                for entry in page.get('Contents', []):
                    object_key = entry.get('Key')
                    if object_key:
                        found.append(object_key[len(self.key_prefix):])
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"S3 listing failed for prefix {self.key_prefix}: {e}") from e
        return found

    def clear(self) -> None:
        for key in self.keys():
            self.remove_item(key)
