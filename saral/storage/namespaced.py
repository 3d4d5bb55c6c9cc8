"""Namespaced key-value store over a KeyValueMedium."""
from __future__ import annotations

import json
import logging
from typing import Any, List

from saral.domain.errors import StorageError
from saral.storage.interface import KeyValueMedium

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "saral"


class NamespacedStore:
    """JSON values under ``"{namespace}:{key}"`` keys of a shared medium.

    Persistence here is optional: medium failures and values that cannot be
    encoded or decoded are logged and turned into a no-op write or a default
    read. They never reach the caller.
    """

    def __init__(self, medium: KeyValueMedium, namespace: str = DEFAULT_NAMESPACE) -> None:
        self._medium = medium
        self.namespace = namespace

    @property
    def prefix(self) -> str:
        return f"{self.namespace}:"

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def _owns(self, full_key: str) -> bool:
        return full_key.startswith(self.prefix)

    def get(self, key: str, default: Any = None) -> Any:
        try:
            raw = self._medium.get_item(self._key(key))
            if raw is None:
                return default
            return json.loads(raw)
        except (StorageError, ValueError) as e:
            logger.error(f"Error retrieving data for key {key}: {e}")
            return default

    def set(self, key: str, value: Any) -> None:
        try:
            self._medium.set_item(self._key(key), json.dumps(value))
        except (StorageError, TypeError, ValueError) as e:
            logger.error(f"Error storing data for key {key}: {e}")

    def remove(self, key: str) -> None:
        try:
            self._medium.remove_item(self._key(key))
        except StorageError as e:
            logger.error(f"Error removing data for key {key}: {e}")

    def keys(self) -> List[str]:
        """Keys of this namespace, without the prefix."""
        try:
            return [k[len(self.prefix):] for k in self._medium.keys() if self._owns(k)]
        except StorageError as e:
            logger.error(f"Error listing keys for namespace {self.namespace}: {e}")
            return []

    def clear(self) -> None:
        """Remove this namespace's keys only; other namespaces on the medium survive."""
        try:
            owned = [k for k in self._medium.keys() if self._owns(k)]
            for full_key in owned:
                self._medium.remove_item(full_key)
        except StorageError as e:
            logger.error(f"Error clearing storage namespace {self.namespace}: {e}")
            return
        logger.debug(f"Cleared {len(owned)} keys from namespace {self.namespace}")
