import json
import os
from typing import Dict, List, Optional

from saral.domain.errors import StorageError
from saral.storage.interface import KeyValueMedium


class FilesystemMedium(KeyValueMedium):
    """
    Implements the key-value medium as a single JSON document on the local
    filesystem. The whole document is rewritten on every change.
    """

    def __init__(self, file_path: str = None):
        """
        Initialize filesystem medium.

        Args:
            file_path: JSON file holding every key.
                       If None, uses 'storage/kv_store.json' in the current working directory.
        """
        if file_path is None:
            file_path = os.path.join(os.getcwd(), "storage", "kv_store.json")

        self.file_path = file_path
        parent = os.path.dirname(self.file_path)
        if parent:
            os.makedirs(parent, exist_ok=True)

    def _load(self) -> Dict[str, str]:
        if not os.path.exists(self.file_path):
            return {}
        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Cannot read key-value file {self.file_path}: {e}") from e
        if not isinstance(raw, dict):
            raise StorageError(f"Key-value file {self.file_path} does not hold an object")
        return {str(key): value for key, value in raw.items() if isinstance(value, str)}

    def _save(self, data: Dict[str, str]) -> None:
        # the old document stays in place until the swap
        tmp_path = f"{self.file_path}.tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self.file_path)
        except OSError as e:
            raise StorageError(f"Cannot write key-value file {self.file_path}: {e}") from e
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove_item(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)

    def keys(self) -> List[str]:
        return list(self._load().keys())

    def clear(self) -> None:
        self._save({})
