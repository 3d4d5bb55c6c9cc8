from typing import Dict, List, Optional

from saral.storage.interface import KeyValueMedium


class InMemoryMedium(KeyValueMedium):
    """
    Dict-backed medium. Nothing survives the process; used for tests and
    ephemeral sessions.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._data.keys())

    def clear(self) -> None:
        self._data.clear()
