from abc import ABC, abstractmethod
from typing import List, Optional


class KeyValueMedium(ABC):
    """
    Abstract interface for the persistent map behind a NamespacedStore.
    Keys and values are plain strings; implementations raise StorageError
    when the medium itself fails.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read the raw value stored under a key.

        Args:
            key: Fully qualified key

        Returns:
            The stored string, or None if the key is absent
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Store a raw value, replacing any previous one.

        Args:
            key: Fully qualified key
            value: Serialized value
        """
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """
        Remove a key. Removing an absent key is not an error.

        Args:
            key: Fully qualified key
        """
        pass

    @abstractmethod
    def keys(self) -> List[str]:
        """
        Enumerate every key currently held by the medium.

        Returns:
            List of fully qualified keys
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every key from the medium, regardless of namespace."""
        pass
