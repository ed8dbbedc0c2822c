"""Storage backend interface and implementations for persisted panel state."""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)


class StorageBackend(ABC):
    """Abstract base class for key-value storage backends.

    Values are plain strings without expiry, like browser local storage.
    Implement this interface to create custom backends (e.g., Redis, DB).
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Get a stored value by key.

        Args:
            key: Storage key

        Returns:
            Stored value if present, None otherwise
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value.

        Args:
            key: Storage key
            value: Value to store
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Delete a stored value by key.

        Args:
            key: Storage key
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Clear all stored values."""
        pass


class NullStorage(StorageBackend):
    """No-op storage backend that never keeps anything.

    Use this when state should not survive between page loads.
    """

    def get(self, key: str) -> str | None:
        return None

    def set(self, key: str, value: str) -> None:
        pass

    def delete(self, key: str) -> None:
        pass

    def clear(self) -> None:
        pass


class MemoryStorage(StorageBackend):
    """In-memory storage backend (no persistence).

    Stored values are lost when the process exits.
    """

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        logger.debug(f"Stored {key}={value!r}")

    def delete(self, key: str) -> None:
        if key in self._data:
            del self._data[key]
            logger.debug(f"Deleted stored key: {key}")

    def clear(self) -> None:
        self._data.clear()
        logger.debug("Cleared all stored values")


class FileStorage(StorageBackend):
    """File-based storage backend.

    Keeps all values in a single JSON object on disk.
    """

    def __init__(self, path: str | Path = ".cache/guvohnoma-admin/storage.json"):
        """Initialize file storage.

        Args:
            path: JSON file to keep values in (relative or absolute)
        """
        self.path = Path(path).expanduser().resolve()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        logger.debug(f"File storage initialized at: {self.path}")

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path) as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Failed to load storage file {self.path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed storage file {self.path}")
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _save(self, data: dict[str, str]) -> None:
        with open(self.path, "w") as f:
            json.dump(data, f, indent=2)

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)
        logger.debug(f"Stored {key}={value!r} at {self.path}")

    def delete(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)
            logger.debug(f"Deleted stored key: {key}")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
        logger.debug(f"Cleared storage file {self.path}")
