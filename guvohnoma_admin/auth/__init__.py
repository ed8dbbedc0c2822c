"""Session and login gate for the admin panel."""

from .gate import LoginGate
from .session import SessionContext
from .storage import FileStorage, MemoryStorage, NullStorage, StorageBackend

__all__ = [
    "LoginGate",
    "SessionContext",
    "StorageBackend",
    "NullStorage",
    "MemoryStorage",
    "FileStorage",
]
