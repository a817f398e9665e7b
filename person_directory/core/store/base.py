"""
Storage interfaces for the directory records and uploaded images.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence

from ..records import PersonRecord, SearchLogEntry, SearchType


class DirectoryStore(ABC):
    """Record store holding ``persons`` and the append-only ``search_logs``."""

    @abstractmethod
    def search_persons(self, term: str) -> List[PersonRecord]:
        """Return persons matching the term as a case-insensitive substring, in insertion order."""

    @abstractmethod
    def list_persons(self, limit: int) -> List[PersonRecord]:
        """Return the first ``limit`` persons in insertion order."""

    @abstractmethod
    def insert_person(self, values: Dict[str, Any]) -> PersonRecord:
        """Insert one person and return it with its server-assigned fields."""

    @abstractmethod
    def count_persons(self) -> int:
        """Total number of persons."""

    @abstractmethod
    def insert_search_log(self, query: str, search_type: SearchType) -> SearchLogEntry:
        """Append one search log entry."""

    @abstractmethod
    def count_search_logs(self) -> int:
        """Total number of search log entries."""

    @abstractmethod
    def recent_search_logs(self, limit: int) -> List[SearchLogEntry]:
        """Most recent entries, newest first."""


class BlobStore(ABC):
    """Object storage addressed by key, exposing public URLs."""

    @abstractmethod
    def upload(self, key: str, data: bytes) -> str:
        """Store bytes under a new key. Raises UploadError on failure."""

    @abstractmethod
    def get_public_url(self, key: str) -> str:
        """Publicly resolvable URL for a stored key."""

    @abstractmethod
    def remove(self, keys: Sequence[str]) -> None:
        """Delete the given keys. Missing keys are ignored."""

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Whether an object is stored under the key."""

    @abstractmethod
    def download(self, key: str) -> bytes:
        """Read the bytes stored under the key."""
