"""
Document store interface.

Stores are swappable; use cases only depend on this interface.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class StoredEvent:
    """Raw document plus the version token needed for a conditional write"""
    data: Dict[str, Any]
    version: Any


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def get(self, doc_id: str) -> Optional[StoredEvent]:
        """Return the document at doc_id, or None if it does not exist."""
        ...

    @abstractmethod
    def create(self, doc_id: Optional[str], data: Dict[str, Any]) -> str:
        """
        Write a new document and return its id.

        With doc_id=None the store generates the id. Raises DuplicateKeyError
        if a document already exists at doc_id.
        """
        ...

    @abstractmethod
    def replace(self, doc_id: str, data: Dict[str, Any], version: Any) -> None:
        """
        Overwrite the document only if it is still at `version`.

        Raises VersionConflictError when the document changed since it was
        read, NotFoundError when it no longer exists.
        """
        ...
