"""
In-memory document store for local runs and tests.

State is lost on restart.
"""
import copy
import logging
import secrets
import string
import threading
from typing import Any, Dict, Optional, Tuple

from rsvp.core.exceptions import DuplicateKeyError, NotFoundError, VersionConflictError
from rsvp.services.store import EventStore, StoredEvent

logger = logging.getLogger(__name__)

_AUTO_ID_ALPHABET = string.ascii_letters + string.digits
_AUTO_ID_LENGTH = 20


def _auto_id() -> str:
    return "".join(secrets.choice(_AUTO_ID_ALPHABET) for _ in range(_AUTO_ID_LENGTH))


class MemoryEventStore(EventStore):
    """Dict-backed store with integer versions"""

    def __init__(self):
        self._documents: Dict[str, Tuple[Dict[str, Any], int]] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._documents)

    def get(self, doc_id: str) -> Optional[StoredEvent]:
        with self._lock:
            entry = self._documents.get(doc_id)
            if entry is None:
                return None
            data, version = entry
            return StoredEvent(copy.deepcopy(data), version)

    def create(self, doc_id: Optional[str], data: Dict[str, Any]) -> str:
        with self._lock:
            if doc_id is None:
                doc_id = _auto_id()
                while doc_id in self._documents:
                    doc_id = _auto_id()
            elif doc_id in self._documents:
                raise DuplicateKeyError(doc_id)
            self._documents[doc_id] = (copy.deepcopy(data), 1)
        logger.debug(f"Document created: {doc_id}")
        return doc_id

    def replace(self, doc_id: str, data: Dict[str, Any], version: Any) -> None:
        with self._lock:
            entry = self._documents.get(doc_id)
            if entry is None:
                raise NotFoundError(doc_id)
            current = entry[1]
            if current != version:
                raise VersionConflictError(doc_id)
            self._documents[doc_id] = (copy.deepcopy(data), current + 1)
