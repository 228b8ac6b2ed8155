"""
Firestore Service - event persistence
"""
import logging
from typing import Any, Dict, Optional

from google.api_core import exceptions as gexc
from google.cloud import firestore

from rsvp.core.exceptions import (
    DuplicateKeyError,
    NotFoundError,
    StoreError,
    VersionConflictError,
)
from rsvp.services.store import EventStore, StoredEvent

logger = logging.getLogger(__name__)


class FirestoreEventStore(EventStore):
    """Event store backed by a single Firestore collection"""

    def __init__(self, client: firestore.Client, collection: str):
        self.client = client
        self.collection = collection

    def _document(self, doc_id: str):
        return self.client.collection(self.collection).document(doc_id)

    def get(self, doc_id: str) -> Optional[StoredEvent]:
        try:
            snapshot = self._document(doc_id).get()
        except gexc.GoogleAPICallError as e:
            logger.error(f"Error reading {self.collection}/{doc_id}: {e}", exc_info=True)
            raise StoreError(doc_id) from e

        if not snapshot.exists:
            return None
        return StoredEvent(snapshot.to_dict() or {}, snapshot.update_time)

    def create(self, doc_id: Optional[str], data: Dict[str, Any]) -> str:
        try:
            if doc_id:
                self._document(doc_id).create(data)
                return doc_id
            update_time, ref = self.client.collection(self.collection).add(data)
            return ref.id
        except gexc.AlreadyExists as e:
            raise DuplicateKeyError(doc_id) from e
        except gexc.GoogleAPICallError as e:
            logger.error(f"Error creating document in {self.collection}: {e}", exc_info=True)
            raise StoreError(doc_id) from e

    def replace(self, doc_id: str, data: Dict[str, Any], version: Any) -> None:
        option = self.client.write_option(last_update_time=version)
        try:
            self._document(doc_id).update(data, option=option)
        except gexc.FailedPrecondition as e:
            raise VersionConflictError(doc_id) from e
        except gexc.NotFound as e:
            raise NotFoundError(doc_id) from e
        except gexc.GoogleAPICallError as e:
            logger.error(f"Error updating {self.collection}/{doc_id}: {e}", exc_info=True)
            raise StoreError(doc_id) from e
