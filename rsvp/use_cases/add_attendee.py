"""
Add Attendee Use Case
"""
import logging

from rsvp.core.exceptions import ConflictError, NotFoundError, VersionConflictError
from rsvp.core.identifiers import parse_identifier
from rsvp.models.event import Event
from rsvp.services.store import EventStore

logger = logging.getLogger(__name__)


class AddAttendeeUseCase:
    """Use case to append an attendee to an event"""

    def __init__(self, store: EventStore, collection: str, max_attempts: int = 3):
        self.store = store
        self.collection = collection
        self.max_attempts = max(1, max_attempts)

    def execute(self, segment: str, attendee: str) -> Event:
        """
        Read-modify-write of the whole record, guarded by the version read.

        A concurrent write makes the conditional write fail; the record is
        then re-read and the append retried, up to max_attempts times.

        Returns:
            Event: the record as written
        """
        key = parse_identifier(segment, self.collection)

        for attempt in range(1, self.max_attempts + 1):
            stored = self.store.get(key.doc_id)
            if stored is None:
                raise NotFoundError(segment)

            event = Event.from_document(stored.data)
            event.attendees.append(attendee)
            if not event.id:
                event.id = segment

            try:
                self.store.replace(key.doc_id, event.to_document(), stored.version)
            except VersionConflictError:
                logger.warning(f"Concurrent update on {key.doc_id} (attempt {attempt}/{self.max_attempts})")
                continue

            logger.info(f"Attendee added to {key.doc_id}: {len(event.attendees)} total")
            return event

        raise ConflictError(f"gave up appending to {key.doc_id}")
