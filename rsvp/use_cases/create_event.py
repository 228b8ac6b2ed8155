"""
Create Event Use Case
"""
import logging

from rsvp.core.config import RESERVED_IDS
from rsvp.core.exceptions import ConflictError, ValidationError
from rsvp.core.identifiers import encode_key
from rsvp.core.utils import is_valid_literal_id
from rsvp.models.event import Event, EventCreate
from rsvp.services.store import EventStore

logger = logging.getLogger(__name__)


class CreateEventUseCase:
    """Use case to create an event"""

    def __init__(self, store: EventStore, collection: str):
        self.store = store
        self.collection = collection

    def execute(self, form: EventCreate) -> str:
        """
        Validates and stores a new event.

        Returns:
            str: the URL segment of the new event (the caller's id, or the
            encoded token of the generated key)
        """
        # Both checks run before the store is touched; a reserved id wins
        reserved = form.id in RESERVED_IDS
        missing = form.missing_fields()
        if reserved:
            raise ConflictError(f"reserved id: {form.id}")
        if missing:
            raise ValidationError(f"missing fields: {', '.join(missing)}")
        if form.id and not is_valid_literal_id(form.id, self.collection):
            raise ValidationError(f"invalid id: {form.id}")

        if form.id and self.store.get(form.id) is not None:
            raise ConflictError(f"id taken: {form.id}")

        event = Event(**form.model_dump())
        doc_id = self.store.create(form.id or None, event.to_document())

        if form.id:
            logger.info(f"Event created: {form.id}")
            return form.id
        token = encode_key(self.collection, doc_id)
        logger.info(f"Event created with generated key: {doc_id}")
        return token
