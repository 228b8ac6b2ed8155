"""
Get Event Use Case
"""
from rsvp.core.exceptions import NotFoundError
from rsvp.core.identifiers import parse_identifier
from rsvp.models.event import Event
from rsvp.services.store import EventStore


class GetEventUseCase:
    """Use case to load an event by its URL segment"""

    def __init__(self, store: EventStore, collection: str):
        self.store = store
        self.collection = collection

    def execute(self, segment: str) -> Event:
        key = parse_identifier(segment, self.collection)
        stored = self.store.get(key.doc_id)
        if stored is None:
            raise NotFoundError(segment)

        event = Event.from_document(stored.data)
        # Records stored under a generated key carry no id in the body
        if not event.id:
            event.id = segment
        return event
