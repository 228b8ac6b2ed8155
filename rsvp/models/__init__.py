from rsvp.models.event import Event, EventCreate

__all__ = ["Event", "EventCreate"]
