"""
Dependency wiring: stores are built once at startup and reached by handlers
through app.state.
"""
from fastapi import Request

from rsvp.core.config import (
    EVENTS_COLLECTION,
    FIREBASE_CREDENTIALS,
    FIRESTORE_PROJECT,
    STORE_BACKEND,
)
from rsvp.services.renderer import TemplateRenderer
from rsvp.services.store import EventStore
from rsvp.use_cases.add_attendee import AddAttendeeUseCase
from rsvp.use_cases.create_event import CreateEventUseCase
from rsvp.use_cases.get_event import GetEventUseCase


def build_store(backend: str = STORE_BACKEND) -> EventStore:
    if backend == "memory":
        from rsvp.services.memory_store import MemoryEventStore
        return MemoryEventStore()
    if backend == "firestore":
        from rsvp.services.firestore_service import FirestoreEventStore
        from rsvp.services.google_auth import build_firestore_client
        client = build_firestore_client(FIRESTORE_PROJECT, FIREBASE_CREDENTIALS)
        return FirestoreEventStore(client, EVENTS_COLLECTION)
    raise ValueError(f"Unknown STORE_BACKEND: {backend}")


def get_renderer(request: Request) -> TemplateRenderer:
    return request.app.state.renderer


def get_create_event_uc(request: Request) -> CreateEventUseCase:
    state = request.app.state
    return CreateEventUseCase(state.store, state.collection)


def get_get_event_uc(request: Request) -> GetEventUseCase:
    state = request.app.state
    return GetEventUseCase(state.store, state.collection)


def get_add_attendee_uc(request: Request) -> AddAttendeeUseCase:
    state = request.app.state
    return AddAttendeeUseCase(state.store, state.collection, state.max_append_attempts)
