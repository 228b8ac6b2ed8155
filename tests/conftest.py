"""Pytest configuration and shared fixtures."""

from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from rsvp.core.config import TEMPLATES_DIR
from rsvp.main import create_app
from rsvp.services.memory_store import MemoryEventStore
from rsvp.services.renderer import TemplateRenderer

COLLECTION = "Event"


@pytest.fixture
def store() -> MemoryEventStore:
    return MemoryEventStore()


@pytest.fixture
def renderer() -> Mock:
    # Wrapped so tests can assert whether rendering happened
    return Mock(wraps=TemplateRenderer(TEMPLATES_DIR))


@pytest.fixture
def client(store: MemoryEventStore, renderer: Mock) -> TestClient:
    app = create_app(store, renderer, collection=COLLECTION, max_append_attempts=3)
    return TestClient(app, follow_redirects=False)


@pytest.fixture
def event_form() -> dict:
    return {
        "title": "Team Picnic",
        "description": "Bring a dish",
        "location": "Riverside Park",
        "start": "2026-06-01T12:00",
        "end": "2026-06-01T16:00",
        "poc": "Jordan",
    }
