"""Tests for store wiring and credential loading."""

import pytest

from rsvp.deps import build_store
from rsvp.models.event import Event, EventCreate
from rsvp.services.google_auth import load_credentials
from rsvp.services.memory_store import MemoryEventStore


class TestBuildStore:
    """Tests for build_store."""

    def test_memory_backend(self):
        assert isinstance(build_store("memory"), MemoryEventStore)

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            build_store("redis")


class TestLoadCredentials:
    """Tests for load_credentials."""

    def test_falls_back_to_default_credentials(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert load_credentials(None) is None


class TestEventModels:
    """Tests for the form and record models."""

    def test_from_form_ignores_unknown_and_non_text_fields(self):
        form = EventCreate.from_form({"title": "Picnic", "poc": object(), "extra": "x"})

        assert form.title == "Picnic"
        assert form.poc == ""
        assert form.missing_fields() == ["description", "location", "start", "end", "poc"]

    def test_from_document_defaults_attendees(self):
        event = Event.from_document({"id": "picnic", "title": "Picnic", "legacy": 1})

        assert event.attendees == []
        assert event.to_document()["title"] == "Picnic"
