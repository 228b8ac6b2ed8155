"""Integration tests for the events HTTP surface.

Run with: pytest tests/test_events_api.py -v
"""

from unittest.mock import Mock

from fastapi.testclient import TestClient

from rsvp.core.exceptions import StoreError, VersionConflictError
from rsvp.core.identifiers import EncodedKey, encode_key, parse_identifier
from rsvp.main import create_app
from rsvp.services.store import EventStore, StoredEvent
from rsvp.services.memory_store import MemoryEventStore

from tests.conftest import COLLECTION


class TestCreateEvent:
    """Tests for POST /events"""

    def test_create_without_id_redirects_to_generated_key(self, client: TestClient, event_form: dict):
        """Given no id, redirects to an encoded-key URL that renders the event."""
        response = client.post("/events", data=event_form)

        assert response.status_code == 303
        location = response.headers["location"]
        assert location.startswith("/events/")
        token = location.rsplit("/", 1)[1]
        assert isinstance(parse_identifier(token, COLLECTION), EncodedKey)

        page = client.get(location)
        assert page.status_code == 200
        for value in event_form.values():
            assert value in page.text

    def test_generated_key_record_has_empty_stored_id(self, client: TestClient, store: MemoryEventStore,
                                                      event_form: dict):
        """The id is not written into the body, but the page shows the token."""
        location = client.post("/events", data=event_form).headers["location"]
        token = location.rsplit("/", 1)[1]
        doc_id = parse_identifier(token, COLLECTION).doc_id

        assert store.get(doc_id).data["id"] == ""
        page = client.get(location)
        assert f"/events/{token}/attendees" in page.text

    def test_create_with_explicit_id(self, client: TestClient, store: MemoryEventStore, event_form: dict):
        """Given an id, redirects to /events/{id} and stores the id in the body."""
        response = client.post("/events", data={**event_form, "id": "picnic"})

        assert response.status_code == 303
        assert response.headers["location"] == "/events/picnic"
        stored = store.get("picnic").data
        assert stored["id"] == "picnic"
        assert stored["title"] == "Team Picnic"
        assert stored["attendees"] == []

    def test_reserved_id_is_conflict(self, client: TestClient, store: MemoryEventStore, event_form: dict):
        """id='events' is always 409."""
        response = client.post("/events", data={**event_form, "id": "events"})

        assert response.status_code == 409
        assert response.text == "Conflict"
        assert len(store) == 0

    def test_reserved_id_is_conflict_even_with_missing_fields(self, client: TestClient,
                                                               store: MemoryEventStore):
        """The reserved-id check wins over the required-field check."""
        response = client.post("/events", data={"id": "events"})

        assert response.status_code == 409
        assert len(store) == 0

    def test_duplicate_id_is_conflict(self, client: TestClient, store: MemoryEventStore, event_form: dict):
        """A second create with the same id is rejected and the first is unchanged."""
        client.post("/events", data={**event_form, "id": "picnic"})
        response = client.post("/events", data={**event_form, "id": "picnic", "title": "Hijacked"})

        assert response.status_code == 409
        assert store.get("picnic").data["title"] == "Team Picnic"
        assert len(store) == 1

    def test_missing_required_field_is_bad_request(self, client: TestClient, store: MemoryEventStore,
                                                    event_form: dict):
        """An empty poc yields 400 and nothing is stored."""
        response = client.post("/events", data={**event_form, "poc": ""})

        assert response.status_code == 400
        assert response.text == "Bad Request"
        assert len(store) == 0

    def test_absent_required_field_is_bad_request(self, client: TestClient, store: MemoryEventStore,
                                                   event_form: dict):
        """A field left out of the form counts as empty."""
        form = dict(event_form)
        del form["location"]

        assert client.post("/events", data=form).status_code == 400
        assert len(store) == 0

    def test_id_that_looks_like_a_token_is_rejected(self, client: TestClient, store: MemoryEventStore,
                                                     event_form: dict):
        """A literal id may not alias an encoded key."""
        response = client.post("/events", data={**event_form, "id": encode_key(COLLECTION, "abc")})

        assert response.status_code == 400
        assert len(store) == 0


    def test_reserved_document_name_is_bad_request(self, client: TestClient, store: MemoryEventStore,
                                                     event_form: dict):
        """Ids the store cannot hold are rejected before it is asked."""
        for bad_id in ("__picnic__", "x" * 1501):
            response = client.post("/events", data={**event_form, "id": bad_id})
            assert response.status_code == 400
        assert len(store) == 0

    def test_store_failure_during_existence_check(self, renderer: Mock, event_form: dict):
        """A transport error while checking the id is a 500 and nothing is written."""
        store = Mock(spec=EventStore)
        store.get.side_effect = StoreError("deadline exceeded")
        client = TestClient(create_app(store, renderer, collection=COLLECTION), follow_redirects=False)

        response = client.post("/events", data={**event_form, "id": "picnic"})

        assert response.status_code == 500
        assert response.text == "Internal Server Error"
        store.create.assert_not_called()
    def test_malformed_form_is_internal_error(self, client: TestClient, store: MemoryEventStore):
        """A multipart body without a boundary cannot be parsed."""
        response = client.post(
            "/events",
            content=b"garbage",
            headers={"Content-Type": "multipart/form-data"},
        )

        assert response.status_code == 500
        assert response.text == "Internal Server Error"
        assert len(store) == 0


class TestGetEvent:
    """Tests for GET /events/{id}"""

    def test_get_event_renders_details(self, client: TestClient, event_form: dict):
        """Given event exists, returns its page."""
        client.post("/events", data={**event_form, "id": "picnic"})

        response = client.get("/events/picnic")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "Riverside Park" in response.text

    def test_get_event_not_found(self, client: TestClient, renderer: Mock):
        """Given event does not exist, returns 404 without rendering."""
        response = client.get("/events/nope")

        assert response.status_code == 404
        assert response.text == "Not Found"
        renderer.render_event.assert_not_called()


class TestAddAttendee:
    """Tests for POST /events/{id}/attendees"""

    def test_attendees_keep_arrival_order(self, client: TestClient, store: MemoryEventStore,
                                          event_form: dict):
        """Alice then Bob are stored in that order."""
        client.post("/events", data={**event_form, "id": "picnic"})

        first = client.post("/events/picnic/attendees", data={"attendee": "Alice"})
        second = client.post("/events/picnic/attendees", data={"attendee": "Bob"})

        assert first.status_code == 303
        assert first.headers["location"] == "/events/picnic"
        assert second.status_code == 303
        assert store.get("picnic").data["attendees"] == ["Alice", "Bob"]
        assert "Alice, Bob" in client.get("/events/picnic").text

    def test_duplicate_names_are_kept(self, client: TestClient, store: MemoryEventStore, event_form: dict):
        client.post("/events", data={**event_form, "id": "picnic"})
        client.post("/events/picnic/attendees", data={"attendee": "Alice"})
        client.post("/events/picnic/attendees", data={"attendee": "Alice"})

        assert store.get("picnic").data["attendees"] == ["Alice", "Alice"]

    def test_append_backfills_generated_id(self, client: TestClient, store: MemoryEventStore,
                                           event_form: dict):
        """Appending through an encoded token writes the token as the id."""
        location = client.post("/events", data=event_form).headers["location"]
        token = location.rsplit("/", 1)[1]

        response = client.post(f"{location}/attendees", data={"attendee": "Alice"})

        assert response.status_code == 303
        assert response.headers["location"] == location
        stored = store.get(parse_identifier(token, COLLECTION).doc_id).data
        assert stored["id"] == token
        assert stored["attendees"] == ["Alice"]

    def test_attendee_names_are_escaped(self, client: TestClient, event_form: dict):
        client.post("/events", data={**event_form, "id": "picnic"})
        client.post("/events/picnic/attendees", data={"attendee": "<b>Mallory</b>"})

        page = client.get("/events/picnic").text

        assert "<b>Mallory</b>" not in page
        assert "&lt;b&gt;Mallory&lt;/b&gt;" in page

    def test_add_attendee_event_not_found(self, client: TestClient, store: MemoryEventStore):
        """Given event does not exist, returns 404 and writes nothing."""
        response = client.post("/events/nope/attendees", data={"attendee": "Alice"})

        assert response.status_code == 404
        assert len(store) == 0

    def test_persistent_concurrent_updates_are_conflict(self, renderer: Mock):
        """When every conditional write loses, the append answers 409."""
        store = Mock(spec=EventStore)
        store.get.return_value = StoredEvent({"id": "picnic", "attendees": []}, 1)
        store.replace.side_effect = VersionConflictError("picnic")
        client = TestClient(create_app(store, renderer, collection=COLLECTION, max_append_attempts=3),
                            follow_redirects=False)

        response = client.post("/events/picnic/attendees", data={"attendee": "Alice"})

        assert response.status_code == 409
        assert response.text == "Conflict"
        assert store.replace.call_count == 3
