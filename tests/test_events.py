"""Tests for event discovery and saved events."""

from datetime import timedelta

import pytest
from sqlalchemy.exc import IntegrityError

from carnival.database import utcnow
from carnival.models.event_model import Event


class TestEventListing:

    def test_upcoming_only_sorted_by_start(self, client, make_event):
        later = make_event(name="Later", start_time=utcnow() + timedelta(days=20),
                           end_time=utcnow() + timedelta(days=20, hours=3))
        sooner = make_event(name="Sooner", start_time=utcnow() + timedelta(days=2),
                            end_time=utcnow() + timedelta(days=2, hours=3))
        make_event(name="Cancelled", status="cancelled")

        response = client.get("/api/events")
        assert response.status_code == 200
        assert [e["id"] for e in response.json()] == [sooner.id, later.id]

    def test_filters(self, client, make_event):
        make_event(name="Grand Parade", category="parade", is_featured=True)
        make_event(name="Jazz Night", category="music", is_trending=True, description="Saxophones")

        assert [e["name"] for e in client.get("/api/events?category=parade").json()] == ["Grand Parade"]
        assert [e["name"] for e in client.get("/api/events?featured=true").json()] == ["Grand Parade"]
        assert [e["name"] for e in client.get("/api/events?trending=true").json()] == ["Jazz Night"]
        assert [e["name"] for e in client.get("/api/events?search=SAXO").json()] == ["Jazz Night"]
        # anything other than "true" leaves the list unfiltered
        assert len(client.get("/api/events?featured=false").json()) == 2

    def test_pagination(self, client, make_event):
        for _ in range(5):
            make_event()
        assert len(client.get("/api/events?limit=2").json()) == 2
        assert len(client.get("/api/events?limit=2&offset=4").json()) == 1

    def test_camel_case_fields(self, client, make_event):
        make_event()
        event = client.get("/api/events").json()[0]
        assert "venueName" in event
        assert "startTime" in event
        assert "venue_name" not in event

    def test_event_by_slug(self, client, make_event):
        event = make_event(slug="grand-parade")
        assert client.get("/api/events/grand-parade").json()["id"] == event.id
        response = client.get("/api/events/unknown")
        assert response.status_code == 404
        assert response.json()["error"] == "Event not found"


class TestEventStatus:

    def test_unknown_status_refused_by_database(self, make_event, db):
        with pytest.raises(IntegrityError):
            make_event(status="postponed")
        db.rollback()


class TestSavedEvents:

    def test_save_list_and_unsave(self, client, user, make_event, db):
        _, headers = user
        event = make_event()

        response = client.post(f"/api/events/{event.id}/save", headers=headers)
        assert response.json() == {"success": True}
        saved = client.get("/api/events/saved", headers=headers).json()
        assert [e["id"] for e in saved] == [event.id]

        db.expire_all()
        assert db.query(Event).filter(Event.id == event.id).first().save_count == 1

        assert client.post(f"/api/events/{event.id}/unsave", headers=headers).status_code == 200
        assert client.get("/api/events/saved", headers=headers).json() == []
        db.expire_all()
        assert db.query(Event).filter(Event.id == event.id).first().save_count == 0

    def test_save_twice(self, client, user, make_event):
        _, headers = user
        event = make_event()
        client.post(f"/api/events/{event.id}/save", headers=headers)
        response = client.post(f"/api/events/{event.id}/save", headers=headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Event already saved"

    def test_unsave_not_saved(self, client, user, make_event):
        _, headers = user
        event = make_event()
        assert client.post(f"/api/events/{event.id}/unsave", headers=headers).status_code == 404

    def test_saved_requires_session(self, client):
        assert client.get("/api/events/saved").status_code == 401
