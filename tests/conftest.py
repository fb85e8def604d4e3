"""Shared fixtures: in-memory database, API client, users and sample rows."""

import os

# must be set before the app (and its engine) is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["PAYSTACK_SECRET_KEY"] = ""
os.environ["OPENAI_API_KEY"] = ""

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from carnival.main import app
from carnival.database import Base, SessionLocal, engine, utcnow
from carnival.controller.band_controller import current_year
from carnival.models.band_model import Band
from carnival.models.event_model import Event
from carnival.models.hotel_model import Hotel
from carnival.models.user_model import UserProfile

DEFAULT_PASSWORD = "carnival2024"


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    """Create a test client."""
    return TestClient(app)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def register(client):
    """Register a user and return ``(user_id, headers)``; cookies are cleared so
    requests only authenticate through the headers."""

    def _register(email="ada@example.com", password=DEFAULT_PASSWORD, full_name="Ada Bassey"):
        response = client.post(
            "/api/auth/register",
            json={"email": email, "password": password, "fullName": full_name},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        client.cookies.clear()
        return body["user"]["id"], {"Authorization": f"Bearer {body['token']}"}

    return _register


@pytest.fixture
def user(register):
    return register()


@pytest.fixture
def other_user(register):
    return register(email="efe@example.com", full_name="Efe Okon")


@pytest.fixture
def admin(register, db):
    user_id, headers = register(email="admin@example.com", full_name="Carnival Admin")
    profile = db.query(UserProfile).filter(UserProfile.id == user_id).first()
    profile.role = "admin"
    db.commit()
    return user_id, headers


@pytest.fixture
def make_event(db):
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        n = counter["n"]
        start = utcnow() + timedelta(days=10 + n)
        data = {
            "slug": f"event-{n}",
            "name": f"Event {n}",
            "description": "Carnival event",
            "category": "music",
            "venue_name": "Cultural Centre",
            "location_lat": 4.95,
            "location_lng": 8.32,
            "start_time": start,
            "end_time": start + timedelta(hours=4),
        }
        data.update(overrides)
        event = Event(**data)
        db.add(event)
        db.commit()
        db.refresh(event)
        return event

    return _make


@pytest.fixture
def make_hotel(db):
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        n = counter["n"]
        data = {
            "slug": f"hotel-{n}",
            "name": f"Hotel {n}",
            "address": f"{n} Marian Road, Calabar",
            "location_lat": 4.96,
            "location_lng": 8.33,
            "phone": "+2348000000000",
            "star_rating": 4,
            "price_range": "mid-range",
            "price_per_night_min": 30000,
            "price_per_night_max": 60000,
            "total_rooms": 10,
            "available_rooms": 10,
            "distance_from_center": float(n),
            "commission_rate": 0.1,
            "room_types": [
                {"type": "Deluxe", "price": 50000, "available": 2, "maxOccupancy": 2},
            ],
        }
        data.update(overrides)
        hotel = Hotel(**data)
        db.add(hotel)
        db.commit()
        db.refresh(hotel)
        return hotel

    return _make


@pytest.fixture
def make_band(db):
    def _make(name, year=None, vote_count=0):
        band = Band(name=name, year=year or current_year(), vote_count=vote_count)
        db.add(band)
        db.commit()
        db.refresh(band)
        return band

    return _make


@pytest.fixture
def booking_payload():
    def _payload(hotel_id, check_in="2030-12-26T14:00:00Z", check_out="2030-12-28T11:00:00Z", room_count=1,
                 room_type="Deluxe"):
        return {
            "hotelId": hotel_id,
            "checkInDate": check_in,
            "checkOutDate": check_out,
            "roomType": room_type,
            "roomCount": room_count,
            "guestCount": 2,
            "guestName": "Ada Bassey",
            "guestEmail": "ada@example.com",
            "guestPhone": "+2348011111111",
        }

    return _payload
