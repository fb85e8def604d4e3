"""Tests for booking pricing, availability and references."""

import re
from datetime import datetime

from carnival.controller.booking_controller import (
    calculate_pricing, count_nights, generate_booking_reference, to_base36
)
from carnival.models.hotel_model import HotelBooking


class TestBookingHelpers:

    def test_nights_round_up(self):
        assert count_nights(datetime(2030, 12, 26, 14), datetime(2030, 12, 28, 11)) == 2
        assert count_nights(datetime(2030, 12, 26), datetime(2030, 12, 27)) == 1

    def test_pricing(self):
        total, fee = calculate_pricing(50000, 2, 2, 0.1)
        assert total == 200000
        assert fee == 20000

    def test_base36(self):
        assert to_base36(0) == "0"
        assert to_base36(35) == "Z"
        assert to_base36(36) == "10"

    def test_reference_format(self):
        reference = generate_booking_reference()
        assert re.fullmatch(r"CX-[0-9A-Z]+-[0-9A-Z]{6}", reference)


class TestCreateBooking:

    def test_create_booking(self, client, user, make_hotel, booking_payload):
        user_id, headers = user
        hotel = make_hotel()
        response = client.post("/api/bookings", json=booking_payload(hotel.id, room_count=2), headers=headers)
        assert response.status_code == 200, response.text
        booking = response.json()
        assert booking["userId"] == user_id
        assert booking["nights"] == 2
        assert booking["pricePerNight"] == 50000
        assert booking["totalAmount"] == 200000
        assert booking["platformFee"] == 20000
        assert booking["status"] == "pending"
        assert booking["paymentStatus"] == "pending"
        assert booking["bookingReference"].startswith("CX-")

    def test_checkout_before_checkin(self, client, user, make_hotel, booking_payload):
        _, headers = user
        hotel = make_hotel()
        payload = booking_payload(hotel.id, check_in="2030-12-28T12:00:00Z", check_out="2030-12-26T12:00:00Z")
        response = client.post("/api/bookings", json=payload, headers=headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Check-out date must be after check-in date"

    def test_unknown_room_type(self, client, user, make_hotel, booking_payload):
        _, headers = user
        hotel = make_hotel()
        response = client.post("/api/bookings", json=booking_payload(hotel.id, room_type="Penthouse"),
                               headers=headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Room type not found"

    def test_unknown_hotel(self, client, user, booking_payload):
        _, headers = user
        response = client.post("/api/bookings", json=booking_payload("missing"), headers=headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Hotel not found"

    def test_missing_fields(self, client, user):
        _, headers = user
        response = client.post("/api/bookings", json={"roomType": "Deluxe"}, headers=headers)
        assert response.status_code == 400
        error = response.json()["error"]
        assert error.startswith("Missing required fields")
        assert "hotelId" in error

    def test_requires_session(self, client, make_hotel, booking_payload):
        hotel = make_hotel()
        assert client.post("/api/bookings", json=booking_payload(hotel.id)).status_code == 401


class TestAvailability:

    def test_overlapping_booking_rejected(self, client, user, make_hotel, booking_payload):
        _, headers = user
        hotel = make_hotel()
        first = booking_payload(hotel.id, "2030-12-26T14:00:00Z", "2030-12-28T11:00:00Z", room_count=2)
        assert client.post("/api/bookings", json=first, headers=headers).status_code == 200

        overlapping = booking_payload(hotel.id, "2030-12-27T14:00:00Z", "2030-12-29T11:00:00Z")
        response = client.post("/api/bookings", json=overlapping, headers=headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Rooms not available for selected dates"
        assert response.json()["code"] == "ROOMS_UNAVAILABLE"

    def test_back_to_back_stays_allowed(self, client, user, make_hotel, booking_payload):
        _, headers = user
        hotel = make_hotel()
        first = booking_payload(hotel.id, "2030-12-26T12:00:00Z", "2030-12-28T12:00:00Z", room_count=2)
        assert client.post("/api/bookings", json=first, headers=headers).status_code == 200

        following = booking_payload(hotel.id, "2030-12-28T12:00:00Z", "2030-12-30T12:00:00Z", room_count=2)
        assert client.post("/api/bookings", json=following, headers=headers).status_code == 200

    def test_cancelled_bookings_free_rooms(self, client, user, make_hotel, db, booking_payload):
        _, headers = user
        hotel = make_hotel()
        first = client.post("/api/bookings", json=booking_payload(hotel.id, room_count=2), headers=headers).json()

        booking = db.query(HotelBooking).filter(HotelBooking.id == first["id"]).first()
        booking.status = "cancelled"
        db.commit()

        response = client.post("/api/bookings", json=booking_payload(hotel.id, room_count=2), headers=headers)
        assert response.status_code == 200

    def test_other_room_type_unaffected(self, client, user, make_hotel, booking_payload):
        _, headers = user
        hotel = make_hotel(room_types=[
            {"type": "Deluxe", "price": 50000, "available": 1},
            {"type": "Suite", "price": 90000, "available": 1},
        ])
        assert client.post("/api/bookings", json=booking_payload(hotel.id), headers=headers).status_code == 200
        suite = booking_payload(hotel.id, room_type="Suite")
        assert client.post("/api/bookings", json=suite, headers=headers).status_code == 200


class TestReadBookings:

    def test_list_and_lookup_own_bookings(self, client, user, other_user, make_hotel, booking_payload):
        _, headers = user
        _, other_headers = other_user
        hotel = make_hotel()
        created = client.post("/api/bookings", json=booking_payload(hotel.id), headers=headers).json()

        listed = client.get("/api/bookings", headers=headers).json()
        assert [b["id"] for b in listed] == [created["id"]]
        assert client.get("/api/bookings", headers=other_headers).json() == []

        reference = created["bookingReference"]
        assert client.get(f"/api/bookings/{reference}", headers=headers).status_code == 200
        response = client.get(f"/api/bookings/{reference}", headers=other_headers)
        assert response.status_code == 404
        assert response.json()["error"] == "Booking not found"
