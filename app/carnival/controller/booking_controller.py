import logging
import math
import secrets
import string
import time
from datetime import datetime
from typing import Any, Dict

from sqlalchemy import func
from sqlalchemy.orm import Session

from carnival.errors import NotFound, ValidationFailed
from carnival.models.hotel_model import Hotel, HotelBooking, ACTIVE_BOOKING_STATUSES

logger = logging.getLogger(__name__)

BASE36_ALPHABET = string.digits + string.ascii_uppercase
SECONDS_PER_DAY = 24 * 60 * 60


def to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def generate_reference(prefix: str, random_length: int = 6) -> str:
    """``<PREFIX>-<base36 ms timestamp>-<random base36>``, all uppercase."""
    timestamp = to_base36(int(time.time() * 1000))
    suffix = "".join(secrets.choice(BASE36_ALPHABET) for _ in range(random_length))
    return f"{prefix}-{timestamp}-{suffix}"


def generate_booking_reference() -> str:
    return generate_reference("CX", 6)


def count_nights(check_in: datetime, check_out: datetime) -> int:
    return math.ceil((check_out - check_in).total_seconds() / SECONDS_PER_DAY)


def calculate_pricing(price_per_night: float, nights: int, room_count: int, commission_rate: float):
    total_amount = price_per_night * nights * room_count
    platform_fee = total_amount * commission_rate
    return total_amount, platform_fee


def booked_room_count(db: Session, hotel_id: str, room_type: str, check_in: datetime, check_out: datetime) -> int:
    # overlap: existing.check_in < new.check_out AND existing.check_out > new.check_in
    booked = (
        db.query(func.coalesce(func.sum(HotelBooking.room_count), 0))
        .filter(
            HotelBooking.hotel_id == hotel_id,
            HotelBooking.room_type == room_type,
            HotelBooking.status.in_(ACTIVE_BOOKING_STATUSES),
            HotelBooking.check_in_date < check_out,
            HotelBooking.check_out_date > check_in,
        )
        .scalar()
    )
    return int(booked or 0)


# ------------------ Add New Booking ------------------
async def add_booking_controller(db: Session, user_id: str, booking_data: Dict[str, Any]):
    check_in = booking_data["check_in_date"]
    check_out = booking_data["check_out_date"]
    if check_out <= check_in:
        raise ValidationFailed("Check-out date must be after check-in date")

    # row lock serialises concurrent bookings for the same hotel
    hotel = (
        db.query(Hotel)
        .filter(Hotel.id == booking_data["hotel_id"])
        .with_for_update()
        .first()
    )
    if not hotel:
        db.rollback()
        raise ValidationFailed("Hotel not found")

    room = hotel.find_room_type(booking_data["room_type"])
    if not room:
        db.rollback()
        raise ValidationFailed("Room type not found")

    available = int(room.get("available", 0)) - booked_room_count(
        db, hotel.id, booking_data["room_type"], check_in, check_out
    )
    if available < booking_data["room_count"]:
        db.rollback()
        raise ValidationFailed("Rooms not available for selected dates", "ROOMS_UNAVAILABLE")

    nights = count_nights(check_in, check_out)
    price_per_night = float(room["price"])
    total_amount, platform_fee = calculate_pricing(
        price_per_night, nights, booking_data["room_count"], hotel.commission_rate or 0.1
    )

    new_booking = HotelBooking(
        booking_reference=generate_booking_reference(),
        hotel_id=hotel.id,
        user_id=user_id,
        check_in_date=check_in,
        check_out_date=check_out,
        nights=nights,
        room_type=booking_data["room_type"],
        room_count=booking_data["room_count"],
        guest_count=booking_data["guest_count"],
        price_per_night=price_per_night,
        total_amount=total_amount,
        platform_fee=platform_fee,
        guest_name=booking_data["guest_name"],
        guest_email=booking_data["guest_email"],
        guest_phone=booking_data["guest_phone"],
        special_requests=booking_data.get("special_requests"),
        payment_status="pending",
        status="pending",
    )
    db.add(new_booking)
    db.commit()
    db.refresh(new_booking)
    logger.info("Booking %s created for hotel %s", new_booking.booking_reference, hotel.id)
    return new_booking


# ------------------ Retrieve Bookings ------------------
async def retrieve_user_bookings(db: Session, user_id: str):
    return (
        db.query(HotelBooking)
        .filter(HotelBooking.user_id == user_id)
        .order_by(HotelBooking.created_at.desc())
        .all()
    )


async def retrieve_booking_by_reference(db: Session, user_id: str, reference: str):
    booking = (
        db.query(HotelBooking)
        .filter(HotelBooking.booking_reference == reference, HotelBooking.user_id == user_id)
        .first()
    )
    if not booking:
        raise NotFound("Booking not found")
    return booking
