import json
import logging
from typing import Optional

from sqlalchemy.orm import Session

from carnival.controller.booking_controller import generate_reference
from carnival.controller.payment_gateway import PaymentGateway, convert_to_kobo
from carnival.database import utcnow
from carnival.errors import Forbidden, NotFound, Unauthorized, UpstreamError, ValidationFailed
from carnival.models.hotel_model import Hotel, HotelBooking
from carnival.models.user_model import User

logger = logging.getLogger(__name__)


def generate_payment_reference() -> str:
    return generate_reference("PAY", 8)


# ------------------ Initialize Payment ------------------
async def initialize_payment_controller(db: Session, gateway: PaymentGateway, user: User, booking_reference: str):
    if not booking_reference:
        raise ValidationFailed("Booking reference required")

    booking = db.query(HotelBooking).filter(HotelBooking.booking_reference == booking_reference).first()
    if not booking:
        raise NotFound("Booking not found")
    if booking.user_id != user.id:
        raise Forbidden("Booking belongs to another user")
    if booking.payment_status == "paid":
        raise ValidationFailed("Booking already paid", "ALREADY_PAID")

    hotel = db.query(Hotel).filter(Hotel.id == booking.hotel_id).first()
    if not hotel:
        raise NotFound("Hotel not found")

    payment_reference = generate_payment_reference()
    result = await gateway.initialize(
        email=booking.guest_email,
        amount=convert_to_kobo(booking.total_amount),
        reference=payment_reference,
        metadata={
            "booking_reference": booking.booking_reference,
            "hotel_id": booking.hotel_id,
            "user_id": user.id,
            "check_in": booking.check_in_date.isoformat(),
            "check_out": booking.check_out_date.isoformat(),
        },
        subaccount=hotel.paystack_subaccount_code,
        transaction_charge=convert_to_kobo(booking.platform_fee),
    )
    if not result.success:
        raise UpstreamError(result.error or "Payment initialization failed", "PAYMENT_INIT_FAILED")

    booking.payment_reference = payment_reference
    db.commit()
    logger.info("Payment %s initialized for booking %s", payment_reference, booking.booking_reference)
    return {"authorizationUrl": result.authorization_url, "reference": payment_reference}


# ------------------ Mark Paid ------------------
async def mark_booking_paid(db: Session, payment_reference: str, channel: Optional[str]):
    booking = db.query(HotelBooking).filter(HotelBooking.payment_reference == payment_reference).first()
    if not booking:
        return None
    booking.payment_status = "paid"
    booking.status = "confirmed"
    booking.paid_at = utcnow()
    booking.payment_method = channel
    db.commit()
    db.refresh(booking)
    logger.info("Booking %s marked paid", booking.booking_reference)
    return booking


# ------------------ Verify (redirect flow) ------------------
async def verify_payment_controller(db: Session, gateway: PaymentGateway, reference: Optional[str]) -> str:
    """Returns the query string for the bookings page redirect."""
    if not reference:
        return "error=missing_reference"

    result = await gateway.verify(reference)
    if not result.success:
        logger.warning("Payment %s failed verification: %s", reference, result.error)
        return "error=payment_failed"

    booking = await mark_booking_paid(db, reference, result.channel)
    if not booking:
        logger.error("No booking carries payment reference %s", reference)
        return "error=update_failed"
    return f"success=true&booking={booking.booking_reference}"


# ------------------ Webhook ------------------
async def handle_webhook_controller(db: Session, gateway: PaymentGateway, raw_body: bytes, signature: Optional[str]):
    if not gateway.verify_signature(raw_body, signature):
        logger.warning("Rejected webhook with bad signature")
        raise Unauthorized("Invalid signature", "INVALID_SIGNATURE")

    try:
        payload = json.loads(raw_body or b"{}")
    except ValueError:
        raise ValidationFailed("Invalid webhook payload")
    if not isinstance(payload, dict):
        raise ValidationFailed("Invalid webhook payload")

    if payload.get("event") == "charge.success":
        data = payload.get("data")
        if not isinstance(data, dict):
            raise ValidationFailed("Invalid webhook payload")
        reference = data.get("reference")
        if reference:
            await mark_booking_paid(db, reference, data.get("channel"))
    return {"received": True}
