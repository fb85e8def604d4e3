import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from carnival.controller.auth_controller import get_current_user
from carnival.controller.booking_controller import (
    add_booking_controller, retrieve_user_bookings, retrieve_booking_by_reference
)
from carnival.database import get_db
from carnival.errors import CarnivalError
from carnival.models.user_model import User
from carnival.response_model import PlainResponseModel, CarnivalErrorResponse, InternalErrorResponse
from carnival.schema.base import serialize
from carnival.schema.hotel_schema import BookingCreate, BookingOut

logger = logging.getLogger(__name__)

router = APIRouter()


# ----------------------- GET Bookings -----------------------
@router.get("", response_description="Caller's bookings, newest first")
async def get_bookings(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        bookings = await retrieve_user_bookings(db, user.id)
        return PlainResponseModel(serialize(BookingOut, bookings))
    except Exception:
        logger.exception("Error fetching bookings")
        return InternalErrorResponse()


# ----------------------- ADD Booking -----------------------
@router.post("", response_description="Reserve rooms at a hotel")
async def add_booking(payload: BookingCreate, user: User = Depends(get_current_user),
                      db: Session = Depends(get_db)):
    try:
        booking = await add_booking_controller(db, user.id, payload.model_dump())
        return PlainResponseModel(serialize(BookingOut, booking))
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error creating booking")
        db.rollback()
        return InternalErrorResponse()


# ----------------------- GET Booking -----------------------
@router.get("/{reference}", response_description="One of the caller's bookings")
async def get_booking(reference: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        booking = await retrieve_booking_by_reference(db, user.id, reference)
        return PlainResponseModel(serialize(BookingOut, booking))
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error fetching booking %s", reference)
        return InternalErrorResponse()


__all__ = ["router"]
