import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from carnival import config
from carnival.controller.auth_controller import get_current_user
from carnival.controller.payment_controller import (
    initialize_payment_controller, verify_payment_controller, handle_webhook_controller
)
from carnival.database import get_db
from carnival.errors import CarnivalError
from carnival.models.user_model import User
from carnival.response_model import (
    PlainResponseModel, ErrorResponseModel, CarnivalErrorResponse, InternalErrorResponse
)
from carnival.schema.hotel_schema import PaymentInitialize

logger = logging.getLogger(__name__)

router = APIRouter()

BOOKINGS_PAGE = "/hotels/bookings"


def get_payment_gateway(request: Request):
    return request.app.state.payment_gateway


def bookings_redirect(query: str):
    return RedirectResponse(f"{config.APP_URL}{BOOKINGS_PAGE}?{query}", status_code=302)


# ----------------------- INITIALIZE Payment -----------------------
@router.post("/initialize", response_description="Start checkout for a booking")
async def initialize_payment(payload: PaymentInitialize, user: User = Depends(get_current_user),
                             gateway=Depends(get_payment_gateway), db: Session = Depends(get_db)):
    try:
        result = await initialize_payment_controller(db, gateway, user, payload.booking_reference)
        return PlainResponseModel(result)
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Payment initialization error")
        db.rollback()
        return InternalErrorResponse()


# ----------------------- VERIFY (redirect) -----------------------
@router.get("/verify", response_description="Gateway callback; redirects to the bookings page")
async def verify_payment(reference: Optional[str] = None, gateway=Depends(get_payment_gateway),
                         db: Session = Depends(get_db)):
    try:
        query = await verify_payment_controller(db, gateway, reference)
    except Exception:
        logger.exception("Payment verification error")
        db.rollback()
        query = "error=verification_failed"
    return bookings_redirect(query)


# ----------------------- VERIFY (webhook) -----------------------
@router.post("/verify", response_description="Signed gateway webhook")
async def payment_webhook(request: Request, gateway=Depends(get_payment_gateway), db: Session = Depends(get_db)):
    try:
        raw_body = await request.body()
        result = await handle_webhook_controller(
            db, gateway, raw_body, request.headers.get("x-paystack-signature")
        )
        return PlainResponseModel(result)
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Webhook error")
        db.rollback()
        return ErrorResponseModel("Webhook processing failed", 500)


__all__ = ["router"]
