import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from carnival.controller.auth_controller import get_current_user
from carnival.controller.location_share_controller import (
    add_location_share_controller, retrieve_active_shares_controller, view_location_share_controller,
    update_location_share_controller
)
from carnival.database import get_db
from carnival.errors import CarnivalError
from carnival.models.user_model import User
from carnival.response_model import ResponseModel, CarnivalErrorResponse, InternalErrorResponse
from carnival.schema.base import serialize
from carnival.schema.safety_schema import LocationShareCreate, LocationUpdate, LocationShareOut

logger = logging.getLogger(__name__)

router = APIRouter()


# ----------------------- Location Shares -----------------------
@router.get("", response_description="Caller's unexpired location shares")
async def get_location_shares(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        shares = await retrieve_active_shares_controller(db, user.id)
        return ResponseModel({"shares": serialize(LocationShareOut, shares)})
    except Exception:
        logger.exception("Error fetching location shares")
        return InternalErrorResponse()


@router.post("", response_description="Start sharing a location")
async def add_location_share(payload: LocationShareCreate, user: User = Depends(get_current_user),
                             db: Session = Depends(get_db)):
    try:
        share = await add_location_share_controller(db, user.id, payload.model_dump())
        return ResponseModel({"share": serialize(LocationShareOut, share)}, status.HTTP_201_CREATED)
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error creating location share")
        db.rollback()
        return InternalErrorResponse()


# ----------------------- Share Code -----------------------
@router.get("/{code}", response_description="Public view of a shared location")
async def view_location_share(code: str, db: Session = Depends(get_db)):
    try:
        share = await view_location_share_controller(db, code)
        return ResponseModel({"share": serialize(LocationShareOut, share)})
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error viewing location share %s", code)
        db.rollback()
        return InternalErrorResponse()


@router.patch("/{code}", response_description="Owner pushes a new position")
async def update_location_share(code: str, payload: LocationUpdate, user: User = Depends(get_current_user),
                                db: Session = Depends(get_db)):
    try:
        share = await update_location_share_controller(db, user.id, code, payload.latitude, payload.longitude)
        return ResponseModel({"share": serialize(LocationShareOut, share)})
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error updating location share %s", code)
        db.rollback()
        return InternalErrorResponse()


__all__ = ["router"]
