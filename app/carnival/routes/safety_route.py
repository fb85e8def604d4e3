import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from carnival.controller.auth_controller import get_current_user
from carnival.controller.lost_found_controller import retrieve_lost_found_controller, add_lost_found_controller
from carnival.controller.safety_controller import (
    create_emergency_alert, add_incident_controller, retrieve_incidents_controller,
    retrieve_incident_controller, update_incident_controller
)
from carnival.database import get_db
from carnival.errors import CarnivalError
from carnival.models.user_model import User
from carnival.response_model import ResponseModel, CarnivalErrorResponse, InternalErrorResponse
from carnival.schema.base import serialize
from carnival.schema.safety_schema import (
    EmergencyRequest, IncidentCreate, IncidentUpdate, IncidentOut, LostFoundCreate, LostFoundOut
)

logger = logging.getLogger(__name__)

router = APIRouter()


# ----------------------- Emergency -----------------------
@router.post("/emergency", response_description="Raise a critical emergency incident")
async def trigger_emergency(payload: Optional[EmergencyRequest] = None, user: User = Depends(get_current_user),
                            db: Session = Depends(get_db)):
    payload = payload or EmergencyRequest()
    try:
        incident = await create_emergency_alert(db, user.id, payload.latitude, payload.longitude)
        return ResponseModel({"incident": serialize(IncidentOut, incident)}, status.HTTP_201_CREATED)
    except Exception:
        logger.exception("Error creating emergency alert")
        db.rollback()
        return InternalErrorResponse()


# ----------------------- Incidents -----------------------
@router.get("/incidents", response_description="Caller's incident reports, newest first")
async def get_incidents(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        incidents = await retrieve_incidents_controller(db, user.id)
        return ResponseModel({"incidents": serialize(IncidentOut, incidents)})
    except Exception:
        logger.exception("Error fetching incidents")
        return InternalErrorResponse()


@router.post("/incidents", response_description="File an incident report")
async def add_incident(payload: IncidentCreate, user: User = Depends(get_current_user),
                       db: Session = Depends(get_db)):
    try:
        incident = await add_incident_controller(db, user.id, payload.model_dump())
        return ResponseModel({"incident": serialize(IncidentOut, incident)}, status.HTTP_201_CREATED)
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error creating incident")
        db.rollback()
        return InternalErrorResponse()


@router.get("/incidents/{incident_id}", response_description="One of the caller's incidents")
async def get_incident(incident_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        incident = await retrieve_incident_controller(db, user.id, incident_id)
        return ResponseModel({"incident": serialize(IncidentOut, incident)})
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error fetching incident %s", incident_id)
        return InternalErrorResponse()


@router.patch("/incidents/{incident_id}", response_description="Update status or resolution notes")
async def update_incident(incident_id: str, payload: IncidentUpdate, user: User = Depends(get_current_user),
                          db: Session = Depends(get_db)):
    try:
        incident = await update_incident_controller(
            db, user.id, incident_id, payload.model_dump(exclude_unset=True)
        )
        return ResponseModel({"incident": serialize(IncidentOut, incident)})
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error updating incident %s", incident_id)
        db.rollback()
        return InternalErrorResponse()


# ----------------------- Lost & Found -----------------------
@router.get("/lost-found", response_description="Lost and found board")
async def get_lost_found(item_type: Optional[str] = Query(None, alias="type"),
                         item_status: Optional[str] = Query(None, alias="status"),
                         user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        items = await retrieve_lost_found_controller(db, item_type, item_status)
        return ResponseModel({"items": serialize(LostFoundOut, items)})
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error fetching lost and found items")
        return InternalErrorResponse()


@router.post("/lost-found", response_description="Report a lost or found item")
async def add_lost_found(payload: LostFoundCreate, user: User = Depends(get_current_user),
                         db: Session = Depends(get_db)):
    try:
        item = await add_lost_found_controller(db, user.id, payload.model_dump())
        return ResponseModel({"item": serialize(LostFoundOut, item)}, status.HTTP_201_CREATED)
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error reporting lost and found item")
        db.rollback()
        return InternalErrorResponse()


__all__ = ["router"]
