import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from carnival.controller.auth_controller import get_current_user
from carnival.controller.event_controller import (
    retrieve_events_controller, retrieve_event_by_slug,
    save_event_controller, unsave_event_controller, retrieve_saved_events
)
from carnival.database import get_db
from carnival.errors import CarnivalError
from carnival.models.user_model import User
from carnival.response_model import ResponseModel, PlainResponseModel, CarnivalErrorResponse, InternalErrorResponse
from carnival.schema.base import serialize, as_naive_utc
from carnival.schema.event_schema import EventOut

logger = logging.getLogger(__name__)

router = APIRouter()


# ----------------------- GET ALL Events -----------------------
@router.get("", response_description="Upcoming events, soonest first")
async def get_events(
    category: Optional[str] = None,
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    featured: Optional[str] = None,
    trending: Optional[str] = None,
    search: Optional[str] = None,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    try:
        events = await retrieve_events_controller(
            db,
            category=category,
            start_date=as_naive_utc(start_date),
            end_date=as_naive_utc(end_date),
            # only "true" narrows the list
            featured=True if featured == "true" else None,
            trending=True if trending == "true" else None,
            search=search,
            limit=limit,
            offset=offset,
        )
        return PlainResponseModel(serialize(EventOut, events))
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error fetching events")
        return InternalErrorResponse()


# ----------------------- GET Saved Events -----------------------
@router.get("/saved", response_description="Events the caller saved")
async def get_saved_events(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        events = await retrieve_saved_events(db, user.id)
        return PlainResponseModel(serialize(EventOut, events))
    except Exception:
        logger.exception("Error fetching saved events")
        return InternalErrorResponse()


# ----------------------- SEARCH Event -----------------------
@router.get("/{slug}", response_description="Event by slug")
async def get_event(slug: str, db: Session = Depends(get_db)):
    try:
        event = await retrieve_event_by_slug(db, slug)
        return PlainResponseModel(serialize(EventOut, event))
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error fetching event %s", slug)
        return InternalErrorResponse()


# ----------------------- SAVE / UNSAVE Event -----------------------
@router.post("/{event_id}/save", response_description="Save an event")
async def save_event(event_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        await save_event_controller(db, user.id, event_id)
        return ResponseModel({})
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error saving event %s", event_id)
        db.rollback()
        return InternalErrorResponse()


@router.post("/{event_id}/unsave", response_description="Remove a saved event")
async def unsave_event(event_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        await unsave_event_controller(db, user.id, event_id)
        return ResponseModel({})
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error unsaving event %s", event_id)
        db.rollback()
        return InternalErrorResponse()


__all__ = ["router"]
