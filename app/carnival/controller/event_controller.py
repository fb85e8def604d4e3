import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from carnival.errors import NotFound, ValidationFailed
from carnival.models.event_model import Event, SavedEvent, EVENT_CATEGORIES

logger = logging.getLogger(__name__)


# ------------------ Retrieve Events ------------------
async def retrieve_events_controller(
    db: Session,
    category: Optional[str] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    featured: Optional[bool] = None,
    trending: Optional[bool] = None,
    search: Optional[str] = None,
    limit: int = 20,
    offset: int = 0,
):
    if category and category not in EVENT_CATEGORIES:
        raise ValidationFailed(f"Invalid category '{category}'")

    query = db.query(Event).filter(Event.status == "upcoming")
    if category:
        query = query.filter(Event.category == category)
    if start_date:
        query = query.filter(Event.start_time >= start_date)
    if end_date:
        query = query.filter(Event.end_time <= end_date)
    if featured is not None:
        query = query.filter(Event.is_featured == featured)
    if trending is not None:
        query = query.filter(Event.is_trending == trending)
    if search:
        search_pattern = f"%{search}%"
        query = query.filter(or_(Event.name.ilike(search_pattern), Event.description.ilike(search_pattern)))

    return query.order_by(Event.start_time.asc()).offset(offset).limit(limit).all()


async def retrieve_event_by_slug(db: Session, slug: str):
    event = db.query(Event).filter(Event.slug == slug).first()
    if not event:
        raise NotFound("Event not found")
    return event


# ------------------ Save / Unsave ------------------
async def save_event_controller(db: Session, user_id: str, event_id: str):
    event = db.query(Event).filter(Event.id == event_id).first()
    if not event:
        raise NotFound("Event not found")

    db.add(SavedEvent(user_id=user_id, event_id=event_id))
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        raise ValidationFailed("Event already saved", "ALREADY_SAVED")

    db.query(Event).filter(Event.id == event_id).update(
        {Event.save_count: Event.save_count + 1}, synchronize_session=False
    )
    db.commit()


async def unsave_event_controller(db: Session, user_id: str, event_id: str):
    deleted = (
        db.query(SavedEvent)
        .filter(SavedEvent.user_id == user_id, SavedEvent.event_id == event_id)
        .delete(synchronize_session=False)
    )
    if not deleted:
        raise NotFound("Saved event not found")

    db.query(Event).filter(Event.id == event_id, Event.save_count > 0).update(
        {Event.save_count: Event.save_count - 1}, synchronize_session=False
    )
    db.commit()


async def retrieve_saved_events(db: Session, user_id: str):
    return (
        db.query(Event)
        .join(SavedEvent, SavedEvent.event_id == Event.id)
        .filter(SavedEvent.user_id == user_id)
        .order_by(SavedEvent.created_at.desc())
        .all()
    )
