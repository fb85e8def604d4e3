import logging
import secrets
import string
from datetime import timedelta

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from carnival.database import utcnow
from carnival.errors import CarnivalError, NotFound
from carnival.models.safety_model import LocationShare

logger = logging.getLogger(__name__)

SHARE_CODE_LENGTH = 8
SHARE_CODE_ATTEMPTS = 5
# URL-safe alphabet: A-Z a-z 0-9 _ -
URL_SAFE_ALPHABET = string.ascii_letters + string.digits + "_-"


def generate_share_code() -> str:
    return "".join(secrets.choice(URL_SAFE_ALPHABET) for _ in range(SHARE_CODE_LENGTH)).upper()


def _code_in_use(db: Session, code: str) -> bool:
    return db.query(LocationShare.id).filter(
        LocationShare.share_code == code,
        LocationShare.expires_at > utcnow(),
    ).first() is not None


def unique_share_code(db: Session) -> str:
    for _ in range(SHARE_CODE_ATTEMPTS):
        code = generate_share_code()
        if not _code_in_use(db, code):
            return code
    raise CarnivalError("Could not allocate a share code", "SHARE_CODE_EXHAUSTED")


def _history_point(lat, lng):
    return {"lat": lat, "lng": lng, "timestamp": utcnow().isoformat()}


# ------------------ Create Share ------------------
async def add_location_share_controller(db: Session, user_id: str, share_data: dict):
    latitude = share_data["latitude"]
    longitude = share_data["longitude"]
    expires_in = share_data.get("expires_in_minutes", 60)

    for _ in range(SHARE_CODE_ATTEMPTS):
        share = LocationShare(
            user_id=user_id,
            share_code=unique_share_code(db),
            current_lat=latitude,
            current_lng=longitude,
            location_history=[_history_point(latitude, longitude)],
            name=share_data.get("name") or None,
            expires_at=utcnow() + timedelta(minutes=expires_in),
            is_public=bool(share_data.get("is_public")),
            view_count=0,
        )
        db.add(share)
        try:
            db.commit()
        except IntegrityError:
            # the code belongs to an expired share; the unique index still holds it
            db.rollback()
            logger.info("Share code collision, retrying")
            continue
        db.refresh(share)
        return share
    raise CarnivalError("Could not allocate a share code", "SHARE_CODE_EXHAUSTED")


async def retrieve_active_shares_controller(db: Session, user_id: str):
    return (
        db.query(LocationShare)
        .filter(LocationShare.user_id == user_id, LocationShare.expires_at > utcnow())
        .order_by(LocationShare.created_at.desc())
        .all()
    )


# ------------------ View Share (public) ------------------
async def view_location_share_controller(db: Session, code: str):
    share = db.query(LocationShare).filter(LocationShare.share_code == code.upper()).first()
    if not share:
        raise NotFound("Location share not found")
    if share.expires_at < utcnow():
        raise NotFound("Location share has expired", "SHARE_EXPIRED")

    db.query(LocationShare).filter(LocationShare.id == share.id).update(
        {LocationShare.view_count: LocationShare.view_count + 1}, synchronize_session=False
    )
    db.commit()
    db.refresh(share)
    return share


# ------------------ Update Position ------------------
async def update_location_share_controller(db: Session, user_id: str, code: str, latitude: float,
                                           longitude: float):
    share = (
        db.query(LocationShare)
        .filter(LocationShare.share_code == code.upper(), LocationShare.user_id == user_id)
        .first()
    )
    if not share:
        raise NotFound("Location share not found or not owned by user")
    if share.expires_at < utcnow():
        raise NotFound("Location share has expired", "SHARE_EXPIRED")

    # reassign so the JSON column registers the change
    share.location_history = list(share.location_history or []) + [_history_point(latitude, longitude)]
    share.current_lat = latitude
    share.current_lng = longitude
    share.last_updated = utcnow()
    db.commit()
    db.refresh(share)
    return share
