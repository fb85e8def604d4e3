import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from carnival.database import utcnow
from carnival.errors import Conflict, NotFound
from carnival.models.band_model import Band, BandVote

logger = logging.getLogger(__name__)

DUPLICATE_VOTE_MESSAGE = "You have already voted this year"


def current_year() -> int:
    return utcnow().year


# ------------------ Retrieve Bands ------------------
async def retrieve_bands_controller(db: Session, year: Optional[int] = None):
    year = year or current_year()
    return db.query(Band).filter(Band.year == year).order_by(Band.name.asc()).all()


async def retrieve_leaderboard_controller(db: Session, year: Optional[int] = None, limit: int = 10):
    year = year or current_year()
    return (
        db.query(Band)
        .filter(Band.year == year)
        .order_by(Band.vote_count.desc(), Band.name.asc())
        .limit(limit)
        .all()
    )


def has_voted(db: Session, user_id: str, year: int) -> bool:
    return db.query(BandVote.id).filter(BandVote.user_id == user_id, BandVote.year == year).first() is not None


# ------------------ Vote ------------------
async def vote_for_band_controller(db: Session, user_id: str, band_id: str):
    year = current_year()
    band = db.query(Band).filter(Band.id == band_id, Band.year == year).first()
    if not band:
        raise NotFound("Band not found")

    # fast path for the common case; the unique index is what guarantees it
    if has_voted(db, user_id, year):
        raise Conflict(DUPLICATE_VOTE_MESSAGE, "ALREADY_VOTED")

    db.add(BandVote(band_id=band_id, user_id=user_id, year=year))
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        raise Conflict(DUPLICATE_VOTE_MESSAGE, "ALREADY_VOTED")

    db.query(Band).filter(Band.id == band_id).update(
        {Band.vote_count: Band.vote_count + 1}, synchronize_session=False
    )
    db.commit()
    db.refresh(band)
    logger.info("User %s voted for band %s", user_id, band_id)
    return band
