import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from carnival.controller.auth_controller import get_current_user
from carnival.controller.band_controller import (
    retrieve_bands_controller, retrieve_leaderboard_controller, vote_for_band_controller
)
from carnival.database import get_db
from carnival.errors import CarnivalError
from carnival.models.user_model import User
from carnival.response_model import ResponseModel, CarnivalErrorResponse, InternalErrorResponse
from carnival.schema.band_schema import BandOut, VoteResult
from carnival.schema.base import serialize

logger = logging.getLogger(__name__)

router = APIRouter()


# ----------------------- GET Bands -----------------------
@router.get("", response_description="Bands competing this year")
async def get_bands(db: Session = Depends(get_db)):
    try:
        bands = await retrieve_bands_controller(db)
        return ResponseModel({"bands": serialize(BandOut, bands)})
    except Exception:
        logger.exception("Error fetching bands")
        return InternalErrorResponse()


# ----------------------- GET Leaderboard -----------------------
@router.get("/leaderboard", response_description="Bands ranked by votes")
async def get_leaderboard(limit: int = 10, db: Session = Depends(get_db)):
    try:
        bands = await retrieve_leaderboard_controller(db, limit=limit)
        return ResponseModel({"bands": serialize(BandOut, bands)})
    except Exception:
        logger.exception("Error fetching leaderboard")
        return InternalErrorResponse()


# ----------------------- VOTE -----------------------
@router.post("/{band_id}/vote", response_description="Cast this year's vote")
async def vote(band_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        band = await vote_for_band_controller(db, user.id, band_id)
        return ResponseModel({"band": serialize(VoteResult, band)})
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error processing vote")
        db.rollback()
        return InternalErrorResponse()


__all__ = ["router"]
