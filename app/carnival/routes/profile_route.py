import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from carnival.controller.auth_controller import get_current_user
from carnival.controller.profile_controller import (
    retrieve_profile, update_profile, retrieve_language, update_language
)
from carnival.database import get_db
from carnival.errors import CarnivalError
from carnival.models.user_model import User
from carnival.response_model import (
    ResponseModel, PlainResponseModel, CarnivalErrorResponse, InternalErrorResponse
)
from carnival.schema.base import serialize
from carnival.schema.profile_schema import ProfileOut, ProfileUpdate, LanguageUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


# ----------------------- GET Profile -----------------------
@router.get("/{user_id}", response_description="Caller's own profile")
async def get_profile_data(user_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        profile = await retrieve_profile(db, user, user_id)
        return PlainResponseModel(serialize(ProfileOut, profile))
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error fetching profile")
        return InternalErrorResponse()


# ----------------------- UPDATE Profile -----------------------
@router.patch("/{user_id}", response_description="Update the caller's profile")
async def update_profile_data(user_id: str, payload: ProfileUpdate, user: User = Depends(get_current_user),
                              db: Session = Depends(get_db)):
    try:
        profile = await update_profile(db, user, user_id, payload.model_dump(exclude_unset=True))
        return ResponseModel({"profile": serialize(ProfileOut, profile)})
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error updating profile")
        db.rollback()
        return InternalErrorResponse()


# ----------------------- Language Preference -----------------------
@router.get("/{user_id}/language", response_description="Caller's language preference")
async def get_language(user_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        language = await retrieve_language(db, user, user_id)
        return ResponseModel({"language": language})
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error fetching language preference")
        return InternalErrorResponse()


@router.put("/{user_id}/language", response_description="Set the caller's language preference")
async def set_language(user_id: str, payload: LanguageUpdate, user: User = Depends(get_current_user),
                       db: Session = Depends(get_db)):
    try:
        language = await update_language(db, user, user_id, payload.language)
        return ResponseModel({"language": language})
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error updating language preference")
        db.rollback()
        return InternalErrorResponse()


__all__ = ["router"]
