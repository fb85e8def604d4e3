import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from carnival import config
from carnival.controller.auth_controller import (
    register_user, login_user, start_session, end_session, extract_token, get_current_user, get_profile
)
from carnival.database import get_db
from carnival.errors import CarnivalError
from carnival.models.user_model import User
from carnival.response_model import ResponseModel, CarnivalErrorResponse, InternalErrorResponse
from carnival.schema.auth_schema import RegisterRequest, LoginRequest, UserOut
from carnival.schema.base import serialize
from carnival.schema.profile_schema import ProfileOut

logger = logging.getLogger(__name__)

router = APIRouter()


def _session_response(db: Session, user: User, auth_session, status_code=status.HTTP_200_OK):
    response = ResponseModel(
        {
            "user": serialize(UserOut, user),
            "profile": serialize(ProfileOut, get_profile(db, user)),
            "token": auth_session.token,
            "expiresAt": auth_session.expires_at,
        },
        status_code,
    )
    response.set_cookie(
        config.SESSION_COOKIE_NAME,
        auth_session.token,
        max_age=config.SESSION_TTL_HOURS * 3600,
        httponly=True,
        samesite="lax",
    )
    return response


# ----------------------- REGISTER -----------------------
@router.post("/register", response_description="Create an account and start a session")
async def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    try:
        user = await register_user(db, payload.email, payload.password, payload.full_name)
        auth_session = await start_session(db, user)
        return _session_response(db, user, auth_session, status.HTTP_201_CREATED)
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error registering user")
        db.rollback()
        return InternalErrorResponse()


# ----------------------- LOGIN -----------------------
@router.post("/login", response_description="Start a session")
async def login(payload: LoginRequest, db: Session = Depends(get_db)):
    try:
        user = await login_user(db, payload.email, payload.password)
        auth_session = await start_session(db, user)
        return _session_response(db, user, auth_session)
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error logging in")
        db.rollback()
        return InternalErrorResponse()


# ----------------------- LOGOUT -----------------------
@router.post("/logout", response_description="End the current session")
async def logout(request: Request, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        await end_session(db, extract_token(request))
        response = ResponseModel({})
        response.delete_cookie(config.SESSION_COOKIE_NAME)
        return response
    except Exception:
        logger.exception("Error logging out")
        db.rollback()
        return InternalErrorResponse()


# ----------------------- ME -----------------------
@router.get("/me", response_description="Current user")
async def me(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        return ResponseModel({
            "user": serialize(UserOut, user),
            "profile": serialize(ProfileOut, get_profile(db, user)),
        })
    except Exception:
        logger.exception("Error loading current user")
        db.rollback()
        return InternalErrorResponse()


__all__ = ["router"]
