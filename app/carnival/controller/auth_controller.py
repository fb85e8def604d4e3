import logging
from datetime import timedelta
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from carnival import config
from carnival.cryptography import encrypt_password, verify_password, generate_session_token
from carnival.database import get_db, utcnow
from carnival.errors import Conflict, Unauthorized
from carnival.models.user_model import User, AuthSession, UserProfile

logger = logging.getLogger(__name__)


# ------------------ Register ------------------
async def register_user(db: Session, email: str, password: str, full_name: Optional[str] = None):
    email = email.strip().lower()
    if db.query(User).filter(User.email == email).first():
        raise Conflict(f"User with email {email} exists!", "EMAIL_EXISTS")

    user = User(email=email, password=encrypt_password(password))
    db.add(user)
    db.flush()
    # default profile; column defaults fill the preference blobs
    db.add(UserProfile(id=user.id, full_name=full_name, role="user", language_preference="en"))
    db.commit()
    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


# ------------------ Login ------------------
async def login_user(db: Session, email: str, password: str):
    user = db.query(User).filter(User.email == email.strip().lower()).first()
    if not user or not verify_password(password, user.password):
        raise Unauthorized("Invalid email or password")
    return user


async def start_session(db: Session, user: User):
    auth_session = AuthSession(
        user_id=user.id,
        token=generate_session_token(),
        expires_at=utcnow() + timedelta(hours=config.SESSION_TTL_HOURS),
    )
    db.add(auth_session)
    db.commit()
    db.refresh(auth_session)
    return auth_session


async def end_session(db: Session, token: str):
    db.query(AuthSession).filter(AuthSession.token == token).delete()
    db.commit()


# ------------------ Session lookup ------------------
def extract_token(request: Request) -> Optional[str]:
    token = request.cookies.get(config.SESSION_COOKIE_NAME)
    if token:
        return token
    header = request.headers.get("authorization", "")
    if header.lower().startswith("bearer "):
        return header[7:].strip() or None
    return None


def resolve_user(db: Session, token: Optional[str]) -> Optional[User]:
    if not token:
        return None
    auth_session = db.query(AuthSession).filter(AuthSession.token == token).first()
    if not auth_session:
        return None
    if auth_session.expires_at < utcnow():
        db.delete(auth_session)
        db.commit()
        return None
    return auth_session.user


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    user = resolve_user(db, extract_token(request))
    if not user:
        raise Unauthorized()
    return user


def get_profile(db: Session, user: User) -> UserProfile:
    profile = db.query(UserProfile).filter(UserProfile.id == user.id).first()
    if not profile:
        # accounts created outside /register get the defaults on first use
        profile = UserProfile(id=user.id, role="user", language_preference="en")
        db.add(profile)
        db.commit()
        db.refresh(profile)
    return profile
