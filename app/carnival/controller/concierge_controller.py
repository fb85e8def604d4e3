from sqlalchemy import func
from sqlalchemy.orm import Session

from carnival.database import utcnow
from carnival.errors import NotFound, ValidationFailed
from carnival.models.chat_model import ChatSession, ChatMessage, MESSAGE_ROLES

LATEST_SESSION_ALIAS = "latest"


# ------------------ Sessions ------------------
async def retrieve_sessions_controller(db: Session, user_id: str):
    """Caller's sessions, most recently active first, each with its message count."""
    counts = (
        db.query(ChatMessage.session_id, func.count(ChatMessage.id).label("message_count"))
        .group_by(ChatMessage.session_id)
        .subquery()
    )
    rows = (
        db.query(ChatSession, func.coalesce(counts.c.message_count, 0))
        .outerjoin(counts, counts.c.session_id == ChatSession.id)
        .filter(ChatSession.user_id == user_id)
        .order_by(ChatSession.updated_at.desc())
        .all()
    )
    return [(chat_session, int(count)) for chat_session, count in rows]


async def add_session_controller(db: Session, user_id: str, title=None):
    chat_session = ChatSession(user_id=user_id, title=title or None, is_active=True)
    db.add(chat_session)
    db.commit()
    db.refresh(chat_session)
    return chat_session


async def retrieve_session_controller(db: Session, user_id: str, session_id: str):
    if session_id == LATEST_SESSION_ALIAS:
        chat_session = (
            db.query(ChatSession)
            .filter(ChatSession.user_id == user_id, ChatSession.is_active.is_(True))
            .order_by(ChatSession.updated_at.desc())
            .first()
        )
        if not chat_session:
            raise NotFound("No active session found")
        return chat_session

    chat_session = (
        db.query(ChatSession)
        .filter(ChatSession.id == session_id, ChatSession.user_id == user_id)
        .first()
    )
    if not chat_session:
        raise NotFound("Session not found")
    return chat_session


async def update_session_controller(db: Session, user_id: str, session_id: str, update_data: dict):
    chat_session = (
        db.query(ChatSession)
        .filter(ChatSession.id == session_id, ChatSession.user_id == user_id)
        .first()
    )
    if not chat_session:
        raise NotFound("Session not found")

    if "title" in update_data:
        chat_session.title = update_data["title"]
    if update_data.get("is_active") is not None:
        chat_session.is_active = update_data["is_active"]
    chat_session.updated_at = utcnow()
    db.commit()
    db.refresh(chat_session)
    return chat_session


# ------------------ Messages ------------------
async def retrieve_messages_controller(db: Session, user_id: str, session_id: str):
    chat_session = (
        db.query(ChatSession)
        .filter(ChatSession.id == session_id, ChatSession.user_id == user_id)
        .first()
    )
    if not chat_session:
        raise NotFound("Session not found")
    return list(chat_session.messages)


async def add_message_controller(db: Session, user_id: str, session_id: str, role: str, content: str):
    if not role or not content:
        raise ValidationFailed("Role and content are required")
    if role not in MESSAGE_ROLES:
        raise ValidationFailed("Invalid role. Must be user, assistant, or system")

    chat_session = (
        db.query(ChatSession)
        .filter(ChatSession.id == session_id, ChatSession.user_id == user_id)
        .first()
    )
    if not chat_session:
        raise NotFound("Session not found")

    message = ChatMessage(session_id=chat_session.id, role=role, content=content)
    db.add(message)
    chat_session.updated_at = utcnow()
    db.commit()
    db.refresh(message)
    return message
