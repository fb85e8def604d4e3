import logging
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from carnival.controller.auth_controller import get_current_user
from carnival.controller.concierge_controller import (
    retrieve_sessions_controller, add_session_controller, retrieve_session_controller,
    update_session_controller, retrieve_messages_controller, add_message_controller
)
from carnival.database import get_db
from carnival.errors import CarnivalError
from carnival.models.user_model import User
from carnival.response_model import ResponseModel, CarnivalErrorResponse, InternalErrorResponse
from carnival.schema.base import serialize
from carnival.schema.concierge_schema import (
    SessionCreate, SessionUpdate, MessageCreate, ChatSessionOut, ChatMessageOut
)

logger = logging.getLogger(__name__)

router = APIRouter()


def session_with_count(chat_session, message_count):
    data = serialize(ChatSessionOut, chat_session)
    data["messageCount"] = message_count
    return data


# ----------------------- Sessions -----------------------
@router.get("", response_description="Caller's concierge sessions, most recent first")
async def get_sessions(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        rows = await retrieve_sessions_controller(db, user.id)
        return ResponseModel({"sessions": [session_with_count(s, count) for s, count in rows]})
    except Exception:
        logger.exception("Error fetching concierge sessions")
        return InternalErrorResponse()


@router.post("", response_description="Open a concierge session")
async def add_session(payload: Optional[SessionCreate] = None, user: User = Depends(get_current_user),
                      db: Session = Depends(get_db)):
    try:
        title = payload.title if payload else None
        chat_session = await add_session_controller(db, user.id, title)
        return ResponseModel({"session": session_with_count(chat_session, 0)}, status.HTTP_201_CREATED)
    except Exception:
        logger.exception("Error creating concierge session")
        db.rollback()
        return InternalErrorResponse()


@router.get("/{session_id}", response_description="Session with its messages; 'latest' for the newest active one")
async def get_session(session_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        chat_session = await retrieve_session_controller(db, user.id, session_id)
        messages = serialize(ChatMessageOut, list(chat_session.messages))
        return ResponseModel({
            "session": session_with_count(chat_session, len(messages)),
            "messages": messages,
        })
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error fetching concierge session %s", session_id)
        return InternalErrorResponse()


@router.patch("/{session_id}", response_description="Rename or close a session")
async def update_session(session_id: str, payload: SessionUpdate, user: User = Depends(get_current_user),
                         db: Session = Depends(get_db)):
    try:
        chat_session = await update_session_controller(
            db, user.id, session_id, payload.model_dump(exclude_unset=True)
        )
        return ResponseModel({"session": serialize(ChatSessionOut, chat_session)})
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error updating concierge session %s", session_id)
        db.rollback()
        return InternalErrorResponse()


# ----------------------- Messages -----------------------
@router.get("/{session_id}/messages", response_description="Messages in chronological order")
async def get_messages(session_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        messages = await retrieve_messages_controller(db, user.id, session_id)
        return ResponseModel({"messages": serialize(ChatMessageOut, messages)})
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error fetching messages for session %s", session_id)
        return InternalErrorResponse()


@router.post("/{session_id}/messages", response_description="Append a message to a session")
async def add_message(session_id: str, payload: MessageCreate, user: User = Depends(get_current_user),
                      db: Session = Depends(get_db)):
    try:
        message = await add_message_controller(db, user.id, session_id, payload.role, payload.content)
        return ResponseModel({"message": serialize(ChatMessageOut, message)}, status.HTTP_201_CREATED)
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error adding message to session %s", session_id)
        db.rollback()
        return InternalErrorResponse()


__all__ = ["router"]
