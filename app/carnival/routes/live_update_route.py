import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status
from sqlalchemy.orm import Session

from carnival.controller.auth_controller import get_current_user
from carnival.controller.live_update_controller import (
    retrieve_live_updates_controller, add_live_update_controller
)
from carnival.controller.ws_manager import live_update_manager
from carnival.database import get_db
from carnival.errors import CarnivalError
from carnival.models.user_model import User
from carnival.response_model import ResponseModel, CarnivalErrorResponse, InternalErrorResponse
from carnival.schema.base import serialize
from carnival.schema.live_update_schema import LiveUpdateCreate, LiveUpdateOut

logger = logging.getLogger(__name__)

router = APIRouter()


# ----------------------- GET Live Updates -----------------------
@router.get("", response_description="Pinned first, then newest")
async def get_live_updates(limit: int = 50, db: Session = Depends(get_db)):
    try:
        updates = await retrieve_live_updates_controller(db, limit)
        return ResponseModel({"updates": serialize(LiveUpdateOut, updates)})
    except Exception:
        logger.exception("Error fetching live updates")
        return InternalErrorResponse()


# ----------------------- ADD Live Update -----------------------
@router.post("", response_description="Post a live update (admin only)")
async def add_live_update(payload: LiveUpdateCreate, user: User = Depends(get_current_user),
                          db: Session = Depends(get_db)):
    try:
        update = await add_live_update_controller(db, user, payload.model_dump())
        return ResponseModel({"update": serialize(LiveUpdateOut, update)}, status.HTTP_201_CREATED)
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error creating live update")
        db.rollback()
        return InternalErrorResponse()


# ----------------------- WebSocket -----------------------
@router.websocket("/ws")
async def live_updates_socket(websocket: WebSocket):
    await live_update_manager.connect(websocket)
    try:
        while True:
            # clients only listen; incoming frames are ignored
            await websocket.receive_text()
    except WebSocketDisconnect:
        live_update_manager.disconnect(websocket)


__all__ = ["router"]
