from fastapi.encoders import jsonable_encoder
from sqlalchemy.orm import Session

from carnival.controller.auth_controller import get_profile
from carnival.controller.ws_manager import live_update_manager
from carnival.errors import Forbidden, ValidationFailed
from carnival.models.live_update_model import LiveUpdate
from carnival.models.user_model import User
from carnival.schema.base import serialize
from carnival.schema.live_update_schema import LiveUpdateOut


# ------------------ Retrieve Live Updates ------------------
async def retrieve_live_updates_controller(db: Session, limit: int = 50):
    return (
        db.query(LiveUpdate)
        .order_by(LiveUpdate.is_pinned.desc(), LiveUpdate.created_at.desc())
        .limit(limit)
        .all()
    )


# ------------------ Add Live Update ------------------
async def add_live_update_controller(db: Session, user: User, update_data: dict):
    profile = get_profile(db, user)
    if profile.role != "admin":
        raise Forbidden("Forbidden: Admin access required")

    content = (update_data.get("content") or "").strip()
    if not content:
        raise ValidationFailed("Content is required")

    new_update = LiveUpdate(
        content=content,
        event_id=update_data.get("event_id") or None,
        location=update_data.get("location") or None,
        image_url=update_data.get("image_url") or None,
        is_pinned=bool(update_data.get("is_pinned")),
    )
    db.add(new_update)
    db.commit()
    db.refresh(new_update)

    await live_update_manager.broadcast({
        "event": "new_live_update",
        "data": jsonable_encoder(serialize(LiveUpdateOut, new_update)),
    })
    return new_update
