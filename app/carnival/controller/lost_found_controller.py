from typing import Optional

from sqlalchemy.orm import Session

from carnival.errors import ValidationFailed
from carnival.models.safety_model import LostFoundItem, LOST_FOUND_TYPES, LOST_FOUND_STATUSES

REQUIRED_FIELDS = ("type", "item_name", "item_description", "category", "location_name", "contact_phone")


# ------------------ Lost & Found ------------------
async def retrieve_lost_found_controller(db: Session, item_type: Optional[str] = None,
                                         status: Optional[str] = None):
    if item_type and item_type not in LOST_FOUND_TYPES:
        raise ValidationFailed('Type must be "lost" or "found"')
    if status and status not in LOST_FOUND_STATUSES:
        raise ValidationFailed("Invalid status")

    query = db.query(LostFoundItem)
    if item_type:
        query = query.filter(LostFoundItem.type == item_type)
    if status:
        query = query.filter(LostFoundItem.status == status)
    return query.order_by(LostFoundItem.created_at.desc()).all()


async def add_lost_found_controller(db: Session, user_id: str, item_data: dict):
    blank = [name for name in REQUIRED_FIELDS if not str(item_data.get(name) or "").strip()]
    if blank:
        raise ValidationFailed(
            "Missing required fields: type, itemName, itemDescription, category, locationName, contactPhone"
        )
    if item_data["type"] not in LOST_FOUND_TYPES:
        raise ValidationFailed('Type must be "lost" or "found"')

    item = LostFoundItem(
        user_id=user_id,
        type=item_data["type"],
        item_name=item_data["item_name"].strip(),
        item_description=item_data["item_description"].strip(),
        category=item_data["category"],
        color=item_data.get("color") or None,
        brand=item_data.get("brand") or None,
        distinctive_features=item_data.get("distinctive_features") or None,
        location_name=item_data["location_name"].strip(),
        location_lat=item_data.get("location_lat"),
        location_lng=item_data.get("location_lng"),
        lost_found_at=item_data.get("lost_found_at"),
        images=item_data.get("images") or [],
        contact_phone=item_data["contact_phone"],
        contact_email=item_data.get("contact_email") or None,
        contact_method_preference=item_data.get("contact_method_preference") or "phone",
        status="open",
        reward_offered=bool(item_data.get("reward_offered")),
        reward_amount=item_data.get("reward_amount"),
        view_count=0,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item
