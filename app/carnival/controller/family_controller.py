from sqlalchemy.orm import Session

from carnival.database import utcnow
from carnival.errors import NotFound, ValidationFailed
from carnival.models.safety_model import FamilyGroup, FamilyMember, FAMILY_MEMBER_ROLES


def _check_role(role):
    if role not in FAMILY_MEMBER_ROLES:
        raise ValidationFailed("Invalid role. Must be parent, child, guardian, or member")


# ------------------ Family Groups ------------------
async def add_family_group_controller(db: Session, user_id: str, group_data: dict):
    name = (group_data.get("name") or "").strip()
    if not name:
        raise ValidationFailed("Group name is required")

    group = FamilyGroup(
        created_by=user_id,
        name=name,
        meeting_point_lat=group_data.get("meeting_point_lat"),
        meeting_point_lng=group_data.get("meeting_point_lng"),
        meeting_point_name=group_data.get("meeting_point_name") or None,
        emergency_contact=group_data.get("emergency_contact") or None,
        is_active=True,
    )
    db.add(group)
    db.commit()
    db.refresh(group)
    return group


async def retrieve_family_groups_controller(db: Session, user_id: str):
    return (
        db.query(FamilyGroup)
        .filter(FamilyGroup.created_by == user_id, FamilyGroup.is_active.is_(True))
        .order_by(FamilyGroup.created_at.desc())
        .all()
    )


async def retrieve_family_group_controller(db: Session, user_id: str, group_id: str):
    group = (
        db.query(FamilyGroup)
        .filter(
            FamilyGroup.id == group_id,
            FamilyGroup.created_by == user_id,
            FamilyGroup.is_active.is_(True),
        )
        .first()
    )
    if not group:
        raise NotFound("Family group not found")
    return group


async def update_family_group_controller(db: Session, user_id: str, group_id: str, update_data: dict):
    group = await retrieve_family_group_controller(db, user_id, group_id)
    if "name" in update_data:
        name = (update_data.pop("name") or "").strip()
        if not name:
            raise ValidationFailed("Group name is required")
        group.name = name
    for key, val in update_data.items():
        setattr(group, key, val)
    db.commit()
    db.refresh(group)
    return group


async def delete_family_group_controller(db: Session, user_id: str, group_id: str):
    # soft delete
    group = await retrieve_family_group_controller(db, user_id, group_id)
    group.is_active = False
    db.commit()


# ------------------ Family Members ------------------
async def retrieve_family_members_controller(db: Session, user_id: str, group_id: str):
    group = await retrieve_family_group_controller(db, user_id, group_id)
    return list(group.members)


async def add_family_member_controller(db: Session, user_id: str, group_id: str, member_data: dict):
    await retrieve_family_group_controller(db, user_id, group_id)

    full_name = (member_data.get("full_name") or "").strip()
    if not full_name:
        raise ValidationFailed("Full name is required")
    role = member_data.get("role") or "member"
    _check_role(role)

    member = FamilyMember(
        group_id=group_id,
        full_name=full_name,
        role=role,
        phone=member_data.get("phone") or None,
        age=member_data.get("age"),
        photo_url=member_data.get("photo_url") or None,
        description=member_data.get("description") or None,
        is_missing=False,
    )
    db.add(member)
    db.commit()
    db.refresh(member)
    return member


async def update_family_member_controller(db: Session, user_id: str, group_id: str, member_id: str,
                                          update_data: dict):
    await retrieve_family_group_controller(db, user_id, group_id)
    member = (
        db.query(FamilyMember)
        .filter(FamilyMember.id == member_id, FamilyMember.group_id == group_id)
        .first()
    )
    if not member:
        raise NotFound("Family member not found")

    if update_data.get("full_name") is not None:
        member.full_name = update_data["full_name"].strip()
    if "role" in update_data:
        _check_role(update_data["role"])
        member.role = update_data["role"]
    for key in ("phone", "age", "photo_url", "description"):
        if key in update_data:
            setattr(member, key, update_data[key])

    is_missing = update_data.get("is_missing")
    if is_missing is True:
        member.is_missing = True
        member.last_seen_at = utcnow()
        if update_data.get("last_seen_lat") is not None:
            member.last_seen_lat = update_data["last_seen_lat"]
        if update_data.get("last_seen_lng") is not None:
            member.last_seen_lng = update_data["last_seen_lng"]
        member.found_at = None
    elif is_missing is False:
        # found; last_seen_at stays as the record of when they went missing
        member.is_missing = False
        member.found_at = utcnow()

    db.commit()
    db.refresh(member)
    return member
