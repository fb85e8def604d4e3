import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from carnival.controller.auth_controller import get_current_user
from carnival.controller.family_controller import (
    add_family_group_controller, retrieve_family_groups_controller, retrieve_family_group_controller,
    update_family_group_controller, delete_family_group_controller, retrieve_family_members_controller,
    add_family_member_controller, update_family_member_controller
)
from carnival.database import get_db
from carnival.errors import CarnivalError
from carnival.models.user_model import User
from carnival.response_model import ResponseModel, CarnivalErrorResponse, InternalErrorResponse
from carnival.schema.base import serialize
from carnival.schema.safety_schema import (
    FamilyGroupCreate, FamilyGroupUpdate, FamilyGroupOut, FamilyMemberCreate, FamilyMemberUpdate,
    FamilyMemberOut
)

logger = logging.getLogger(__name__)

router = APIRouter()


# ----------------------- Family Groups -----------------------
@router.get("", response_description="Caller's active family groups with members")
async def get_family_groups(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        groups = await retrieve_family_groups_controller(db, user.id)
        return ResponseModel({"groups": serialize(FamilyGroupOut, groups)})
    except Exception:
        logger.exception("Error fetching family groups")
        return InternalErrorResponse()


@router.post("", response_description="Create a family group")
async def add_family_group(payload: FamilyGroupCreate, user: User = Depends(get_current_user),
                           db: Session = Depends(get_db)):
    try:
        group = await add_family_group_controller(db, user.id, payload.model_dump())
        return ResponseModel({"group": serialize(FamilyGroupOut, group)}, status.HTTP_201_CREATED)
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error creating family group")
        db.rollback()
        return InternalErrorResponse()


@router.get("/{group_id}", response_description="Family group with members")
async def get_family_group(group_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        group = await retrieve_family_group_controller(db, user.id, group_id)
        return ResponseModel({"group": serialize(FamilyGroupOut, group)})
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error fetching family group %s", group_id)
        return InternalErrorResponse()


@router.patch("/{group_id}", response_description="Update name or meeting point")
async def update_family_group(group_id: str, payload: FamilyGroupUpdate, user: User = Depends(get_current_user),
                              db: Session = Depends(get_db)):
    try:
        group = await update_family_group_controller(
            db, user.id, group_id, payload.model_dump(exclude_unset=True)
        )
        return ResponseModel({"group": serialize(FamilyGroupOut, group)})
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error updating family group %s", group_id)
        db.rollback()
        return InternalErrorResponse()


@router.delete("/{group_id}", response_description="Deactivate a family group")
async def delete_family_group(group_id: str, user: User = Depends(get_current_user),
                              db: Session = Depends(get_db)):
    try:
        await delete_family_group_controller(db, user.id, group_id)
        return ResponseModel({"message": "Family group deleted"})
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error deleting family group %s", group_id)
        db.rollback()
        return InternalErrorResponse()


# ----------------------- Family Members -----------------------
@router.get("/{group_id}/members", response_description="Members of a family group")
async def get_family_members(group_id: str, user: User = Depends(get_current_user),
                             db: Session = Depends(get_db)):
    try:
        members = await retrieve_family_members_controller(db, user.id, group_id)
        return ResponseModel({"members": serialize(FamilyMemberOut, members)})
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error fetching members of group %s", group_id)
        return InternalErrorResponse()


@router.post("/{group_id}/members", response_description="Add a member to a family group")
async def add_family_member(group_id: str, payload: FamilyMemberCreate, user: User = Depends(get_current_user),
                            db: Session = Depends(get_db)):
    try:
        member = await add_family_member_controller(db, user.id, group_id, payload.model_dump())
        return ResponseModel({"member": serialize(FamilyMemberOut, member)}, status.HTTP_201_CREATED)
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error adding member to group %s", group_id)
        db.rollback()
        return InternalErrorResponse()


@router.patch("/{group_id}/members/{member_id}", response_description="Update a member, incl. missing/found")
async def update_family_member(group_id: str, member_id: str, payload: FamilyMemberUpdate,
                               user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        member = await update_family_member_controller(
            db, user.id, group_id, member_id, payload.model_dump(exclude_unset=True)
        )
        return ResponseModel({"member": serialize(FamilyMemberOut, member)})
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error updating member %s", member_id)
        db.rollback()
        return InternalErrorResponse()


__all__ = ["router"]
