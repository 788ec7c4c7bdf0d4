"""Admin user management."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from greenworld.core.deps import RowId, get_db, require_roles
from greenworld.db.enums import ROLES_CAN_MANAGE_USERS
from greenworld.schemas.auth import UserListResponse, UserRead, UserSession
from greenworld.schemas.common import MessageResponse
from greenworld.services import user_service

router = APIRouter()


@router.get("", response_model=UserListResponse)
def list_users(
    _: UserSession = Depends(require_roles(ROLES_CAN_MANAGE_USERS)),
    db: Session = Depends(get_db),
):
    """All accounts, newest first. Password hashes never leave the service layer."""
    users = user_service.list_users(db)
    return UserListResponse(users=[UserRead.model_validate(u) for u in users])


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: RowId,
    admin: UserSession = Depends(require_roles(ROLES_CAN_MANAGE_USERS)),
    db: Session = Depends(get_db),
):
    """
    Delete an account and its registrations and certificates.

    Admins cannot delete themselves; NGOs that still own projects are kept.
    """
    try:
        user_service.delete_user(db, user_id, acting_user_id=admin.id)
        db.commit()
    except user_service.UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (user_service.SelfDeletionError, user_service.UserOwnsProjectsError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    return MessageResponse(message="User deleted successfully")
