"""
Users API - Own profile and user management
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from uuid import UUID

from stocktrack.core import get_db
from stocktrack.core.permissions import AuthContext, parse_permissions, dump_permissions
from stocktrack.models import AppUser
from stocktrack.schemas.user import UserCreate, UserUpdate, ProfileUpdate, PasswordChange
from stocktrack.services import UserService
from stocktrack.services.lookups import get_or_404
from .auth import get_current_active_user, require_super_admin

router = APIRouter(prefix="/users", tags=["users"])
profile_router = APIRouter(prefix="/user", tags=["users"])


def user_to_dict(user: AppUser, include_permissions: bool = True) -> dict:
    result = {
        "id": str(user.id),
        "employee_id": user.employee_id,
        "username": user.username,
        "email": user.email,
        "phone_number": user.phone_number,
        "nid_number": user.nid_number,
        "job_start_date": user.job_start_date.isoformat() if user.job_start_date else None,
        "job_end_date": user.job_end_date.isoformat() if user.job_end_date else None,
        "is_active": user.is_active,
        "role": user.role
    }
    if include_permissions:
        result["permissions"] = dump_permissions(parse_permissions(user.permissions))
    return result


# ============== Own Profile ==============

@profile_router.get("")
def get_profile(
    db: Session = Depends(get_db),
    actor: AuthContext = Depends(get_current_active_user)
):
    return user_to_dict(get_or_404(db, AppUser, actor.user_id, "User"))

@profile_router.put("")
def update_profile(
    data: ProfileUpdate,
    db: Session = Depends(get_db),
    actor: AuthContext = Depends(get_current_active_user)
):
    return user_to_dict(UserService.update_profile(db, actor, data))

@profile_router.get("/permissions")
def get_permissions(actor: AuthContext = Depends(get_current_active_user)):
    return {"permissions": dump_permissions(actor.permissions)}

@profile_router.post("/change-password")
def change_password(
    data: PasswordChange,
    db: Session = Depends(get_db),
    actor: AuthContext = Depends(get_current_active_user)
):
    UserService.change_password(db, actor, data.old_password, data.new_password)
    return {"message": "Password updated successfully"}


# ============== User Management ==============

@router.get("")
def list_users(
    active_only: bool = Query(False),
    db: Session = Depends(get_db),
    actor: AuthContext = Depends(get_current_active_user)
):
    """List users; permission maps are only shown to SUPER_ADMIN"""
    return [
        user_to_dict(u, include_permissions=actor.is_super_admin)
        for u in UserService.get_users(db, active_only)
    ]

@router.post("")
def create_user(
    data: UserCreate,
    db: Session = Depends(get_db),
    actor: AuthContext = Depends(require_super_admin)
):
    return user_to_dict(UserService.create_user(db, data))

@router.put("/{user_id}")
def update_user(
    user_id: UUID,
    data: UserUpdate,
    db: Session = Depends(get_db),
    actor: AuthContext = Depends(require_super_admin)
):
    return user_to_dict(UserService.update_user(db, user_id, data))

@router.delete("/{user_id}")
def delete_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    actor: AuthContext = Depends(require_super_admin)
):
    UserService.delete_user(db, user_id, actor)
    return {"message": "User deleted successfully"}
