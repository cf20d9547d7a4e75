"""
User Service - Accounts, profiles and passwords
"""
import logging
from sqlalchemy.orm import Session
from sqlalchemy import func
from typing import List, Optional
from uuid import UUID

from stocktrack.core.exceptions import ConflictError, InvalidInputError, UnauthorizedError
from stocktrack.core.permissions import AuthContext, Role
from stocktrack.core.security import get_password_hash, verify_password
from stocktrack.models import AppUser, Service, Product, StockIn, StockOut
from stocktrack.schemas.user import UserCreate, UserUpdate, ProfileUpdate, SELF_EDITABLE_FIELDS
from .lookups import get_or_404

logger = logging.getLogger(__name__)

class UserService:
    """User account business logic"""
    
    @staticmethod
    def get_by_email(db: Session, email: str) -> Optional[AppUser]:
        return db.query(AppUser).filter(func.lower(AppUser.email) == func.lower(email.strip())).first()
    
    @staticmethod
    def authenticate(db: Session, email: str, password: str) -> AppUser:
        """Check credentials; inactive accounts cannot sign in"""
        user = UserService.get_by_email(db, email)
        if not user or not verify_password(password, user.hashed_password):
            logger.warning(f"Failed sign-in for {email}")
            raise UnauthorizedError("Invalid email or password")
        if not user.is_active:
            logger.warning(f"Sign-in refused for inactive user {email}")
            raise UnauthorizedError("Account is inactive")
        return user
    
    @staticmethod
    def get_users(db: Session, active_only: bool = False) -> List[AppUser]:
        query = db.query(AppUser)
        if active_only:
            query = query.filter(AppUser.is_active == True)
        return query.order_by(AppUser.username).all()
    
    @staticmethod
    def _check_email_free(db: Session, email: str, exclude_id: Optional[UUID] = None) -> None:
        existing = UserService.get_by_email(db, email)
        if existing and existing.id != exclude_id:
            raise ConflictError("A user with this email already exists")
    
    @staticmethod
    def _check_dates(user: AppUser) -> None:
        if user.job_start_date and user.job_end_date and user.job_end_date < user.job_start_date:
            raise InvalidInputError("Job end date cannot be before job start date")
    
    @staticmethod
    def create_user(db: Session, data: UserCreate) -> AppUser:
        UserService._check_email_free(db, data.email)
        
        user = AppUser(
            employee_id=data.employee_id,
            username=data.username,
            email=data.email.strip(),
            hashed_password=get_password_hash(data.password),
            phone_number=data.phone_number,
            nid_number=data.nid_number,
            job_start_date=data.job_start_date,
            job_end_date=data.job_end_date,
            is_active=data.is_active,
            role=data.role.value,
            permissions=data.permissions or {}
        )
        UserService._check_dates(user)
        
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info(f"User created: {user.email} ({user.role})")
        return user
    
    @staticmethod
    def is_active_super_admin(user: AppUser) -> bool:
        return bool(user.is_active) and user.role == Role.SUPER_ADMIN.value
    
    @staticmethod
    def check_super_admin_kept(db: Session, user: AppUser, was_super_admin: bool) -> None:
        """Refuse a change that leaves no active SUPER_ADMIN"""
        if not was_super_admin or UserService.is_active_super_admin(user):
            return
        others = db.query(AppUser).filter(
            AppUser.id != user.id,
            AppUser.role == Role.SUPER_ADMIN.value,
            AppUser.is_active == True
        ).count()
        if not others:
            db.rollback()
            raise InvalidInputError("Cannot demote or deactivate the last active super admin")
    
    @staticmethod
    def _apply(user: AppUser, fields: dict) -> None:
        for field, value in fields.items():
            if field == "password":
                if value:
                    user.hashed_password = get_password_hash(value)
            elif field == "role":
                if value is not None:
                    user.role = Role(value).value
            elif field == "permissions":
                user.permissions = value or {}
            elif field in ("is_active", "username", "email") and value is None:
                continue
            else:
                setattr(user, field, value)
    
    @staticmethod
    def update_user(db: Session, user_id: UUID, data: UserUpdate) -> AppUser:
        """Full update of any account (SUPER_ADMIN)"""
        user = get_or_404(db, AppUser, user_id, "User")
        fields = data.model_dump(exclude_unset=True)
        
        if fields.get("email"):
            UserService._check_email_free(db, fields["email"], exclude_id=user.id)
            fields["email"] = fields["email"].strip()
        
        was_super_admin = UserService.is_active_super_admin(user)
        UserService._apply(user, fields)
        UserService._check_dates(user)
        UserService.check_super_admin_kept(db, user, was_super_admin)
        
        db.commit()
        db.refresh(user)
        logger.info(f"User updated: {user.email}")
        return user
    
    @staticmethod
    def update_profile(db: Session, actor: AuthContext, data: ProfileUpdate) -> AppUser:
        """Self-service edit; a NORMAL_ADMIN may only touch SELF_EDITABLE_FIELDS"""
        user = get_or_404(db, AppUser, actor.user_id, "User")
        fields = data.model_dump(exclude_unset=True)
        
        if not actor.is_super_admin:
            forbidden = set(fields) - SELF_EDITABLE_FIELDS
            if forbidden:
                raise UnauthorizedError(f"Not allowed to change: {', '.join(sorted(forbidden))}")
        
        was_super_admin = UserService.is_active_super_admin(user)
        UserService._apply(user, fields)
        UserService._check_dates(user)
        UserService.check_super_admin_kept(db, user, was_super_admin)
        
        db.commit()
        db.refresh(user)
        return user
    
    @staticmethod
    def change_password(db: Session, actor: AuthContext, old_password: str, new_password: str) -> None:
        user = get_or_404(db, AppUser, actor.user_id, "User")
        if not verify_password(old_password, user.hashed_password):
            raise InvalidInputError("Current password is incorrect")
        
        user.hashed_password = get_password_hash(new_password)
        db.commit()
        logger.info(f"Password changed for {user.email}")
    
    @staticmethod
    def delete_user(db: Session, user_id: UUID, actor: AuthContext) -> None:
        """Delete an account that has not created any records"""
        user = get_or_404(db, AppUser, user_id, "User")
        
        if user.id == actor.user_id:
            raise InvalidInputError("You cannot delete your own account")
        
        for model in (Service, Product, StockIn, StockOut):
            if db.query(model).filter(model.created_by_id == user.id).first():
                raise ConflictError("Cannot delete user: they have created records, deactivate the account instead")
        
        db.delete(user)
        db.commit()
        logger.info(f"User deleted: {user.email}")
    
    @staticmethod
    def ensure_super_admin(db: Session, email: str, username: str, password: str) -> Optional[AppUser]:
        """Create the bootstrap SUPER_ADMIN account if no user has that email"""
        if UserService.get_by_email(db, email):
            return None
        
        user = AppUser(
            username=username,
            email=email,
            hashed_password=get_password_hash(password),
            is_active=True,
            role=Role.SUPER_ADMIN.value,
            permissions={}
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info(f"Bootstrap super admin created: {email}")
        return user
