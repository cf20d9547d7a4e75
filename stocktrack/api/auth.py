"""
Authentication API - Login, JWT Token, Permission Gate
"""
import logging
from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID

from stocktrack.core import get_db
from stocktrack.core.exceptions import UnauthorizedError
from stocktrack.core.permissions import AuthContext, Feature, Action, dump_permissions
from stocktrack.core.security import create_access_token, decode_access_token
from stocktrack.models import AppUser
from stocktrack.schemas.user import LoginRequest
from stocktrack.services import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

# OAuth2 scheme
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


# ============== Dependencies ==============

def _parse_uuid(value: str) -> Optional[UUID]:
    try:
        return UUID(value)
    except ValueError:
        return None


async def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> Optional[AppUser]:
    """Get current user from JWT token"""
    if not token:
        return None
    
    payload = decode_access_token(token)
    if not payload or not payload.get("sub"):
        return None
    
    return db.query(AppUser).filter(AppUser.id == _parse_uuid(payload["sub"])).first()


async def get_current_active_user(
    current_user: Optional[AppUser] = Depends(get_current_user)
) -> AuthContext:
    """Require an authenticated, active user and resolve its capabilities"""
    if not current_user:
        raise UnauthorizedError("Not authenticated")
    if not current_user.is_active:
        raise UnauthorizedError("Account is inactive")
    return AuthContext.from_user(current_user)


def require_permission(feature: Feature, action: Action):
    """Dependency factory: SUPER_ADMIN, or a NORMAL_ADMIN holding feature:action"""
    async def checker(actor: AuthContext = Depends(get_current_active_user)) -> AuthContext:
        if not actor.can(feature, action):
            logger.warning(f"Denied {feature.value}:{action.value} for {actor.email}")
            raise UnauthorizedError()
        return actor
    return checker


async def require_super_admin(actor: AuthContext = Depends(get_current_active_user)) -> AuthContext:
    """Role-locked operations: user management and brands"""
    if not actor.is_super_admin:
        logger.warning(f"Denied super admin operation for {actor.email}")
        raise UnauthorizedError()
    return actor


# ============== API Endpoints ==============

@router.post("/login")
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    """
    Sign in with email and password, returns JWT token
    """
    user = UserService.authenticate(db, credentials.email, credentials.password)
    
    access_token = create_access_token(
        data={
            "sub": str(user.id),
            "username": user.username,
            "role": user.role,
        }
    )
    logger.info(f"User signed in: {user.email}")
    
    return {
        "access_token": access_token,
        "token_type": "bearer",
        "user": {
            "id": str(user.id),
            "username": user.username,
            "email": user.email,
            "role": user.role,
        }
    }


@router.get("/me")
async def get_me(actor: AuthContext = Depends(get_current_active_user)):
    """Get current authenticated identity"""
    return {
        "id": str(actor.user_id),
        "username": actor.username,
        "email": actor.email,
        "role": actor.role.value,
        "permissions": dump_permissions(actor.permissions),
    }


__all__ = ["router", "get_current_user", "get_current_active_user", "require_permission", "require_super_admin"]
