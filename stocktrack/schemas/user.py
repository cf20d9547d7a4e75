"""
User Schemas
"""
from pydantic import BaseModel, Field, field_validator
from typing import Dict, List, Optional
from datetime import date

from stocktrack.core.permissions import Role, parse_permissions, dump_permissions
from stocktrack.core.exceptions import InvalidInputError

def _validate_permissions(value):
    if value is None:
        return value
    try:
        return dump_permissions(parse_permissions(value))
    except InvalidInputError as e:
        # Surface as a pydantic error so it is reported like other body errors
        raise ValueError(e.message)

class LoginRequest(BaseModel):
    email: str
    password: str

class PasswordChange(BaseModel):
    old_password: str
    new_password: str = Field(min_length=6)

class UserCreate(BaseModel):
    employee_id: Optional[str] = None
    username: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=200, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(min_length=6)
    phone_number: Optional[str] = None
    nid_number: Optional[str] = None
    job_start_date: Optional[date] = None
    job_end_date: Optional[date] = None
    is_active: bool = True
    role: Role = Role.NORMAL_ADMIN
    permissions: Optional[Dict[str, List[str]]] = None

    @field_validator("permissions")
    @classmethod
    def check_permissions(cls, value):
        return _validate_permissions(value)

class UserUpdate(BaseModel):
    """Full update, SUPER_ADMIN only"""
    employee_id: Optional[str] = None
    username: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[str] = Field(default=None, min_length=3, max_length=200, pattern=r"^[^@\s]+@[^@\s]+$")
    password: Optional[str] = Field(default=None, min_length=6)
    phone_number: Optional[str] = None
    nid_number: Optional[str] = None
    job_start_date: Optional[date] = None
    job_end_date: Optional[date] = None
    is_active: Optional[bool] = None
    role: Optional[Role] = None
    permissions: Optional[Dict[str, List[str]]] = None

    @field_validator("permissions")
    @classmethod
    def check_permissions(cls, value):
        return _validate_permissions(value)

class ProfileUpdate(BaseModel):
    """Self-service profile edit; which fields apply depends on the caller's role"""
    username: Optional[str] = Field(default=None, min_length=1, max_length=100)
    phone_number: Optional[str] = None
    nid_number: Optional[str] = None
    password: Optional[str] = Field(default=None, min_length=6)
    job_start_date: Optional[date] = None
    job_end_date: Optional[date] = None
    is_active: Optional[bool] = None
    role: Optional[Role] = None

# Fields a NORMAL_ADMIN may change on their own profile
SELF_EDITABLE_FIELDS = {"phone_number", "nid_number", "password"}
