from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from cinema_admin.schemas.role import RoleResponse


# bcrypt only reads the first 72 bytes and rejects longer input
MAX_PASSWORD_BYTES = 72


def check_password_bytes(password):
    if password is not None and len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return password


class UserCreate(BaseModel):
    name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    password: str = Field(min_length=8)
    role_id: int

    @field_validator("password")
    def validate_password(cls, v):
        return check_password_bytes(v)


class UserUpdate(BaseModel):
    """Patch: only the fields present in the request body are applied."""
    name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=8)
    role_id: Optional[int] = None
    is_active: Optional[bool] = None

    @field_validator("password")
    def validate_password(cls, v):
        return check_password_bytes(v)


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    role: RoleResponse
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class RoleUserResponse(BaseModel):
    id: int
    name: str
    email: str
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class RoleUsersResponse(BaseModel):
    role: RoleResponse
    users: list[RoleUserResponse]
