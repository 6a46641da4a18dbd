from datetime import datetime
from pydantic import BaseModel, EmailStr

from cinema_admin.schemas.role import RoleResponse


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class LoggedInUser(BaseModel):
    id: int
    email: str
    name: str
    role: RoleResponse

    class Config:
        from_attributes = True


class AdminLoginResponse(BaseModel):
    token: str
    expires_at: datetime
    admin: LoggedInUser


class UserLoginResponse(BaseModel):
    token: str
    expires_at: datetime
    user: LoggedInUser
