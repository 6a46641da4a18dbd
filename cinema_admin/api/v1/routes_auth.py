import logging
from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from cinema_admin.api.auth import AuthContext, get_app_settings, get_session_manager, require_user
from cinema_admin.core.config import ADMIN_ROLE, Settings
from cinema_admin.core.exceptions import SessionStoreUnavailableError, StoreUnavailableError, UnauthenticatedError
from cinema_admin.core.security import verify_password
from cinema_admin.crud.user import crud_user
from cinema_admin.db.session import get_db_session
from cinema_admin.models.user import User
from cinema_admin.schemas.auth import AdminLoginResponse, LoggedInUser, LoginRequest, UserLoginResponse
from cinema_admin.schemas.common import APIResponse, success_response
from cinema_admin.services.session_manager import SessionManager, SessionRecord


logger = logging.getLogger(__name__)

public_router = APIRouter(prefix="/auth")
admin_router = APIRouter()


async def _authenticate(db: AsyncSession, data: LoginRequest, admin_only: bool) -> User:
    user = await crud_user.get_user_by_email(db, data.email)
    invalid = "Invalid admin credentials" if admin_only else "Invalid email or password"
    if user is None or not user.is_active:
        raise UnauthenticatedError(invalid)
    if admin_only and user.role.name != ADMIN_ROLE:
        raise UnauthenticatedError(invalid)
    if not verify_password(data.password, user.password):
        raise UnauthenticatedError(invalid)
    return user


async def _open_session(request: Request, sessions: SessionManager, settings: Settings, user: User) -> SessionRecord:
    try:
        record = await sessions.create_session(
            user_id=user.id,
            role_id=user.role_id,
            client_ip=request.client.host if request.client else None,
            user_agent=request.headers.get("User-Agent"),
            ttl=settings.session_ttl_for(user.role.name),
        )
    except SessionStoreUnavailableError:
        raise StoreUnavailableError("Failed to create session")
    logger.info(f"user {user.id} logged in")
    return record


@public_router.post("/login", response_model=APIResponse[UserLoginResponse])
async def login(
        data: LoginRequest,
        request: Request,
        db: AsyncSession = Depends(get_db_session),
        sessions: SessionManager = Depends(get_session_manager),
        settings: Settings = Depends(get_app_settings)):
    user = await _authenticate(db, data, admin_only=False)
    record = await _open_session(request, sessions, settings, user)
    return success_response("Login successful", {
        "token": record.session_id,
        "expires_at": record.expires_at,
        "user": user,
    })


@admin_router.post("/auth/login", response_model=APIResponse[AdminLoginResponse])
async def admin_login(
        data: LoginRequest,
        request: Request,
        db: AsyncSession = Depends(get_db_session),
        sessions: SessionManager = Depends(get_session_manager),
        settings: Settings = Depends(get_app_settings)):
    user = await _authenticate(db, data, admin_only=True)
    record = await _open_session(request, sessions, settings, user)
    return success_response("Admin login successful", {
        "token": record.session_id,
        "expires_at": record.expires_at,
        "admin": user,
    })


@admin_router.get("/profile", response_model=APIResponse[LoggedInUser])
async def profile(auth: AuthContext = Depends(require_user)):
    return success_response("Profile retrieved successfully", auth.user)


@admin_router.post("/logout", response_model=APIResponse[None])
async def logout(
        auth: AuthContext = Depends(require_user),
        sessions: SessionManager = Depends(get_session_manager)):
    try:
        await sessions.revoke_session(auth.session_id)
    except SessionStoreUnavailableError:
        raise StoreUnavailableError("Failed to logout")
    return success_response("Logout successful")
