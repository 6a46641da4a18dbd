import logging
from dataclasses import dataclass

from fastapi import Depends, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cinema_admin.core.config import ADMIN_ROLE, Settings
from cinema_admin.core.exceptions import (ForbiddenError, SessionExpiredError, SessionNotFoundError,
                                          SessionStoreUnavailableError, UnauthenticatedError)
from cinema_admin.crud.user import crud_user
from cinema_admin.db.session import get_db_session
from cinema_admin.models.user import Role, User
from cinema_admin.services.session_manager import SessionManager


logger = logging.getLogger(__name__)


def get_session_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


@dataclass
class AuthContext:
    user_id: int
    session_id: str
    role: Role
    user: User

    @property
    def is_admin(self) -> bool:
        return self.role.name == ADMIN_ROLE


def extract_bearer_token(request: Request) -> str:
    header = request.headers.get("Authorization")
    if not header:
        raise UnauthenticatedError("Authorization header required")
    parts = header.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise UnauthenticatedError("Invalid authorization header format")
    return parts[1]


class SessionAuth:
    """
    Dependency guarding a router with a session token.

    Extract the bearer token, validate the session, load the user, check the
    role, extend the session, and hand an AuthContext to the route (also kept
    on request.state.auth). Any session store failure denies the request.
    """

    def __init__(self, admin_only: bool = False):
        self.admin_only = admin_only

    async def __call__(self, request: Request, db: AsyncSession = Depends(get_db_session)) -> AuthContext:
        sessions = get_session_manager(request)
        settings = get_app_settings(request)
        token = extract_bearer_token(request)

        try:
            record = await sessions.validate_session(token)
        except SessionExpiredError:
            raise UnauthenticatedError("Session expired")
        except SessionNotFoundError:
            raise UnauthenticatedError("Invalid session")
        except SessionStoreUnavailableError:
            logger.error("session store unavailable, denying request")
            raise UnauthenticatedError("Authentication service unavailable")

        try:
            user = await crud_user.find_user(db, record.user_id)
        except SQLAlchemyError as e:
            logger.error(f"failed to load session user: {e}", exc_info=True)
            raise UnauthenticatedError("Authentication service unavailable")
        if user is None:
            try:
                await sessions.revoke_session(token)
            except SessionStoreUnavailableError:
                logger.warning(f"failed to revoke orphaned session of user {record.user_id}")
            raise UnauthenticatedError("User not found")

        if self.admin_only and user.role.name != ADMIN_ROLE:
            raise ForbiddenError("Admin access required")
        if not user.is_active:
            raise ForbiddenError("Account is inactive")

        try:
            await sessions.extend_session(token, record, settings.session_ttl_for(user.role.name))
        except SessionStoreUnavailableError:
            logger.warning(f"failed to extend session of user {user.id}")

        context = AuthContext(user_id=user.id, session_id=token, role=user.role, user=user)
        request.state.auth = context
        return context


require_user = SessionAuth(admin_only=False)
require_admin = SessionAuth(admin_only=True)
