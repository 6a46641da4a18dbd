from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from cinema_admin.api.auth import AuthContext, get_app_settings, get_session_manager, require_admin
from cinema_admin.api.deps import get_page_params
from cinema_admin.core.config import Settings
from cinema_admin.crud.user import crud_user
from cinema_admin.db.session import get_db_session
from cinema_admin.schemas.common import APIResponse, PageParams, PaginatedResponse, paginated_response, success_response
from cinema_admin.schemas.user import UserCreate, UserResponse, UserUpdate
from cinema_admin.services.session_manager import SessionManager


router = APIRouter(prefix="/users")


@router.get("", response_model=PaginatedResponse[UserResponse])
async def get_users(
        params: PageParams = Depends(get_page_params),
        db: AsyncSession = Depends(get_db_session),
        _: AuthContext = Depends(require_admin)):
    users, total = await crud_user.get_users(db, params)
    return paginated_response("Users retrieved successfully", users, params, total)


@router.get("/{user_id}", response_model=APIResponse[UserResponse])
async def get_user(user_id: int, db: AsyncSession = Depends(get_db_session), _: AuthContext = Depends(require_admin)):
    return success_response("User retrieved successfully", await crud_user.get_user(db, user_id))


@router.post("", status_code=201, response_model=APIResponse[UserResponse])
async def create_user(
        data: UserCreate,
        db: AsyncSession = Depends(get_db_session),
        settings: Settings = Depends(get_app_settings),
        _: AuthContext = Depends(require_admin)):
    user = await crud_user.create_user(db, data, bcrypt_rounds=settings.BCRYPT_ROUNDS)
    return success_response("User created successfully", user)


@router.put("/{user_id}", response_model=APIResponse[UserResponse])
async def update_user(
        user_id: int,
        data: UserUpdate,
        db: AsyncSession = Depends(get_db_session),
        settings: Settings = Depends(get_app_settings),
        _: AuthContext = Depends(require_admin)):
    user = await crud_user.update_user(db, user_id, data, bcrypt_rounds=settings.BCRYPT_ROUNDS)
    return success_response("User updated successfully", user)


@router.delete("/{user_id}", response_model=APIResponse[None])
async def delete_user(
        user_id: int,
        db: AsyncSession = Depends(get_db_session),
        sessions: SessionManager = Depends(get_session_manager),
        auth: AuthContext = Depends(require_admin)):
    await crud_user.delete_user(db, sessions, user_id, acting_user_id=auth.user_id)
    return success_response("User deleted successfully")
