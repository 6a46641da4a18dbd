from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from cinema_admin.api.auth import require_admin
from cinema_admin.api.deps import get_page_params
from cinema_admin.crud.screen import crud_screen
from cinema_admin.db.session import get_db_session
from cinema_admin.schemas.common import APIResponse, PageParams, PaginatedResponse, paginated_response, success_response
from cinema_admin.schemas.screen import ScreenCreate, ScreenDetailResponse, ScreenResponse, ScreenUpdate


public_router = APIRouter(prefix="/screens")
admin_router = APIRouter(prefix="/screens", dependencies=[Depends(require_admin)])


@public_router.get("/{screen_id}", response_model=APIResponse[ScreenDetailResponse])
async def get_screen(screen_id: int, db: AsyncSession = Depends(get_db_session)):
    screen = await crud_screen.get_screen(db, screen_id, active_only=True)
    return success_response("Screen retrieved successfully", screen)


@admin_router.get("", response_model=PaginatedResponse[ScreenResponse])
async def get_screens(
        theater_id: Optional[int] = None,
        params: PageParams = Depends(get_page_params),
        db: AsyncSession = Depends(get_db_session)):
    screens, total = await crud_screen.get_screens(db, params, theater_id=theater_id)
    return paginated_response("Screens retrieved successfully", screens, params, total)


@admin_router.get("/{screen_id}", response_model=APIResponse[ScreenDetailResponse])
async def get_screen_admin(screen_id: int, db: AsyncSession = Depends(get_db_session)):
    return success_response("Screen retrieved successfully", await crud_screen.get_screen(db, screen_id))


@admin_router.post("", status_code=201, response_model=APIResponse[ScreenDetailResponse])
async def create_screen(data: ScreenCreate, db: AsyncSession = Depends(get_db_session)):
    return success_response("Screen created successfully", await crud_screen.create_screen(db, data))


@admin_router.put("/{screen_id}", response_model=APIResponse[ScreenDetailResponse])
async def update_screen(screen_id: int, data: ScreenUpdate, db: AsyncSession = Depends(get_db_session)):
    return success_response("Screen updated successfully", await crud_screen.update_screen(db, screen_id, data))


@admin_router.delete("/{screen_id}", response_model=APIResponse[None])
async def delete_screen(screen_id: int, db: AsyncSession = Depends(get_db_session)):
    await crud_screen.delete_screen(db, screen_id)
    return success_response("Screen deleted successfully")
