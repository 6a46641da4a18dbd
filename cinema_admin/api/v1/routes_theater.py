from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from cinema_admin.api.auth import require_admin
from cinema_admin.api.deps import get_page_params
from cinema_admin.crud.theater import crud_theater
from cinema_admin.db.session import get_db_session
from cinema_admin.schemas.common import APIResponse, PageParams, PaginatedResponse, paginated_response, success_response
from cinema_admin.schemas.screen import ScreenResponse
from cinema_admin.schemas.theater import TheaterRequest, TheaterResponse, TheaterUpdate


public_router = APIRouter(prefix="/theaters")
admin_router = APIRouter(prefix="/theaters", dependencies=[Depends(require_admin)])


@public_router.get("", response_model=PaginatedResponse[TheaterResponse])
async def get_theaters(
        city: Optional[str] = None,
        params: PageParams = Depends(get_page_params),
        db: AsyncSession = Depends(get_db_session)):
    theaters, total = await crud_theater.get_theaters(db, params, city=city)
    return paginated_response("Theaters retrieved successfully", theaters, params, total)


@public_router.get("/{theater_id}", response_model=APIResponse[TheaterResponse])
async def get_theater(theater_id: int, db: AsyncSession = Depends(get_db_session)):
    theater = await crud_theater.get_theater(db, theater_id, active_only=True)
    return success_response("Theater retrieved successfully", theater)


@public_router.get("/{theater_id}/screens", response_model=APIResponse[list[ScreenResponse]])
async def get_theater_screens(theater_id: int, db: AsyncSession = Depends(get_db_session)):
    screens = await crud_theater.get_theater_screens(db, theater_id)
    return success_response("Screens retrieved successfully", screens)


@admin_router.get("", response_model=PaginatedResponse[TheaterResponse])
async def get_all_theaters(
        city: Optional[str] = None,
        params: PageParams = Depends(get_page_params),
        db: AsyncSession = Depends(get_db_session)):
    theaters, total = await crud_theater.get_theaters(db, params, city=city, active_only=False)
    return paginated_response("Theaters retrieved successfully", theaters, params, total)


@admin_router.get("/{theater_id}", response_model=APIResponse[TheaterResponse])
async def get_theater_admin(theater_id: int, db: AsyncSession = Depends(get_db_session)):
    return success_response("Theater retrieved successfully", await crud_theater.get_theater(db, theater_id))


@admin_router.post("", status_code=201, response_model=APIResponse[TheaterResponse])
async def create_theater(data: TheaterRequest, db: AsyncSession = Depends(get_db_session)):
    return success_response("Theater created successfully", await crud_theater.create_theater(db, data))


@admin_router.put("/{theater_id}", response_model=APIResponse[TheaterResponse])
async def update_theater(theater_id: int, data: TheaterUpdate, db: AsyncSession = Depends(get_db_session)):
    theater = await crud_theater.update_theater(db, theater_id, data)
    return success_response("Theater updated successfully", theater)


@admin_router.patch("/{theater_id}/toggle", response_model=APIResponse[TheaterResponse])
async def toggle_theater(theater_id: int, db: AsyncSession = Depends(get_db_session)):
    theater = await crud_theater.toggle_theater(db, theater_id)
    state = "activated" if theater.is_active else "deactivated"
    return success_response(f"Theater {state} successfully", theater)


@admin_router.delete("/{theater_id}", response_model=APIResponse[None])
async def delete_theater(theater_id: int, db: AsyncSession = Depends(get_db_session)):
    await crud_theater.delete_theater(db, theater_id)
    return success_response("Theater deleted successfully")
