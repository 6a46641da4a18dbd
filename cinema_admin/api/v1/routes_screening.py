from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from cinema_admin.api.auth import require_admin
from cinema_admin.api.deps import get_page_params
from cinema_admin.crud.screening import crud_screening
from cinema_admin.db.session import get_db_session
from cinema_admin.schemas.common import APIResponse, PageParams, PaginatedResponse, paginated_response, success_response
from cinema_admin.schemas.screening import ScreeningCreate, ScreeningFilters, ScreeningResponse, ScreeningUpdate


public_router = APIRouter(prefix="/screenings")
admin_router = APIRouter(prefix="/screenings", dependencies=[Depends(require_admin)])


def get_screening_filters(
        movie_id: Optional[int] = None,
        language_id: Optional[int] = None,
        show_date: Optional[date] = Query(None, alias="date"),
        theater_id: Optional[int] = None,
        screen_id: Optional[int] = None) -> ScreeningFilters:
    return ScreeningFilters(movie_id=movie_id, language_id=language_id, show_date=show_date,
                            theater_id=theater_id, screen_id=screen_id)


@public_router.get("", response_model=PaginatedResponse[ScreeningResponse])
async def get_screenings(
        filters: ScreeningFilters = Depends(get_screening_filters),
        params: PageParams = Depends(get_page_params),
        db: AsyncSession = Depends(get_db_session)):
    screenings, total = await crud_screening.get_screenings(db, filters, params)
    return paginated_response("Screenings retrieved successfully", screenings, params, total)


@public_router.get("/{screening_id}", response_model=APIResponse[ScreeningResponse])
async def get_screening(screening_id: int, db: AsyncSession = Depends(get_db_session)):
    screening = await crud_screening.get_screening(db, screening_id, active_only=True)
    return success_response("Screening retrieved successfully", screening)


@admin_router.post("", status_code=201, response_model=APIResponse[ScreeningResponse])
async def create_screening(data: ScreeningCreate, db: AsyncSession = Depends(get_db_session)):
    return success_response("Screening created successfully", await crud_screening.create_screening(db, data))


@admin_router.put("/{screening_id}", response_model=APIResponse[ScreeningResponse])
async def update_screening(screening_id: int, data: ScreeningUpdate, db: AsyncSession = Depends(get_db_session)):
    screening = await crud_screening.update_screening(db, screening_id, data)
    return success_response("Screening updated successfully", screening)


@admin_router.delete("/{screening_id}", response_model=APIResponse[None])
async def delete_screening(screening_id: int, db: AsyncSession = Depends(get_db_session)):
    await crud_screening.delete_screening(db, screening_id)
    return success_response("Screening deleted successfully")
