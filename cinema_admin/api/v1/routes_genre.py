from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from cinema_admin.api.auth import require_admin
from cinema_admin.crud.genre import crud_genre
from cinema_admin.db.session import get_db_session
from cinema_admin.schemas.common import APIResponse, success_response
from cinema_admin.schemas.genre import GenreRequest, GenreResponse


public_router = APIRouter(prefix="/genres")
admin_router = APIRouter(prefix="/genres", dependencies=[Depends(require_admin)])


@public_router.get("", response_model=APIResponse[list[GenreResponse]])
async def get_genres(db: AsyncSession = Depends(get_db_session)):
    return success_response("Genres retrieved successfully", await crud_genre.get_all_genres(db))


@admin_router.post("", status_code=201, response_model=APIResponse[GenreResponse])
async def create_genre(data: GenreRequest, db: AsyncSession = Depends(get_db_session)):
    return success_response("Genre created successfully", await crud_genre.create_genre(db, data))


@admin_router.put("/{genre_id}", response_model=APIResponse[GenreResponse])
async def update_genre(genre_id: int, data: GenreRequest, db: AsyncSession = Depends(get_db_session)):
    return success_response("Genre updated successfully", await crud_genre.update_genre(db, genre_id, data))


@admin_router.delete("/{genre_id}", response_model=APIResponse[None])
async def delete_genre(genre_id: int, db: AsyncSession = Depends(get_db_session)):
    await crud_genre.delete_genre(db, genre_id)
    return success_response("Genre deleted successfully")
