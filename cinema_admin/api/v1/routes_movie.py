from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from cinema_admin.api.auth import require_admin
from cinema_admin.api.deps import get_page_params
from cinema_admin.crud.movie import crud_movie, crud_movie_language
from cinema_admin.db.session import get_db_session
from cinema_admin.schemas.common import APIResponse, PageParams, PaginatedResponse, paginated_response, success_response
from cinema_admin.schemas.movie import (LocalizedMovieResponse, MovieCreate, MovieLanguageRequest, MovieLanguageResponse,
                                        MovieLanguageUpdate, MovieResponse, MovieUpdate)


public_router = APIRouter(prefix="/movies")
admin_router = APIRouter(prefix="/movies", dependencies=[Depends(require_admin)])


@public_router.get("", response_model=PaginatedResponse[MovieResponse])
async def get_movies(params: PageParams = Depends(get_page_params), db: AsyncSession = Depends(get_db_session)):
    movies, total = await crud_movie.get_movies(db, params)
    return paginated_response("Movies retrieved successfully", movies, params, total)


@public_router.get("/{movie_id}", response_model=APIResponse[LocalizedMovieResponse])
async def get_movie(
        movie_id: int,
        lang: Optional[str] = Query(None, max_length=5, description="Language code of the localised title"),
        db: AsyncSession = Depends(get_db_session)):
    movie = await crud_movie.get_localized_movie(db, movie_id, lang)
    return success_response("Movie retrieved successfully", movie)


@admin_router.get("", response_model=PaginatedResponse[MovieResponse])
async def get_all_movies(params: PageParams = Depends(get_page_params), db: AsyncSession = Depends(get_db_session)):
    movies, total = await crud_movie.get_movies(db, params, active_only=False)
    return paginated_response("Movies retrieved successfully", movies, params, total)


@admin_router.get("/{movie_id}", response_model=APIResponse[MovieResponse])
async def get_movie_admin(movie_id: int, db: AsyncSession = Depends(get_db_session)):
    return success_response("Movie retrieved successfully", await crud_movie.get_movie(db, movie_id))


@admin_router.post("", status_code=201, response_model=APIResponse[MovieResponse])
async def create_movie(data: MovieCreate, db: AsyncSession = Depends(get_db_session)):
    return success_response("Movie created successfully", await crud_movie.create_movie(db, data))


@admin_router.put("/{movie_id}", response_model=APIResponse[MovieResponse])
async def update_movie(movie_id: int, data: MovieUpdate, db: AsyncSession = Depends(get_db_session)):
    return success_response("Movie updated successfully", await crud_movie.update_movie(db, movie_id, data))


@admin_router.delete("/{movie_id}", response_model=APIResponse[None])
async def delete_movie(movie_id: int, db: AsyncSession = Depends(get_db_session)):
    await crud_movie.delete_movie(db, movie_id)
    return success_response("Movie deleted successfully")


@admin_router.get("/{movie_id}/languages", response_model=APIResponse[list[MovieLanguageResponse]])
async def get_movie_languages(movie_id: int, db: AsyncSession = Depends(get_db_session)):
    entries = await crud_movie_language.get_movie_languages(db, movie_id)
    return success_response("Movie languages retrieved successfully", entries)


@admin_router.post("/{movie_id}/languages", status_code=201, response_model=APIResponse[MovieLanguageResponse])
async def create_movie_language(movie_id: int, data: MovieLanguageRequest, db: AsyncSession = Depends(get_db_session)):
    entry = await crud_movie_language.create_movie_language(db, movie_id, data)
    return success_response("Movie language added successfully", entry)


@admin_router.put("/{movie_id}/languages/{entry_id}", response_model=APIResponse[MovieLanguageResponse])
async def update_movie_language(
        movie_id: int,
        entry_id: int,
        data: MovieLanguageUpdate,
        db: AsyncSession = Depends(get_db_session)):
    entry = await crud_movie_language.update_movie_language(db, movie_id, entry_id, data)
    return success_response("Movie language updated successfully", entry)


@admin_router.delete("/{movie_id}/languages/{entry_id}", response_model=APIResponse[None])
async def delete_movie_language(movie_id: int, entry_id: int, db: AsyncSession = Depends(get_db_session)):
    await crud_movie_language.delete_movie_language(db, movie_id, entry_id)
    return success_response("Movie language removed successfully")
