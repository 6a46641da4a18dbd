from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from cinema_admin.api.auth import require_admin
from cinema_admin.crud.language import crud_language
from cinema_admin.db.session import get_db_session
from cinema_admin.schemas.common import APIResponse, success_response
from cinema_admin.schemas.language import LanguageRequest, LanguageResponse


public_router = APIRouter(prefix="/languages")
admin_router = APIRouter(prefix="/languages", dependencies=[Depends(require_admin)])


@public_router.get("", response_model=APIResponse[list[LanguageResponse]])
async def get_languages(db: AsyncSession = Depends(get_db_session)):
    languages = await crud_language.get_all_languages(db, active_only=True)
    return success_response("Languages retrieved successfully", languages)


@admin_router.get("", response_model=APIResponse[list[LanguageResponse]])
async def get_all_languages(db: AsyncSession = Depends(get_db_session)):
    return success_response("Languages retrieved successfully", await crud_language.get_all_languages(db))


@admin_router.post("", status_code=201, response_model=APIResponse[LanguageResponse])
async def create_language(data: LanguageRequest, db: AsyncSession = Depends(get_db_session)):
    return success_response("Language created successfully", await crud_language.create_language(db, data))


@admin_router.put("/{language_id}", response_model=APIResponse[LanguageResponse])
async def update_language(language_id: int, data: LanguageRequest, db: AsyncSession = Depends(get_db_session)):
    language = await crud_language.update_language(db, language_id, data)
    return success_response("Language updated successfully", language)


@admin_router.delete("/{language_id}", response_model=APIResponse[None])
async def delete_language(language_id: int, db: AsyncSession = Depends(get_db_session)):
    await crud_language.delete_language(db, language_id)
    return success_response("Language deleted successfully")
