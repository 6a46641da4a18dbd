from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from cinema_admin.core.exceptions import ConflictError, NotFoundError
from cinema_admin.models.movie import Language, MovieLanguage
from cinema_admin.models.screening import Screening
from cinema_admin.schemas.language import LanguageRequest


class CRUDLanguage:
    async def get_language(self, db: AsyncSession, language_id: int) -> Language:
        language = await db.get(Language, language_id)
        if language is None:
            raise NotFoundError("Language not found")
        return language

    async def get_by_code(self, db: AsyncSession, code: str) -> Language | None:
        result = await db.execute(select(Language).where(func.lower(Language.code) == code.lower()))
        return result.scalar_one_or_none()

    async def get_all_languages(self, db: AsyncSession, active_only: bool = False):
        stmt = select(Language).order_by(Language.name)
        if active_only:
            stmt = stmt.where(Language.is_active.is_(True))
        result = await db.execute(stmt)
        return result.scalars().all()

    async def create_language(self, db: AsyncSession, data: LanguageRequest) -> Language:
        if await self.get_by_code(db, data.code) is not None:
            raise ConflictError("Language with this code already exists")
        language = Language(
            code=data.code.lower(),
            name=data.name,
            native_name=data.native_name,
            is_active=True if data.is_active is None else data.is_active,
        )
        db.add(language)
        await db.commit()
        await db.refresh(language)
        return language

    async def update_language(self, db: AsyncSession, language_id: int, data: LanguageRequest) -> Language:
        language = await self.get_language(db, language_id)
        existing = await self.get_by_code(db, data.code)
        if existing is not None and existing.id != language.id:
            raise ConflictError("Language with this code already exists")
        language.code = data.code.lower()
        language.name = data.name
        language.native_name = data.native_name
        if data.is_active is not None:
            language.is_active = data.is_active
        await db.commit()
        await db.refresh(language)
        return language

    async def delete_language(self, db: AsyncSession, language_id: int) -> None:
        language = await self.get_language(db, language_id)
        localised = (await db.execute(
            select(func.count()).select_from(MovieLanguage)
            .where(MovieLanguage.language_id == language.id))).scalar_one()
        screenings = (await db.execute(
            select(func.count()).select_from(Screening)
            .where(or_(Screening.language_id == language.id,
                       Screening.subtitle_language_id == language.id)))).scalar_one()
        if localised or screenings:
            raise ConflictError("Language is used by movies or screenings")
        await db.delete(language)
        await db.commit()


crud_language = CRUDLanguage()
