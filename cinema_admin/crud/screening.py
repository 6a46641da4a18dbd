import logging
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from cinema_admin.core.exceptions import NotFoundError, ValidationError
from cinema_admin.crud.base import apply_patch
from cinema_admin.models.movie import Language, Movie
from cinema_admin.models.screening import Screening
from cinema_admin.models.theater import Screen
from cinema_admin.schemas.common import PageParams
from cinema_admin.schemas.screening import ScreeningCreate, ScreeningFilters, ScreeningUpdate
from cinema_admin.services.scheduling import ensure_no_conflict


SCHEDULE_FIELDS = {"screen_id", "show_date", "show_time", "end_time", "is_active"}
SCREENING_REQUIRED = ("movie_id", "screen_id", "language_id", "show_date", "show_time", "end_time",
                      "base_price", "available_seats", "is_active")


class CRUDScreening:
    def _query(self):
        return (
            select(Screening)
            .where(Screening.deleted_at.is_(None))
            .options(
                selectinload(Screening.movie),
                selectinload(Screening.screen),
                selectinload(Screening.language),
                selectinload(Screening.subtitle_language),
            )
            .execution_options(populate_existing=True)
        )

    async def get_screening(self, db: AsyncSession, screening_id: int, active_only: bool = False) -> Screening:
        stmt = self._query().where(Screening.id == screening_id)
        if active_only:
            stmt = stmt.where(Screening.is_active.is_(True))
        result = await db.execute(stmt)
        screening = result.scalar_one_or_none()
        if screening is None:
            raise NotFoundError("Screening not found")
        return screening

    async def get_screenings(self, db: AsyncSession, filters: ScreeningFilters, params: PageParams):
        """Bookable screenings: active, not deleted, seats left. Ordered by date then start time."""
        conditions = [
            Screening.deleted_at.is_(None),
            Screening.is_active.is_(True),
            Screening.available_seats > 0,
        ]
        if filters.movie_id is not None:
            conditions.append(Screening.movie_id == filters.movie_id)
        if filters.language_id is not None:
            conditions.append(Screening.language_id == filters.language_id)
        if filters.show_date is not None:
            conditions.append(Screening.show_date == filters.show_date)
        if filters.screen_id is not None:
            conditions.append(Screening.screen_id == filters.screen_id)
        if filters.theater_id is not None:
            conditions.append(Screening.screen_id.in_(
                select(Screen.id).where(Screen.theater_id == filters.theater_id)))

        total = (await db.execute(select(func.count()).select_from(Screening).where(*conditions))).scalar_one()
        result = await db.execute(
            self._query().where(*conditions)
            .order_by(Screening.show_date, Screening.show_time, Screening.id)
            .offset(params.offset).limit(params.limit)
        )
        return result.scalars().all(), total

    async def _check_references(self, db: AsyncSession, movie_id: int, screen_id: int,
                                language_id: int, subtitle_language_id: int | None) -> Screen:
        movie = await db.get(Movie, movie_id)
        if movie is None or movie.is_deleted:
            raise ValidationError("Invalid movie ID")
        screen = await db.get(Screen, screen_id)
        if screen is None:
            raise ValidationError("Invalid screen ID")
        if await db.get(Language, language_id) is None:
            raise ValidationError("Invalid language ID")
        if subtitle_language_id is not None and await db.get(Language, subtitle_language_id) is None:
            raise ValidationError("Invalid subtitle language ID")
        return screen

    async def create_screening(self, db: AsyncSession, data: ScreeningCreate) -> Screening:
        screen = await self._check_references(
            db, data.movie_id, data.screen_id, data.language_id, data.subtitle_language_id)
        try:
            await ensure_no_conflict(db, data.screen_id, data.show_date, data.show_time, data.end_time)
            values = data.model_dump(exclude={"available_seats"})
            screening = Screening(
                **values,
                available_seats=data.available_seats if data.available_seats is not None else screen.capacity,
            )
            db.add(screening)
            await db.commit()
        except Exception as e:
            logging.error(f"Failed to create screening: {e}")
            await db.rollback()
            raise
        return await self.get_screening(db, screening.id)

    async def update_screening(self, db: AsyncSession, screening_id: int, data: ScreeningUpdate) -> Screening:
        screening = await self.get_screening(db, screening_id)
        try:
            applied = apply_patch(screening, data, SCREENING_REQUIRED)
            await self._check_references(
                db, screening.movie_id, screening.screen_id, screening.language_id, screening.subtitle_language_id)
            if screening.show_time >= screening.end_time:
                raise ValidationError("end_time must be after show_time")
            if SCHEDULE_FIELDS & applied.keys() and screening.is_active:
                await ensure_no_conflict(db, screening.screen_id, screening.show_date, screening.show_time,
                                         screening.end_time, exclude_id=screening.id)
            await db.commit()
        except Exception as e:
            logging.error(f"Failed to update screening {screening_id}: {e}")
            await db.rollback()
            raise
        return await self.get_screening(db, screening.id)

    async def delete_screening(self, db: AsyncSession, screening_id: int) -> None:
        screening = await self.get_screening(db, screening_id)
        screening.soft_delete()
        await db.commit()


crud_screening = CRUDScreening()
