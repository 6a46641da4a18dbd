from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from cinema_admin.core.exceptions import ConflictError, NotFoundError
from cinema_admin.crud.base import apply_patch
from cinema_admin.models.theater import Screen, Theater
from cinema_admin.schemas.common import PageParams
from cinema_admin.schemas.theater import TheaterRequest, TheaterUpdate


class CRUDTheater:
    def _query(self):
        return (select(Theater)
                .options(selectinload(Theater.screens))
                .execution_options(populate_existing=True))

    async def get_theater(self, db: AsyncSession, theater_id: int, active_only: bool = False) -> Theater:
        stmt = self._query().where(Theater.id == theater_id)
        if active_only:
            stmt = stmt.where(Theater.is_active.is_(True))
        result = await db.execute(stmt)
        theater = result.scalar_one_or_none()
        if theater is None:
            raise NotFoundError("Theater not found")
        return theater

    async def get_theaters(self, db: AsyncSession, params: PageParams, city: str | None = None,
                           active_only: bool = True):
        filters = []
        if active_only:
            filters.append(Theater.is_active.is_(True))
        if city:
            filters.append(func.lower(Theater.city) == city.lower())
        total = (await db.execute(select(func.count()).select_from(Theater).where(*filters))).scalar_one()
        result = await db.execute(
            self._query().where(*filters).order_by(Theater.name, Theater.id)
            .offset(params.offset).limit(params.limit))
        return result.scalars().all(), total

    async def get_theater_screens(self, db: AsyncSession, theater_id: int):
        await self.get_theater(db, theater_id, active_only=True)
        result = await db.execute(
            select(Screen)
            .where(Screen.theater_id == theater_id, Screen.is_active.is_(True))
            .options(selectinload(Screen.theater))
            .order_by(Screen.name)
        )
        return result.scalars().all()

    async def create_theater(self, db: AsyncSession, data: TheaterRequest) -> Theater:
        theater = Theater(**data.model_dump(exclude={"is_active"}),
                          is_active=True if data.is_active is None else data.is_active)
        db.add(theater)
        await db.commit()
        return await self.get_theater(db, theater.id)

    async def update_theater(self, db: AsyncSession, theater_id: int, data: TheaterUpdate) -> Theater:
        theater = await self.get_theater(db, theater_id)
        apply_patch(theater, data, ("name", "is_active"))
        await db.commit()
        return await self.get_theater(db, theater.id)

    async def toggle_theater(self, db: AsyncSession, theater_id: int) -> Theater:
        theater = await self.get_theater(db, theater_id)
        theater.is_active = not theater.is_active
        await db.commit()
        return await self.get_theater(db, theater.id)

    async def delete_theater(self, db: AsyncSession, theater_id: int) -> None:
        theater = await self.get_theater(db, theater_id)
        if theater.screens:
            raise ConflictError("Theater still has screens, delete them first")
        await db.delete(theater)
        await db.commit()


crud_theater = CRUDTheater()
