import logging
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from cinema_admin.core.exceptions import ConflictError, NotFoundError
from cinema_admin.crud.base import apply_patch
from cinema_admin.models.screening import Screening
from cinema_admin.models.theater import Screen, Seat, Theater
from cinema_admin.schemas.common import PageParams
from cinema_admin.schemas.screen import ScreenCreate, ScreenUpdate, SeatLayoutConfig
from cinema_admin.services.seat_layout import expand_layout


class CRUDScreen:
    def _query(self, with_seats: bool = False):
        options = [selectinload(Screen.theater)]
        if with_seats:
            options.append(selectinload(Screen.seats))
        return select(Screen).options(*options).execution_options(populate_existing=True)

    async def get_screen(self, db: AsyncSession, screen_id: int, with_seats: bool = True,
                         active_only: bool = False) -> Screen:
        stmt = self._query(with_seats).where(Screen.id == screen_id)
        if active_only:
            stmt = stmt.where(Screen.is_active.is_(True))
        result = await db.execute(stmt)
        screen = result.scalar_one_or_none()
        if screen is None:
            raise NotFoundError("Screen not found")
        return screen

    async def get_screens(self, db: AsyncSession, params: PageParams, theater_id: int | None = None):
        filters = [Screen.theater_id == theater_id] if theater_id is not None else []
        total = (await db.execute(select(func.count()).select_from(Screen).where(*filters))).scalar_one()
        result = await db.execute(
            self._query().where(*filters).order_by(Screen.theater_id, Screen.name)
            .offset(params.offset).limit(params.limit))
        return result.scalars().all(), total

    def _add_seats(self, db: AsyncSession, screen: Screen, layout: SeatLayoutConfig) -> int:
        expansion = expand_layout(layout)
        db.add_all([
            Seat(
                screen_id=screen.id,
                seat_number=seat.seat_number,
                row=seat.row,
                column=seat.column,
                seat_type=seat.seat_type,
                status=seat.status,
                price=seat.price,
                is_accessible=seat.is_accessible,
            )
            for seat in expansion.seats
        ])
        return expansion.capacity

    async def create_screen(self, db: AsyncSession, data: ScreenCreate) -> Screen:
        if await db.get(Theater, data.theater_id) is None:
            raise NotFoundError("Theater not found")
        # validate before anything is written
        expand_layout(data.seat_layout)
        try:
            screen = Screen(
                name=data.name,
                theater_id=data.theater_id,
                seat_layout=data.seat_layout.model_dump(mode="json"),
                is_active=True if data.is_active is None else data.is_active,
            )
            db.add(screen)
            await db.flush()
            screen.capacity = self._add_seats(db, screen, data.seat_layout)
            await db.commit()
        except Exception as e:
            logging.error(f"Failed to create screen: {e}", exc_info=True)
            await db.rollback()
            raise
        return await self.get_screen(db, screen.id)

    async def update_screen(self, db: AsyncSession, screen_id: int, data: ScreenUpdate) -> Screen:
        """A new seat_layout wipes every seat of the screen and expands the layout again."""
        screen = await self.get_screen(db, screen_id, with_seats=False)
        if data.seat_layout is not None:
            expand_layout(data.seat_layout)
        try:
            apply_patch(screen, data, ("name", "is_active"), exclude={"seat_layout"})
            if data.seat_layout is not None:
                await db.execute(delete(Seat).where(Seat.screen_id == screen.id))
                screen.seat_layout = data.seat_layout.model_dump(mode="json")
                screen.capacity = self._add_seats(db, screen, data.seat_layout)
            await db.commit()
        except Exception as e:
            logging.error(f"Failed to update screen {screen_id}: {e}", exc_info=True)
            await db.rollback()
            raise
        return await self.get_screen(db, screen.id)

    async def delete_screen(self, db: AsyncSession, screen_id: int) -> None:
        screen = await self.get_screen(db, screen_id, with_seats=False)
        # soft deleted screenings still reference the screen
        scheduled = (await db.execute(
            select(func.count()).select_from(Screening).where(Screening.screen_id == screen.id))).scalar_one()
        if scheduled:
            raise ConflictError("Screen has screenings and cannot be deleted")
        try:
            await db.execute(delete(Seat).where(Seat.screen_id == screen.id))
            await db.delete(screen)
            await db.commit()
        except Exception as e:
            logging.error(f"Failed to delete screen {screen_id}: {e}", exc_info=True)
            await db.rollback()
            raise


crud_screen = CRUDScreen()
