from datetime import date, time
from typing import Iterable, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from cinema_admin.core.exceptions import SchedulingConflictError, ValidationError
from cinema_admin.models.screening import Screening
from cinema_admin.models.theater import Screen


def intervals_overlap(a_start: time, a_end: time, b_start: time, b_end: time) -> bool:
    """Half-open intervals: [10:00, 12:00) and [12:00, 14:00) do not overlap."""
    return a_start < b_end and b_start < a_end


def find_conflict(show_time: time, end_time: time, existing: Iterable[Screening]) -> Optional[Screening]:
    for screening in existing:
        if intervals_overlap(show_time, end_time, screening.show_time, screening.end_time):
            return screening
    return None


async def lock_screen(db: AsyncSession, screen_id: int) -> None:
    """
    Take the screen row's write lock for the rest of the transaction.

    The self-assigning UPDATE locks the row on Postgres like SELECT ... FOR
    UPDATE would, and also takes the database write lock on SQLite, which
    ignores FOR UPDATE.
    """
    result = await db.execute(
        update(Screen)
        .where(Screen.id == screen_id)
        .values(updated_at=Screen.updated_at)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        raise ValidationError("Invalid screen ID")


async def ensure_no_conflict(db: AsyncSession, screen_id: int, show_date: date, show_time: time,
                             end_time: time, exclude_id: Optional[int] = None) -> None:
    """
    Raise SchedulingConflictError if an active screening on the same screen
    and date overlaps [show_time, end_time).

    Locks the screen first, so the caller must commit or roll back right
    after inserting or moving the screening. Two requests racing for one
    slot are serialized and the second one sees the first one's row.
    """
    if show_time >= end_time:
        raise ValidationError("end_time must be after show_time")

    await lock_screen(db, screen_id)

    stmt = (
        select(Screening)
        .where(
            Screening.screen_id == screen_id,
            Screening.show_date == show_date,
            Screening.is_active.is_(True),
            Screening.deleted_at.is_(None),
        )
        .order_by(Screening.show_time)
    )
    if exclude_id is not None:
        stmt = stmt.where(Screening.id != exclude_id)
    result = await db.execute(stmt)

    conflict = find_conflict(show_time, end_time, result.scalars().all())
    if conflict is not None:
        raise SchedulingConflictError(conflict.id)
