from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from cinema_admin.models.movie import Movie
from cinema_admin.models.screening import Screening
from cinema_admin.models.theater import Screen, Theater
from cinema_admin.models.user import User


async def get_counts(db: AsyncSession) -> dict:
    async def count(model, *where) -> int:
        return (await db.execute(select(func.count()).select_from(model).where(*where))).scalar_one()

    return {
        "users": await count(User, User.deleted_at.is_(None)),
        "theaters": await count(Theater),
        "active_theaters": await count(Theater, Theater.is_active.is_(True)),
        "screens": await count(Screen),
        "movies": await count(Movie, Movie.deleted_at.is_(None)),
        "screenings": await count(Screening, Screening.deleted_at.is_(None)),
        "active_screenings": await count(
            Screening, Screening.deleted_at.is_(None), Screening.is_active.is_(True)),
    }
