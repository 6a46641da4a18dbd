from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from cinema_admin.core.exceptions import ConflictError, NotFoundError
from cinema_admin.models.movie import Genre, movie_genres
from cinema_admin.schemas.genre import GenreRequest


class CRUDGenre:
    async def get_genre(self, db: AsyncSession, genre_id: int) -> Genre:
        genre = await db.get(Genre, genre_id)
        if genre is None:
            raise NotFoundError("Genre not found")
        return genre

    async def get_all_genres(self, db: AsyncSession):
        result = await db.execute(select(Genre).order_by(Genre.name))
        return result.scalars().all()

    async def _check_name(self, db: AsyncSession, name: str, genre_id: int | None = None):
        result = await db.execute(select(Genre).where(func.lower(Genre.name) == name.lower()))
        existing = result.scalar_one_or_none()
        if existing is not None and existing.id != genre_id:
            raise ConflictError("Genre with this name already exists")

    async def create_genre(self, db: AsyncSession, data: GenreRequest) -> Genre:
        await self._check_name(db, data.name)
        genre = Genre(name=data.name)
        db.add(genre)
        await db.commit()
        await db.refresh(genre)
        return genre

    async def update_genre(self, db: AsyncSession, genre_id: int, data: GenreRequest) -> Genre:
        genre = await self.get_genre(db, genre_id)
        await self._check_name(db, data.name, genre.id)
        genre.name = data.name
        await db.commit()
        await db.refresh(genre)
        return genre

    async def delete_genre(self, db: AsyncSession, genre_id: int) -> None:
        genre = await self.get_genre(db, genre_id)
        used = (await db.execute(
            select(func.count()).select_from(movie_genres).where(movie_genres.c.genre_id == genre.id))).scalar_one()
        if used:
            raise ConflictError("Genre is used by one or more movies")
        await db.delete(genre)
        await db.commit()


crud_genre = CRUDGenre()
