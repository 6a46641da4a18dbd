import logging
from typing import Optional
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from cinema_admin.core.exceptions import ConflictError, NotFoundError, ValidationError
from cinema_admin.crud.base import apply_patch
from cinema_admin.models.movie import Genre, Language, Movie, MovieCast, MovieLanguage, Person
from cinema_admin.schemas.common import PageParams
from cinema_admin.schemas.movie import (CastMember, LocalizedMovieResponse, MovieCreate, MovieLanguageRequest,
                                        MovieLanguageUpdate, MovieResponse, MovieUpdate)


MOVIE_REQUIRED = ("original_title", "duration_minutes", "release_date", "is_active")


class CRUDMovie:
    def _query(self):
        return (
            select(Movie)
            .where(Movie.deleted_at.is_(None))
            .options(
                selectinload(Movie.genres),
                selectinload(Movie.cast).selectinload(MovieCast.person),
                selectinload(Movie.movie_languages).selectinload(MovieLanguage.language),
            )
            .execution_options(populate_existing=True)
        )

    async def get_movie(self, db: AsyncSession, movie_id: int, active_only: bool = False) -> Movie:
        stmt = self._query().where(Movie.id == movie_id)
        if active_only:
            stmt = stmt.where(Movie.is_active.is_(True))
        result = await db.execute(stmt)
        movie = result.scalar_one_or_none()
        if movie is None:
            raise NotFoundError("Movie not found")
        return movie

    async def get_movies(self, db: AsyncSession, params: PageParams, active_only: bool = True):
        count_stmt = select(func.count()).select_from(Movie).where(Movie.deleted_at.is_(None))
        stmt = self._query()
        if active_only:
            count_stmt = count_stmt.where(Movie.is_active.is_(True))
            stmt = stmt.where(Movie.is_active.is_(True))
        total = (await db.execute(count_stmt)).scalar_one()
        result = await db.execute(
            stmt.order_by(Movie.release_date.desc(), Movie.id).offset(params.offset).limit(params.limit))
        return result.scalars().all(), total

    async def get_localized_movie(self, db: AsyncSession, movie_id: int, lang: Optional[str]) -> LocalizedMovieResponse:
        """Public view; title and description come from the requested language when it exists."""
        movie = await self.get_movie(db, movie_id, active_only=True)
        payload = MovieResponse.model_validate(movie).model_dump()
        payload.update(title=movie.original_title, language_code=None)
        if lang:
            for entry in movie.movie_languages:
                if entry.language.code.lower() == lang.lower():
                    payload.update(
                        title=entry.title,
                        description=entry.description or movie.description,
                        language_code=entry.language.code,
                    )
                    break
        return LocalizedMovieResponse.model_validate(payload)

    async def _load_genres(self, db: AsyncSession, genre_ids: list[int]) -> list[Genre]:
        ids = set(genre_ids)
        if not ids:
            return []
        result = await db.execute(select(Genre).where(Genre.id.in_(ids)))
        genres = result.scalars().all()
        if len(genres) != len(ids):
            raise ValidationError("One or more genre IDs are invalid")
        return list(genres)

    async def _build_cast(self, db: AsyncSession, cast: list[CastMember]) -> list[MovieCast]:
        ids = {member.person_id for member in cast}
        if ids:
            found = (await db.execute(select(func.count()).select_from(Person).where(Person.id.in_(ids)))).scalar_one()
            if found != len(ids):
                raise ValidationError("One or more person IDs are invalid")
        keys = {(m.person_id, m.role) for m in cast}
        if len(keys) != len(cast):
            raise ValidationError("Duplicate cast entry")
        return [
            MovieCast(person_id=m.person_id, role=m.role, character_name=m.character_name)
            for m in cast
        ]

    async def create_movie(self, db: AsyncSession, data: MovieCreate) -> Movie:
        genres = await self._load_genres(db, data.genre_ids)
        cast = await self._build_cast(db, data.cast)
        try:
            movie = Movie(
                **data.model_dump(exclude={"genre_ids", "cast"}),
                genres=genres,
                cast=cast,
                movie_languages=[],
            )
            db.add(movie)
            await db.commit()
        except Exception as e:
            logging.error(f"Failed to create movie: {e}", exc_info=True)
            await db.rollback()
            raise
        return await self.get_movie(db, movie.id)

    async def update_movie(self, db: AsyncSession, movie_id: int, data: MovieUpdate) -> Movie:
        movie = await self.get_movie(db, movie_id)
        try:
            apply_patch(movie, data, MOVIE_REQUIRED, exclude={"genre_ids", "cast"})
            if data.genre_ids is not None:
                movie.genres = await self._load_genres(db, data.genre_ids)
            if data.cast is not None:
                new_cast = await self._build_cast(db, data.cast)
                # flush the orphan deletes before inserting rows that may reuse their keys
                movie.cast = []
                await db.flush()
                movie.cast = new_cast
            await db.commit()
        except Exception as e:
            logging.error(f"Failed to update movie {movie_id}: {e}", exc_info=True)
            await db.rollback()
            raise
        return await self.get_movie(db, movie.id)

    async def delete_movie(self, db: AsyncSession, movie_id: int) -> None:
        movie = await self.get_movie(db, movie_id)
        movie.soft_delete()
        await db.commit()


class CRUDMovieLanguage:
    async def _get(self, db: AsyncSession, movie_id: int, entry_id: int) -> MovieLanguage:
        result = await db.execute(
            select(MovieLanguage)
            .where(MovieLanguage.id == entry_id, MovieLanguage.movie_id == movie_id)
            .options(selectinload(MovieLanguage.language))
            .execution_options(populate_existing=True)
        )
        entry = result.scalar_one_or_none()
        if entry is None:
            raise NotFoundError("Movie language not found")
        return entry

    async def get_movie_languages(self, db: AsyncSession, movie_id: int):
        movie = await crud_movie.get_movie(db, movie_id)
        return movie.movie_languages

    async def create_movie_language(self, db: AsyncSession, movie_id: int, data: MovieLanguageRequest) -> MovieLanguage:
        await crud_movie.get_movie(db, movie_id)
        if await db.get(Language, data.language_id) is None:
            raise ValidationError("Invalid language ID")
        duplicate = (await db.execute(
            select(MovieLanguage.id)
            .where(MovieLanguage.movie_id == movie_id, MovieLanguage.language_id == data.language_id)
        )).scalar_one_or_none()
        if duplicate is not None:
            raise ConflictError("Movie already has an entry for this language")
        entry = MovieLanguage(movie_id=movie_id, **data.model_dump())
        db.add(entry)
        await db.commit()
        return await self._get(db, movie_id, entry.id)

    async def update_movie_language(self, db: AsyncSession, movie_id: int, entry_id: int,
                                    data: MovieLanguageUpdate) -> MovieLanguage:
        entry = await self._get(db, movie_id, entry_id)
        apply_patch(entry, data, ("title", "has_audio", "has_subtitles"))
        await db.commit()
        return await self._get(db, movie_id, entry.id)

    async def delete_movie_language(self, db: AsyncSession, movie_id: int, entry_id: int) -> None:
        entry = await self._get(db, movie_id, entry_id)
        await db.delete(entry)
        await db.commit()


crud_movie = CRUDMovie()
crud_movie_language = CRUDMovieLanguage()
