from datetime import date
from enum import Enum
from typing import Optional
from sqlalchemy import BigInteger, Boolean, Column, Date, ForeignKey, Integer, String, Table, Text, UniqueConstraint, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from cinema_admin.db.base import Base, BigIntPK
from cinema_admin.models.mixins.timestamp import SoftDeleteMixin, TimestampMixin


class MovieRating(str, Enum):
    U = "U"
    UA = "U/A"
    A = "A"
    S = "S"


class CastRole(str, Enum):
    ACTOR = "Actor"
    DIRECTOR = "Director"
    PRODUCER = "Producer"


movie_genres = Table(
    "movie_genres",
    Base.metadata,
    Column("movie_id", BigInteger, ForeignKey("movies.id", ondelete="CASCADE"), primary_key=True),
    Column("genre_id", BigInteger, ForeignKey("genres.id", ondelete="CASCADE"), primary_key=True),
)


class Genre(Base):
    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)


class Person(Base):
    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class MovieCast(Base):
    movie_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("movies.id", ondelete="CASCADE"), primary_key=True)
    person_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("persons.id", ondelete="CASCADE"), primary_key=True)
    role: Mapped[CastRole] = mapped_column(SAEnum(CastRole, name="cast_role_enum"), primary_key=True)
    character_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    movie: Mapped["Movie"] = relationship(back_populates="cast")
    person: Mapped["Person"] = relationship()


class Language(Base, TimestampMixin):
    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    code: Mapped[str] = mapped_column(String(5), unique=True, index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    native_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class Movie(Base, TimestampMixin, SoftDeleteMixin):
    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    original_title: Mapped[str] = mapped_column(String(255), nullable=False)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    release_date: Mapped[date] = mapped_column(Date, nullable=False)
    rating: Mapped[Optional[MovieRating]] = mapped_column(
        SAEnum(MovieRating, name="movie_rating_enum", values_callable=lambda e: [m.value for m in e]), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    poster_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    genres: Mapped[list["Genre"]] = relationship(secondary=movie_genres)
    cast: Mapped[list["MovieCast"]] = relationship(back_populates="movie", cascade="all, delete-orphan")
    movie_languages: Mapped[list["MovieLanguage"]] = relationship(
        back_populates="movie", cascade="all, delete-orphan")


class MovieLanguage(Base, TimestampMixin):
    __table_args__ = (
        UniqueConstraint("movie_id", "language_id", name="uix_movie_language_unique"),
    )
    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    movie_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("movies.id", ondelete="CASCADE"), index=True, nullable=False)
    language_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("languages.id"), index=True, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    has_audio: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    has_subtitles: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    audio_format: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    subtitle_format: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    movie: Mapped["Movie"] = relationship(back_populates="movie_languages")
    language: Mapped["Language"] = relationship()
