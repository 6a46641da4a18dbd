from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, Field

from cinema_admin.models.movie import CastRole, MovieRating
from cinema_admin.schemas.genre import GenreResponse
from cinema_admin.schemas.language import LanguageBrief


class CastMember(BaseModel):
    person_id: int
    role: CastRole = CastRole.ACTOR
    character_name: Optional[str] = Field(default=None, max_length=255)


class MovieCreate(BaseModel):
    original_title: str = Field(min_length=1, max_length=255)
    duration_minutes: int = Field(ge=1)
    release_date: date
    rating: Optional[MovieRating] = None
    description: Optional[str] = None
    poster_url: Optional[str] = Field(default=None, max_length=500)
    genre_ids: list[int] = []
    cast: list[CastMember] = []


class MovieUpdate(BaseModel):
    """Patch. genre_ids / cast, when sent, replace the whole association set."""
    original_title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    duration_minutes: Optional[int] = Field(default=None, ge=1)
    release_date: Optional[date] = None
    rating: Optional[MovieRating] = None
    description: Optional[str] = None
    poster_url: Optional[str] = Field(default=None, max_length=500)
    is_active: Optional[bool] = None
    genre_ids: Optional[list[int]] = None
    cast: Optional[list[CastMember]] = None


class PersonResponse(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class CastResponse(BaseModel):
    person: PersonResponse
    role: CastRole
    character_name: Optional[str] = None

    class Config:
        from_attributes = True


class MovieLanguageRequest(BaseModel):
    language_id: int
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    has_audio: bool = False
    has_subtitles: bool = False
    audio_format: Optional[str] = Field(default=None, max_length=50)
    subtitle_format: Optional[str] = Field(default=None, max_length=50)


class MovieLanguageUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    has_audio: Optional[bool] = None
    has_subtitles: Optional[bool] = None
    audio_format: Optional[str] = Field(default=None, max_length=50)
    subtitle_format: Optional[str] = Field(default=None, max_length=50)


class MovieLanguageResponse(BaseModel):
    id: int
    movie_id: int
    language_id: int
    title: str
    description: Optional[str] = None
    has_audio: bool
    has_subtitles: bool
    audio_format: Optional[str] = None
    subtitle_format: Optional[str] = None
    language: LanguageBrief

    class Config:
        from_attributes = True


class MovieResponse(BaseModel):
    id: int
    original_title: str
    duration_minutes: int
    release_date: date
    rating: Optional[MovieRating] = None
    description: Optional[str] = None
    poster_url: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
    genres: list[GenreResponse] = []
    cast: list[CastResponse] = []
    movie_languages: list[MovieLanguageResponse] = []

    class Config:
        from_attributes = True


class LocalizedMovieResponse(MovieResponse):
    title: str
    language_code: Optional[str] = None
