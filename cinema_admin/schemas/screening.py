from datetime import date, datetime, time
from typing import Optional
from pydantic import BaseModel, Field, model_validator

from cinema_admin.schemas.language import LanguageBrief


class ScreeningCreate(BaseModel):
    movie_id: int
    screen_id: int
    language_id: int
    subtitle_language_id: Optional[int] = None
    show_date: date
    show_time: time
    end_time: time
    base_price: float = Field(ge=0)
    premium_price: Optional[float] = Field(default=None, ge=0)
    # defaults to the screen capacity
    available_seats: Optional[int] = Field(default=None, ge=1)
    audio_format: Optional[str] = Field(default=None, max_length=20)
    video_format: Optional[str] = Field(default=None, max_length=20)

    @model_validator(mode="after")
    def check_times(self):
        if self.show_time >= self.end_time:
            raise ValueError("end_time must be after show_time")
        return self


class ScreeningUpdate(BaseModel):
    """Patch: only the fields present in the request body are applied."""
    movie_id: Optional[int] = None
    screen_id: Optional[int] = None
    language_id: Optional[int] = None
    subtitle_language_id: Optional[int] = None
    show_date: Optional[date] = None
    show_time: Optional[time] = None
    end_time: Optional[time] = None
    base_price: Optional[float] = Field(default=None, ge=0)
    premium_price: Optional[float] = Field(default=None, ge=0)
    available_seats: Optional[int] = Field(default=None, ge=0)
    audio_format: Optional[str] = Field(default=None, max_length=20)
    video_format: Optional[str] = Field(default=None, max_length=20)
    is_active: Optional[bool] = None


class ScreeningFilters(BaseModel):
    movie_id: Optional[int] = None
    language_id: Optional[int] = None
    show_date: Optional[date] = None
    theater_id: Optional[int] = None
    screen_id: Optional[int] = None


class ScreeningMovieBrief(BaseModel):
    id: int
    original_title: str
    duration_minutes: int

    class Config:
        from_attributes = True


class ScreeningScreenBrief(BaseModel):
    id: int
    name: str
    theater_id: int

    class Config:
        from_attributes = True


class ScreeningResponse(BaseModel):
    id: int
    movie_id: int
    screen_id: int
    language_id: int
    subtitle_language_id: Optional[int] = None
    show_date: date
    show_time: time
    end_time: time
    base_price: float
    premium_price: Optional[float] = None
    available_seats: int
    audio_format: Optional[str] = None
    video_format: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
    movie: ScreeningMovieBrief
    screen: ScreeningScreenBrief
    language: LanguageBrief
    subtitle_language: Optional[LanguageBrief] = None

    class Config:
        from_attributes = True
