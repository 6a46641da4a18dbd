from datetime import date, time
from typing import Optional
from sqlalchemy import BigInteger, Boolean, Date, Float, ForeignKey, Index, Integer, String, Time
from sqlalchemy.orm import Mapped, mapped_column, relationship
from cinema_admin.db.base import Base, BigIntPK
from cinema_admin.models.mixins.timestamp import SoftDeleteMixin, TimestampMixin
from cinema_admin.models.movie import Language, Movie
from cinema_admin.models.theater import Screen


class Screening(Base, TimestampMixin, SoftDeleteMixin):
    __table_args__ = (
        Index("ix_screenings_screen_date", "screen_id", "show_date"),
    )
    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    movie_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("movies.id"), index=True, nullable=False)
    screen_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("screens.id"), nullable=False)
    language_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("languages.id"), nullable=False)
    subtitle_language_id: Mapped[Optional[int]] = mapped_column(BigInteger, ForeignKey("languages.id"), nullable=True)
    show_date: Mapped[date] = mapped_column(Date, nullable=False)
    # [show_time, end_time) on show_date
    show_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    base_price: Mapped[float] = mapped_column(Float, nullable=False)
    premium_price: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    available_seats: Mapped[int] = mapped_column(Integer, nullable=False)
    audio_format: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    video_format: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    movie: Mapped["Movie"] = relationship()
    screen: Mapped["Screen"] = relationship()
    language: Mapped["Language"] = relationship(foreign_keys=[language_id])
    subtitle_language: Mapped[Optional["Language"]] = relationship(foreign_keys=[subtitle_language_id])
