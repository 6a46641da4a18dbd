from enum import Enum
from typing import Optional
from sqlalchemy import JSON, BigInteger, Boolean, Float, ForeignKey, Integer, String, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from cinema_admin.db.base import Base, BigIntPK
from cinema_admin.models.mixins.timestamp import TimestampMixin


class SeatStatus(str, Enum):
    AVAILABLE = "available"
    BOOKED = "booked"
    BLOCKED = "blocked"


class Theater(Base, TimestampMixin):
    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(100), index=True, nullable=True)
    state: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    screens: Mapped[list["Screen"]] = relationship(back_populates="theater")


class Screen(Base, TimestampMixin):
    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    theater_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("theaters.id"), index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # the SeatLayoutConfig the seats were expanded from
    seat_layout: Mapped[dict] = mapped_column(JSON, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    theater: Mapped["Theater"] = relationship(back_populates="screens")
    seats: Mapped[list["Seat"]] = relationship(
        back_populates="screen", cascade="all, delete-orphan", passive_deletes=True, order_by="Seat.id")


class Seat(Base, TimestampMixin):
    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    screen_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("screens.id", ondelete="CASCADE"), index=True, nullable=False)
    seat_number: Mapped[str] = mapped_column(String(20), nullable=False)
    row: Mapped[str] = mapped_column(String(20), nullable=False)
    column: Mapped[int] = mapped_column(Integer, nullable=False)
    seat_type: Mapped[str] = mapped_column(String(50), nullable=False, default="normal")
    status: Mapped[SeatStatus] = mapped_column(SAEnum(
        SeatStatus, name="seat_status_enum", values_callable=lambda e: [m.value for m in e]),
        nullable=False, default=SeatStatus.AVAILABLE)
    price: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    is_accessible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    screen: Mapped["Screen"] = relationship(back_populates="seats")
