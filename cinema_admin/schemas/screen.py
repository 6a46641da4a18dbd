from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from cinema_admin.models.theater import SeatStatus
from cinema_admin.schemas.theater import TheaterBrief


class RowNaming(str, Enum):
    ALPHABETIC = "alphabetic"
    NUMERIC = "numeric"
    CUSTOM = "custom"


class SeatTypeInfo(BaseModel):
    name: str
    color: Optional[str] = None
    price: float = 0
    available: bool = True
    is_accessible: bool = False
    icon: Optional[str] = None
    description: Optional[str] = None


class SeatPosition(BaseModel):
    row: Optional[str] = None
    column: Optional[int] = Field(default=None, ge=1)
    type: str = "normal"
    number: Optional[str] = None
    price: float = Field(default=0, ge=0)
    is_accessible: bool = False
    custom_number: Optional[str] = None


class SeatLayoutConfig(BaseModel):
    rows: int = Field(ge=1)
    columns: int = Field(ge=1)
    numbering_scheme: str = "alphabetic"
    row_naming: RowNaming = RowNaming.ALPHABETIC
    custom_row_names: list[str] = []
    seat_types: dict[str, SeatTypeInfo] = {}
    layout: list[list[SeatPosition]]
    walkway_rows: list[int] = []
    walkway_cols: list[int] = []
    accessible_seats: list[str] = []
    pricing_tiers: dict[str, float] = {}


class ScreenCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    theater_id: int
    seat_layout: SeatLayoutConfig
    is_active: Optional[bool] = None


class ScreenUpdate(BaseModel):
    """seat_layout, when present, replaces every seat of the screen."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    seat_layout: Optional[SeatLayoutConfig] = None
    is_active: Optional[bool] = None


class SeatResponse(BaseModel):
    id: int
    screen_id: int
    seat_number: str
    row: str
    column: int
    seat_type: str
    status: SeatStatus
    price: float
    is_accessible: bool

    class Config:
        from_attributes = True


class ScreenResponse(BaseModel):
    id: int
    name: str
    theater_id: int
    capacity: int
    is_active: bool
    created_at: datetime
    updated_at: datetime
    theater: TheaterBrief

    class Config:
        from_attributes = True


class ScreenDetailResponse(ScreenResponse):
    seat_layout: SeatLayoutConfig
    seats: list[SeatResponse] = []
