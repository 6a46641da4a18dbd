from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class TheaterRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    address: Optional[str] = Field(default=None, max_length=255)
    city: Optional[str] = Field(default=None, max_length=100)
    state: Optional[str] = Field(default=None, max_length=100)
    is_active: Optional[bool] = None


class TheaterUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    address: Optional[str] = Field(default=None, max_length=255)
    city: Optional[str] = Field(default=None, max_length=100)
    state: Optional[str] = Field(default=None, max_length=100)
    is_active: Optional[bool] = None


class TheaterScreenBrief(BaseModel):
    id: int
    name: str
    capacity: int
    is_active: bool

    class Config:
        from_attributes = True


class TheaterResponse(BaseModel):
    id: int
    name: str
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
    screens: list[TheaterScreenBrief] = []

    class Config:
        from_attributes = True


class TheaterBrief(BaseModel):
    id: int
    name: str
    city: Optional[str] = None

    class Config:
        from_attributes = True
