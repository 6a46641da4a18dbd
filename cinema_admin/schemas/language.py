from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class LanguageRequest(BaseModel):
    code: str = Field(min_length=2, max_length=5)
    name: str = Field(min_length=1, max_length=100)
    native_name: Optional[str] = Field(default=None, max_length=100)
    is_active: Optional[bool] = None


class LanguageResponse(BaseModel):
    id: int
    code: str
    name: str
    native_name: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class LanguageBrief(BaseModel):
    id: int
    code: str
    name: str

    class Config:
        from_attributes = True
