from pydantic import BaseModel, Field


class GenreRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)


class GenreResponse(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True
