from pydantic import BaseModel, Field


class RoleBase(BaseModel):
    name: str = Field(min_length=2, max_length=50)


class RoleCreate(RoleBase):
    pass


class RoleUpdate(RoleBase):
    pass


class RoleResponse(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True
