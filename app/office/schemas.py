# app/office/schemas.py
from pydantic import BaseModel, Field

class OfficeCreate(BaseModel):
    name: str = Field(..., min_length=1)
    is_external: bool = False

class OfficeOut(BaseModel):
    id: int
    name: str
    is_external: bool

    model_config = {"from_attributes": True}

class MemberAdd(BaseModel):
    user_id: int
    role: str | None = None

class MemberOut(BaseModel):
    user_id: int
    office_id: int
    role: str | None = None

    model_config = {"from_attributes": True}

class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1)
    office_id: int
    external_office_id: int | None = None

class CategoryOut(BaseModel):
    id: int
    name: str
    office_id: int
    external_office_id: int | None = None

    model_config = {"from_attributes": True}
