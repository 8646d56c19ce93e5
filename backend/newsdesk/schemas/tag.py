from typing import Optional
from pydantic import BaseModel, Field, field_validator

from newsdesk.schemas.common import PagingParams


class TagCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    note: Optional[str] = Field(None, max_length=1000)

    @field_validator("name")
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Tag name must not be empty")
        return v.strip()


class TagUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    note: Optional[str] = Field(None, max_length=1000)

    @field_validator("name")
    def name_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if not v.strip():
            raise ValueError("Tag name must not be empty")
        return v.strip()


class TagQuery(PagingParams):
    name: Optional[str] = None


class Tag(BaseModel):
    id: int
    name: str
    note: Optional[str] = None

    class Config:
        from_attributes = True


class TagOption(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True
