from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from newsdesk.schemas.common import PagingParams


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    parent_id: Optional[int] = None
    is_active: bool = True

    @field_validator("name")
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Category name must not be empty")
        return v.strip()


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    parent_id: Optional[int] = None
    is_active: Optional[bool] = None

    @field_validator("name")
    def name_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if not v.strip():
            raise ValueError("Category name must not be empty")
        return v.strip()


class CategoryQuery(PagingParams):
    name: Optional[str] = None
    parent_id: Optional[int] = None
    is_active: Optional[bool] = None
    # Filters on the ancestor chain rather than the category's own flag
    effective_active: Optional[bool] = None


class DropdownQuery(BaseModel):
    include_inactive: bool = False
    parent_only: bool = False


class ParentCategory(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class Category(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    parent: Optional[ParentCategory] = None
    is_active: bool

    class Config:
        from_attributes = True


class CategoryNode(BaseModel):
    id: int
    name: str
    children: List['CategoryNode'] = []


# Resolve forward reference
CategoryNode.model_rebuild()
