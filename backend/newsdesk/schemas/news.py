from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from newsdesk.models.news import NewsStatus
from newsdesk.schemas.common import PagingParams


class NewsCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=400)
    headline: Optional[str] = Field(None, max_length=150)
    content: str = Field(..., min_length=1)
    source: Optional[str] = Field(None, max_length=400)
    category_id: int = Field(..., gt=0)
    status: NewsStatus = NewsStatus.ACTIVE
    tag_ids: Optional[List[int]] = None

    @field_validator("title", "content")
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v


class NewsUpdate(BaseModel):
    """Fields left as None keep their current value; tag_ids=[] clears all tags"""
    title: Optional[str] = Field(None, min_length=1, max_length=400)
    headline: Optional[str] = Field(None, max_length=150)
    content: Optional[str] = Field(None, min_length=1)
    source: Optional[str] = Field(None, max_length=400)
    category_id: Optional[int] = Field(None, gt=0)
    status: Optional[NewsStatus] = None
    tag_ids: Optional[List[int]] = None

    @field_validator("title", "content")
    def not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("must not be empty")
        return v


class MyNewsQuery(PagingParams):
    title: Optional[str] = None
    headline: Optional[str] = None
    source: Optional[str] = None
    category_id: Optional[int] = None
    status: Optional[NewsStatus] = None
    created_from: Optional[datetime] = None
    created_to: Optional[datetime] = None
    tag_id: Optional[int] = None
    tag_ids: Optional[List[int]] = None
    include_inactive_categories: bool = False


class NewsQuery(MyNewsQuery):
    created_by: Optional[int] = None
    updated_by: Optional[int] = None


class NewsTag(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class NewsCategory(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class NewsAuthor(BaseModel):
    id: int
    name: str
    email: str

    class Config:
        from_attributes = True


class NewsSummary(BaseModel):
    id: int
    title: str
    headline: Optional[str] = None
    created_date: datetime
    category_id: int
    category_name: str
    status: NewsStatus
    created_by_id: int
    created_by_name: str

    @classmethod
    def from_article(cls, article) -> "NewsSummary":
        return cls(
            id=article.id,
            title=article.title,
            headline=article.headline,
            created_date=article.created_date,
            category_id=article.category_id,
            category_name=article.category.name if article.category else "",
            status=article.status,
            created_by_id=article.created_by_id,
            created_by_name=article.created_by.name if article.created_by else "",
        )


class NewsDetail(BaseModel):
    id: int
    title: str
    headline: Optional[str] = None
    content: str
    source: Optional[str] = None
    status: NewsStatus
    created_date: datetime
    modified_date: Optional[datetime] = None
    category: NewsCategory
    created_by: NewsAuthor
    updated_by: Optional[NewsAuthor] = None
    tags: List[NewsTag] = []

    class Config:
        from_attributes = True
