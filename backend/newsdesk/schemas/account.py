import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from newsdesk.models.account import AccountRole
from newsdesk.schemas.common import PagingParams


class LoginRequest(BaseModel):
    email: str
    password: str


class AccountCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: AccountRole = AccountRole.LECTURER

    @field_validator("name")
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Account name must not be empty")
        return v.strip()


class AccountUpdate(BaseModel):
    """Fields left as None keep their current value"""
    name: Optional[str] = Field(None, max_length=100)
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    role: Optional[AccountRole] = None

    @field_validator("password")
    def password_strength(cls, v: Optional[str]) -> Optional[str]:
        if not v:
            return v
        if len(v) < 8:
            raise ValueError("Password must be at least 8 characters long.")
        if not re.search(r"[A-Z]", v):
            raise ValueError("Password must contain at least one uppercase letter.")
        if not re.search(r"[a-z]", v):
            raise ValueError("Password must contain at least one lowercase letter.")
        if not re.search(r"[0-9]", v):
            raise ValueError("Password must contain at least one digit.")
        if not re.search(r"[^a-zA-Z0-9]", v):
            raise ValueError("Password must contain at least one special character.")
        return v


class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=100)
    email: Optional[EmailStr] = None
    password: Optional[str] = None

    @field_validator("password")
    def password_length(cls, v: Optional[str]) -> Optional[str]:
        if v and len(v) < 6:
            raise ValueError("Password must be at least 6 characters long.")
        return v


class AccountQuery(PagingParams):
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[AccountRole] = None


class AccountLookupQuery(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[AccountRole] = None


class Account(BaseModel):
    id: int
    name: str
    email: str
    role: AccountRole
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AccountLookup(BaseModel):
    id: int
    name: str
    email: str

    class Config:
        from_attributes = True
