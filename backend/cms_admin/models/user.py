"""User schemas."""

from __future__ import annotations

from datetime import datetime
from enum import IntEnum

from pydantic import EmailStr, Field

from cms_admin.models.base import CamelModel

_URL_PATTERN = r"^https?://"


class Sex(IntEnum):
    MALE = 0
    FEMALE = 1
    UNKNOWN = 2


class Role(IntEnum):
    USER = 0
    ADMIN = 100


class UserCreate(CamelModel):
    """Schema for creating a user. ``password`` is plain text here."""

    email: EmailStr
    username: str = Field(min_length=2, max_length=45)
    password: str = Field(min_length=6, max_length=45)
    nickname: str = Field(min_length=2, max_length=45)
    sex: Sex = Sex.UNKNOWN
    company: str | None = None
    introduce: str | None = None
    role: Role = Role.USER
    avatar: str | None = Field(default=None, pattern=_URL_PATTERN)


class UserUpdate(CamelModel):
    """Schema for updating a user."""

    email: EmailStr = None
    username: str = Field(default=None, min_length=2, max_length=45)
    password: str = Field(default=None, min_length=6, max_length=45)
    nickname: str = Field(default=None, min_length=2, max_length=45)
    sex: Sex = None
    company: str | None = None
    introduce: str | None = None
    role: Role = None
    avatar: str | None = Field(default=None, pattern=_URL_PATTERN)


class UserBrief(CamelModel):
    """Author summary embedded in course responses."""

    id: int
    username: str
    avatar: str | None = None


class UserResponse(CamelModel):
    """User returned to the client. The password hash is never exposed."""

    id: int
    email: str
    username: str
    nickname: str
    sex: int
    company: str | None = None
    introduce: str | None = None
    role: int
    avatar: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
