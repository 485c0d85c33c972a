"""Course schemas."""

from datetime import datetime

from pydantic import Field

from cms_admin.models.base import CamelModel
from cms_admin.models.category import CategoryBrief
from cms_admin.models.user import UserBrief

_URL_PATTERN = r"^https?://"


class CourseCreate(CamelModel):
    """Create a course."""

    category_id: int = Field(ge=1)
    user_id: int = Field(ge=1)
    name: str = Field(min_length=1, max_length=255)
    image: str | None = Field(default=None, pattern=_URL_PATTERN)
    recommended: bool = False
    introductory: bool = False
    content: str | None = None


class CourseUpdate(CamelModel):
    """Partial update for a course."""

    category_id: int = Field(default=None, ge=1)
    user_id: int = Field(default=None, ge=1)
    name: str = Field(default=None, min_length=1, max_length=255)
    image: str | None = Field(default=None, pattern=_URL_PATTERN)
    recommended: bool = None
    introductory: bool = None
    content: str | None = None


class CourseResponse(CamelModel):
    """Course returned to the client, with its category and author."""

    id: int
    category_id: int
    user_id: int
    name: str
    image: str | None = None
    recommended: bool
    introductory: bool
    content: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    category: CategoryBrief | None = None
    user: UserBrief | None = None
