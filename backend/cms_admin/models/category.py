"""Category schemas."""

from datetime import datetime

from pydantic import Field

from cms_admin.models.base import CamelModel


class CategoryCreate(CamelModel):
    """Create a category."""

    name: str = Field(min_length=1, max_length=255)
    rank: int = Field(ge=1)


class CategoryUpdate(CamelModel):
    """Partial update for a category."""

    name: str = Field(default=None, min_length=1, max_length=255)
    rank: int = Field(default=None, ge=1)


class CategoryBrief(CamelModel):
    """Category summary embedded in course responses."""

    id: int
    name: str


class CategoryResponse(CamelModel):
    """Category returned to the client."""

    id: int
    name: str
    rank: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
