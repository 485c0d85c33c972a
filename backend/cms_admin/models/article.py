"""Article schemas."""

from datetime import datetime

from pydantic import Field

from cms_admin.models.base import CamelModel


class ArticleCreate(CamelModel):
    """Create an article."""

    title: str = Field(min_length=1, max_length=255)
    content: str | None = None


class ArticleUpdate(CamelModel):
    """Partial update for an article. An explicit null title is rejected."""

    title: str = Field(default=None, min_length=1, max_length=255)
    content: str | None = None


class ArticleResponse(CamelModel):
    """Article returned to the client."""

    id: int
    title: str
    content: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
