"""Admin article endpoints: /admin/articles."""

from cms_admin.api.routes.resource_router import build_resource_router
from cms_admin.core.conditions import FilterSpec, MatchKind
from cms_admin.core.resource import ResourceConfig
from cms_admin.db.models import Article
from cms_admin.models.article import ArticleCreate, ArticleResponse, ArticleUpdate

resource = ResourceConfig(
    model=Article,
    singular="article",
    plural="articles",
    display_name="article",
    allowed_fields=("title", "content"),
    filters=(
        FilterSpec("title", "title", MatchKind.CONTAINS),
    ),
    create_schema=ArticleCreate,
    update_schema=ArticleUpdate,
    response_schema=ArticleResponse,
)

router = build_resource_router(resource)
