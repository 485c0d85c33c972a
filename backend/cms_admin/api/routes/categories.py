"""Admin category endpoints: /admin/categories."""

from cms_admin.api.routes.resource_router import build_resource_router
from cms_admin.core.conditions import FilterSpec, MatchKind
from cms_admin.core.resource import ResourceConfig
from cms_admin.db.models import Category
from cms_admin.models.category import CategoryCreate, CategoryResponse, CategoryUpdate

resource = ResourceConfig(
    model=Category,
    singular="category",
    plural="categories",
    display_name="category",
    allowed_fields=("name", "rank"),
    filters=(
        FilterSpec("name", "name", MatchKind.CONTAINS),
    ),
    create_schema=CategoryCreate,
    update_schema=CategoryUpdate,
    response_schema=CategoryResponse,
)

router = build_resource_router(resource)
