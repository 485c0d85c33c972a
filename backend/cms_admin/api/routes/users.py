"""Admin user endpoints: /admin/users."""

from cms_admin.api.dependencies import hash_password_field
from cms_admin.api.routes.resource_router import build_resource_router
from cms_admin.core.conditions import Coercion, FilterSpec, MatchKind
from cms_admin.core.resource import ResourceConfig
from cms_admin.db.models import User
from cms_admin.models.user import UserCreate, UserResponse, UserUpdate

resource = ResourceConfig(
    model=User,
    singular="user",
    plural="users",
    display_name="user",
    allowed_fields=(
        "email",
        "username",
        "password",
        "nickname",
        "sex",
        "company",
        "introduce",
        "role",
        "avatar",
    ),
    filters=(
        FilterSpec("email", "email"),
        FilterSpec("username", "username"),
        FilterSpec("nickname", "nickname", MatchKind.CONTAINS),
        FilterSpec("role", "role", MatchKind.EXACT, Coercion.NUMERIC),
    ),
    create_schema=UserCreate,
    update_schema=UserUpdate,
    response_schema=UserResponse,
    before_save=hash_password_field,
)

router = build_resource_router(resource)
