"""Admin course endpoints: /admin/courses.

Courses are always returned with their category and author embedded.
"""

from sqlalchemy.orm import selectinload

from cms_admin.api.routes.resource_router import build_resource_router
from cms_admin.core.conditions import Coercion, FilterSpec, MatchKind
from cms_admin.core.resource import ResourceConfig
from cms_admin.db.models import Course
from cms_admin.models.course import CourseCreate, CourseResponse, CourseUpdate

resource = ResourceConfig(
    model=Course,
    singular="course",
    plural="courses",
    display_name="course",
    allowed_fields=(
        "categoryId",
        "userId",
        "name",
        "image",
        "recommended",
        "introductory",
        "content",
    ),
    # Declaration order decides which filter wins when filters are not combined.
    filters=(
        FilterSpec("categoryId", "category_id", MatchKind.EXACT, Coercion.NUMERIC),
        FilterSpec("userId", "user_id", MatchKind.EXACT, Coercion.NUMERIC),
        FilterSpec("name", "name", MatchKind.CONTAINS),
        FilterSpec("recommended", "recommended", MatchKind.EXACT, Coercion.BOOLEAN),
        FilterSpec("introductory", "introductory", MatchKind.EXACT, Coercion.BOOLEAN),
    ),
    create_schema=CourseCreate,
    update_schema=CourseUpdate,
    response_schema=CourseResponse,
    load_options=(
        selectinload(Course.category),
        selectinload(Course.user),
    ),
)

router = build_resource_router(resource)
