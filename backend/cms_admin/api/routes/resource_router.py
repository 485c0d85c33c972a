"""Generic list / detail / create / update / delete endpoints.

Each admin resource module declares a ``ResourceConfig`` and gets its
router from ``build_resource_router``. Handlers never catch errors
themselves: lookups, validation and persistence failures propagate to the
envelope's exception handlers. Mutations commit before the response is
built, so a commit failure is rendered like any other error.
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from cms_admin.api.dependencies import DbSession
from cms_admin.config import settings
from cms_admin.core.conditions import build_condition
from cms_admin.core.resource import ResourceConfig, get_record
from cms_admin.core.whitelist import filter_body
from cms_admin.db.models import Base
from cms_admin.db.repositories import resource_repo
from cms_admin.models.envelope import success

logger = logging.getLogger(__name__)

JsonBody = Annotated[dict[str, Any], Body()]


def build_resource_router(resource: ResourceConfig) -> APIRouter:
    """Create the five admin endpoints for ``resource``."""
    router = APIRouter()

    async def _reload(db: AsyncSession, record: Base) -> Base:
        # Re-read so associations named in load_options reflect the new values.
        if not resource.load_options:
            return record
        return await get_record(db, resource, str(record.id), populate_existing=True)  # type: ignore[attr-defined]

    @router.get("", operation_id=f"list_{resource.plural}")
    async def list_records(request: Request, db: DbSession) -> JSONResponse:
        """Paginated list with optional filters."""
        condition = build_condition(
            request.query_params,
            resource.filters,
            combine=settings.list_filters_combine,
            default_current_page=settings.default_current_page,
            default_page_size=settings.default_page_size,
            max_current_page=settings.max_current_page,
            max_page_size=settings.max_page_size,
        )
        total, rows = await resource_repo.find_and_count_all(
            db, resource.model, condition, resource.load_options
        )
        return success(f"{resource.title} list fetched successfully.", {
            resource.plural: [resource.serialize(row) for row in rows],
            "pagination": {
                "total": total,
                "currentPage": condition.current_page,
                "pageSize": condition.page_size,
            },
        })

    @router.get("/{record_id}", operation_id=f"get_{resource.singular}")
    async def get_one(record_id: str, db: DbSession) -> JSONResponse:
        record = await get_record(db, resource, record_id)
        return success(
            f"{resource.title} fetched successfully.",
            {resource.singular: resource.serialize(record)},
        )

    @router.post("", status_code=status.HTTP_201_CREATED, operation_id=f"create_{resource.singular}")
    async def create(payload: JsonBody, db: DbSession) -> JSONResponse:
        """Create a record from the whitelisted body fields."""
        values = resource.validate_create(filter_body(payload, resource.allowed_fields))
        record = await resource_repo.create_record(db, resource.model, values)
        await resource_repo.commit_changes(db)
        record = await _reload(db, record)
        logger.info(f"Created {resource.display_name} {record.id}")  # type: ignore[attr-defined]
        return success(
            f"{resource.title} created successfully.",
            {resource.singular: resource.serialize(record)},
            status.HTTP_201_CREATED,
        )

    @router.put("/{record_id}", operation_id=f"update_{resource.singular}")
    async def update(record_id: str, payload: JsonBody, db: DbSession) -> JSONResponse:
        """Partial update from the whitelisted body fields."""
        record = await get_record(db, resource, record_id)
        values = resource.validate_update(filter_body(payload, resource.allowed_fields))
        record = await resource_repo.update_record(db, record, values)
        await resource_repo.commit_changes(db)
        record = await _reload(db, record)
        logger.info(f"Updated {resource.display_name} {record_id}: {sorted(values)}")
        return success(
            f"{resource.title} updated successfully.",
            {resource.singular: resource.serialize(record)},
        )

    @router.delete("/{record_id}", operation_id=f"delete_{resource.singular}")
    async def delete(record_id: str, db: DbSession) -> JSONResponse:
        record = await get_record(db, resource, record_id)
        await resource_repo.destroy_record(db, record)
        await resource_repo.commit_changes(db)
        logger.info(f"Deleted {resource.display_name} {record_id}")
        return success(f"{resource.title} deleted successfully.")

    return router
