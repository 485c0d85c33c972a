"""Per-resource configuration for the generic admin handlers."""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.interfaces import ORMOption

from cms_admin.core.conditions import FilterSpec, parse_record_id
from cms_admin.db.exceptions import RecordNotFoundError, RecordValidationError
from cms_admin.db.models import Base
from cms_admin.db.repositories import resource_repo

logger = logging.getLogger(__name__)


def validation_messages(exc: ValidationError | RequestValidationError) -> list[str]:
    """Flatten a Pydantic error into one ``"<field>: <reason>"`` per failure."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "body"
        messages.append(f"{location}: {error['msg']}")
    return messages


@dataclass(frozen=True)
class ResourceConfig:
    """Everything the generic handlers need to know about one resource.

    Attributes:
        model: ORM model backing the resource.
        singular: Response data key for a single record, e.g. ``"article"``.
        plural: Response data key for a list and the URL segment.
        display_name: Human name used in messages.
        allowed_fields: Whitelist of body fields accepted on create/update.
        filters: Filterable fields for the list endpoint.
        create_schema: Validates a whitelisted create payload.
        update_schema: Validates a whitelisted update payload.
        response_schema: Serializes a record for the client.
        load_options: Loader options applied whenever records are read.
        before_save: Optional hook applied to validated values before
            they are written, e.g. password hashing.
    """

    model: type[Base]
    singular: str
    plural: str
    display_name: str
    allowed_fields: tuple[str, ...]
    filters: tuple[FilterSpec, ...]
    create_schema: type[BaseModel]
    update_schema: type[BaseModel]
    response_schema: type[BaseModel]
    load_options: tuple[ORMOption, ...] = ()
    before_save: Callable[[dict[str, Any]], dict[str, Any]] | None = None

    @property
    def title(self) -> str:
        return self.display_name[:1].upper() + self.display_name[1:]

    def validate_create(self, body: Mapping[str, Any]) -> dict[str, Any]:
        """Validate a create payload and return column values."""
        return self._validate(self.create_schema, body, exclude_unset=False)

    def validate_update(self, body: Mapping[str, Any]) -> dict[str, Any]:
        """Validate an update payload and return only the submitted columns."""
        return self._validate(self.update_schema, body, exclude_unset=True)

    def _validate(self, schema: type[BaseModel], body: Mapping[str, Any], exclude_unset: bool) -> dict[str, Any]:
        try:
            parsed = schema.model_validate(body)
        except ValidationError as e:
            messages = validation_messages(e)
            logger.info(f"Rejected {self.display_name} payload: {messages}")
            raise RecordValidationError(messages) from e
        values = parsed.model_dump(mode="json", exclude_unset=exclude_unset)
        if self.before_save is not None:
            values = self.before_save(values)
        return values

    def serialize(self, record: Base) -> dict[str, Any]:
        return self.response_schema.model_validate(record).model_dump(mode="json", by_alias=True)


async def get_record(
    db: AsyncSession,
    resource: ResourceConfig,
    record_id: str,
    populate_existing: bool = False,
) -> Base:
    """Fetch a record by the id taken from the request path.

    Raises:
        RecordNotFoundError: No record has that id. Ids that are not
            plain positive integers within the id column range can never
            match and are reported the same way without a query.
    """
    record = None
    pk = parse_record_id(record_id)
    if pk is not None:
        record = await resource_repo.find_by_pk(
            db, resource.model, pk, resource.load_options, populate_existing=populate_existing
        )
    if record is None:
        raise RecordNotFoundError(f"ID: {record_id} {resource.display_name} not found.")
    return record
