"""API dependencies: DB sessions and password hashing."""

from collections.abc import AsyncGenerator
from typing import Annotated, Any

from fastapi import Depends
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession

from cms_admin.db.database import get_session

# ---------------------------------------------------------------------------
# Database dependency
# ---------------------------------------------------------------------------

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency."""
    async for session in get_session():
        yield session


DbSession = Annotated[AsyncSession, Depends(get_db)]

# ---------------------------------------------------------------------------
# Password hashing
# ---------------------------------------------------------------------------

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """Hash a plain-text password."""
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    """Verify a plain-text password against a hash."""
    return pwd_context.verify(plain, hashed)


def hash_password_field(values: dict[str, Any]) -> dict[str, Any]:
    """Replace a plain ``password`` value with its hash before saving."""
    if values.get("password"):
        values = {**values, "password": hash_password(values["password"])}
    return values
