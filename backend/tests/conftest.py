"""Shared test fixtures for the CMS admin API tests."""

import os

# Settings are read at import time; point them at SQLite before the app loads.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DB_CREATE_ALL"] = "false"

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from cms_admin.api.dependencies import get_db, hash_password, pwd_context  # noqa: E402
from cms_admin.db.models import Article, Base, Category, Course, User  # noqa: E402
from cms_admin.main import app  # noqa: E402

# Use an in-memory SQLite database for tests.
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
TestSessionFactory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

# Cheap hashes keep user tests fast.
pwd_context.update(bcrypt__rounds=4)


@event.listens_for(engine.sync_engine, "connect")
def _set_sqlite_pragma(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest_asyncio.fixture
async def db() -> AsyncSession:
    """Create tables and yield a fresh async session for each test."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionFactory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def client(db: AsyncSession):
    """HTTP client whose requests share the test session."""

    async def _test_db():
        yield db

    app.dependency_overrides[get_db] = _test_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Record factories
# ---------------------------------------------------------------------------


async def create_article(db: AsyncSession, title: str = "Hello", content: str | None = "Body") -> Article:
    article = Article(title=title, content=content)
    db.add(article)
    await db.flush()
    return article


async def create_category(db: AsyncSession, name: str = "Backend", rank: int = 1) -> Category:
    category = Category(name=name, rank=rank)
    db.add(category)
    await db.flush()
    return category


async def create_user(
    db: AsyncSession,
    username: str = "alice",
    email: str | None = None,
    nickname: str = "Alice",
    role: int = 0,
) -> User:
    user = User(
        email=email or f"{username}@example.com",
        username=username,
        password=hash_password("secret123"),
        nickname=nickname,
        role=role,
    )
    db.add(user)
    await db.flush()
    return user


async def create_course(
    db: AsyncSession,
    category: Category,
    user: User,
    name: str = "Python 101",
    recommended: bool = False,
    introductory: bool = False,
) -> Course:
    course = Course(
        category_id=category.id,
        user_id=user.id,
        name=name,
        recommended=recommended,
        introductory=introductory,
    )
    db.add(course)
    await db.flush()
    return course


@pytest_asyncio.fixture
async def category(db: AsyncSession) -> Category:
    return await create_category(db)


@pytest_asyncio.fixture
async def author(db: AsyncSession) -> User:
    return await create_user(db)
