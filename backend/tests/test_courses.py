"""Endpoint tests for /admin/courses."""

import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from cms_admin.config import settings

from conftest import create_category, create_course, create_user

URL = "/admin/courses"


@pytest_asyncio.fixture
async def catalog(db: AsyncSession):
    """Two categories, two authors and four courses spread across them."""
    backend = await create_category(db, name="Backend")
    frontend = await create_category(db, name="Frontend")
    alice = await create_user(db, username="alice")
    bob = await create_user(db, username="bob")
    await create_course(db, backend, alice, name="Python basics", introductory=True)
    await create_course(db, backend, bob, name="Advanced Python", recommended=True)
    await create_course(db, frontend, alice, name="CSS layouts", recommended=True)
    await create_course(db, frontend, bob, name="Vue intro", introductory=True)
    ids = {"backend": backend.id, "frontend": frontend.id, "alice": alice.id, "bob": bob.id}
    db.expunge_all()
    return ids


# ---------------------------------------------------------------------------
# List
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_list_embeds_category_and_user(client: AsyncClient, catalog):
    resp = await client.get(URL)

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["pagination"]["total"] == 4
    latest = data["courses"][0]
    assert latest["name"] == "Vue intro"
    assert latest["category"] == {"id": catalog["frontend"], "name": "Frontend"}
    assert latest["user"] == {"id": catalog["bob"], "username": "bob", "avatar": None}


@pytest.mark.asyncio
async def test_filter_by_category(client: AsyncClient, catalog):
    resp = await client.get(URL, params={"categoryId": catalog["backend"]})

    names = [c["name"] for c in resp.json()["data"]["courses"]]
    assert names == ["Advanced Python", "Python basics"]


@pytest.mark.asyncio
async def test_filter_by_boolean_flag(client: AsyncClient, catalog):
    resp = await client.get(URL, params={"recommended": "true"})
    assert [c["name"] for c in resp.json()["data"]["courses"]] == ["CSS layouts", "Advanced Python"]

    resp = await client.get(URL, params={"recommended": "false"})
    assert [c["name"] for c in resp.json()["data"]["courses"]] == ["Vue intro", "Python basics"]


@pytest.mark.asyncio
async def test_filter_by_name_fragment(client: AsyncClient, catalog):
    resp = await client.get(URL, params={"name": "Python"})
    assert resp.json()["data"]["pagination"]["total"] == 2


@pytest.mark.asyncio
async def test_filters_are_combined(client: AsyncClient, catalog):
    resp = await client.get(URL, params={"categoryId": catalog["backend"], "userId": catalog["alice"]})

    courses = resp.json()["data"]["courses"]
    assert [c["name"] for c in courses] == ["Python basics"]


@pytest.mark.asyncio
async def test_last_declared_filter_wins_when_not_combined(client: AsyncClient, catalog, monkeypatch):
    monkeypatch.setattr(settings, "list_filters_combine", False)

    resp = await client.get(URL, params={"categoryId": catalog["backend"], "introductory": "true"})

    # Only the introductory filter applies, so the frontend course shows up too.
    assert [c["name"] for c in resp.json()["data"]["courses"]] == ["Vue intro", "Python basics"]


@pytest.mark.asyncio
async def test_non_numeric_id_filter_is_rejected(client: AsyncClient, catalog):
    resp = await client.get(URL, params={"categoryId": "backend"})

    assert resp.status_code == 400
    assert resp.json()["errors"] == ["categoryId: must be an integer"]


@pytest.mark.asyncio
async def test_out_of_range_id_filter_is_rejected(client: AsyncClient, catalog):
    resp = await client.get(URL, params={"categoryId": "99999999999999999999"})

    assert resp.status_code == 400
    assert resp.json()["errors"][0].startswith("categoryId: must be between")


@pytest.mark.asyncio
async def test_loosely_formatted_id_filter_is_rejected(client: AsyncClient, catalog):
    resp = await client.get(URL, params={"userId": "1_0"})

    assert resp.status_code == 400
    assert resp.json()["errors"] == ["userId: must be an integer"]


# ---------------------------------------------------------------------------
# Detail
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_get_course(client: AsyncClient, db: AsyncSession, category, author):
    course = await create_course(db, category, author, name="SQL")
    course_id = course.id
    db.expunge_all()

    resp = await client.get(f"{URL}/{course_id}")

    assert resp.status_code == 200
    payload = resp.json()["data"]["course"]
    assert payload["name"] == "SQL"
    assert payload["categoryId"] == category.id
    assert payload["category"]["name"] == "Backend"
    assert payload["user"]["username"] == "alice"


@pytest.mark.asyncio
async def test_get_missing_course(client: AsyncClient):
    resp = await client.get(f"{URL}/31")
    assert resp.status_code == 404
    assert resp.json()["errors"] == ["ID: 31 course not found."]


# ---------------------------------------------------------------------------
# Create / update / delete
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_create_course(client: AsyncClient, category, author):
    resp = await client.post(URL, json={
        "categoryId": category.id,
        "userId": author.id,
        "name": "Async Python",
        "image": "https://cdn.example.com/async.png",
        "recommended": True,
        "likes": 100,
    })

    assert resp.status_code == 201
    course = resp.json()["data"]["course"]
    assert course["name"] == "Async Python"
    assert course["recommended"] is True
    assert course["introductory"] is False
    assert course["category"] == {"id": category.id, "name": "Backend"}
    assert course["user"]["id"] == author.id
    assert "likes" not in course


@pytest.mark.asyncio
async def test_create_course_requires_category_and_user(client: AsyncClient):
    resp = await client.post(URL, json={"name": "Orphan"})

    assert resp.status_code == 400
    errors = resp.json()["errors"]
    assert any(e.startswith("categoryId:") for e in errors)
    assert any(e.startswith("userId:") for e in errors)


@pytest.mark.asyncio
async def test_create_course_with_unknown_category(client: AsyncClient, author):
    resp = await client.post(URL, json={"categoryId": 999, "userId": author.id, "name": "Lost"})

    assert resp.status_code == 400
    assert "Course" in resp.json()["errors"][0]


@pytest.mark.asyncio
async def test_create_course_rejects_bad_image_url(client: AsyncClient, category, author):
    resp = await client.post(URL, json={
        "categoryId": category.id,
        "userId": author.id,
        "name": "Pics",
        "image": "not-a-url",
    })

    assert resp.status_code == 400
    assert resp.json()["errors"][0].startswith("image:")


@pytest.mark.asyncio
async def test_update_course_moves_category(client: AsyncClient, db: AsyncSession, category, author):
    other = await create_category(db, name="Data")
    course = await create_course(db, category, author)

    resp = await client.put(f"{URL}/{course.id}", json={"categoryId": other.id, "introductory": True})

    assert resp.status_code == 200
    payload = resp.json()["data"]["course"]
    assert payload["categoryId"] == other.id
    assert payload["category"] == {"id": other.id, "name": "Data"}
    assert payload["introductory"] is True
    assert payload["name"] == "Python 101"


@pytest.mark.asyncio
async def test_delete_course(client: AsyncClient, db: AsyncSession, category, author):
    course = await create_course(db, category, author)

    resp = await client.delete(f"{URL}/{course.id}")

    assert resp.status_code == 200
    assert resp.json()["message"] == "Course deleted successfully."
    assert (await client.get(f"{URL}/{course.id}")).status_code == 404
