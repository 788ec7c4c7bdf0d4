"""Tests for admin user management."""
import pytest
from httpx import AsyncClient
from sqlalchemy import func, select

from greenworld.db.enums import Role
from greenworld.db.models import Certificate, Registration, User


@pytest.mark.asyncio
async def test_list_users_newest_first(client: AsyncClient, admin, login_as):
    first = login_as(Role.VOLUNTEER)
    second = login_as(Role.CORPORATE)

    response = await client.get("/api/users", headers=admin.headers)

    assert response.status_code == 200
    users = response.json()["users"]
    assert [u["id"] for u in users] == [second.user.id, first.user.id, admin.user.id]
    assert "createdAt" in users[0]
    assert all("passwordHash" not in u for u in users)


@pytest.mark.asyncio
async def test_admin_cannot_delete_self(client: AsyncClient, admin, db):
    response = await client.delete(f"/api/users/{admin.user.id}", headers=admin.headers)

    assert response.status_code == 400
    assert response.json() == {"error": "Cannot delete your own admin account"}
    assert db.get(User, admin.user.id) is not None


@pytest.mark.asyncio
async def test_delete_user_cascades_activity(client: AsyncClient, db, admin, ngo, volunteer, make_project):
    project = make_project(ngo.user)
    db.add(Registration(user_id=volunteer.user.id, project_id=project.id, hours_contributed=3))
    db.add(Certificate(user_id=volunteer.user.id, project_id=project.id, hours=3))
    db.flush()
    volunteer_id = volunteer.user.id

    response = await client.delete(f"/api/users/{volunteer_id}", headers=admin.headers)

    assert response.status_code == 200
    assert response.json() == {"message": "User deleted successfully"}
    assert db.scalar(select(func.count(User.id)).where(User.id == volunteer_id)) == 0
    assert db.scalar(select(func.count(Registration.id))) == 0
    assert db.scalar(select(func.count(Certificate.id))) == 0


@pytest.mark.asyncio
async def test_delete_unknown_user(client: AsyncClient, admin):
    response = await client.delete("/api/users/999", headers=admin.headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_user_with_oversized_id(client: AsyncClient, admin):
    response = await client.delete(f"/api/users/{2**63}", headers=admin.headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_cannot_delete_ngo_that_owns_projects(client: AsyncClient, admin, ngo, make_project):
    make_project(ngo.user)

    response = await client.delete(f"/api/users/{ngo.user.id}", headers=admin.headers)

    assert response.status_code == 400
    assert response.json() == {"error": "Cannot delete a user who still owns projects"}


@pytest.mark.asyncio
async def test_non_admin_cannot_delete_users(client: AsyncClient, ngo, volunteer):
    response = await client.delete(f"/api/users/{volunteer.user.id}", headers=ngo.headers)
    assert response.status_code == 403
