"""Tests for the NGO workspace endpoints."""
import pytest
from httpx import AsyncClient

from greenworld.db.enums import Role
from greenworld.db.models import Registration


@pytest.mark.asyncio
async def test_volunteers_across_own_projects(
    client: AsyncClient, db, ngo, login_as, volunteer, make_project
):
    other_ngo = login_as(Role.NGO)
    forest = make_project(ngo.user, title="Forest")
    cleanup = make_project(ngo.user, title="Cleanup")
    theirs = make_project(other_ngo.user, title="Not Mine")
    second_volunteer = login_as(Role.VOLUNTEER, name="Sam Helper")
    db.add(Registration(user_id=volunteer.user.id, project_id=forest.id, hours_contributed=5))
    db.flush()
    db.add(Registration(user_id=second_volunteer.user.id, project_id=cleanup.id, hours_contributed=2))
    db.add(Registration(user_id=volunteer.user.id, project_id=theirs.id, hours_contributed=9))
    db.flush()

    response = await client.get("/api/ngo/volunteers", headers=ngo.headers)

    assert response.status_code == 200
    volunteers = response.json()["volunteers"]
    assert len(volunteers) == 2
    assert {v["projectTitle"] for v in volunteers} == {"Forest", "Cleanup"}
    by_name = {v["name"]: v for v in volunteers}
    assert by_name["Jane Volunteer"]["hours"] == 5
    assert by_name["Sam Helper"]["hours"] == 2
    assert by_name["Sam Helper"]["projectId"] == cleanup.id


@pytest.mark.asyncio
async def test_funding_breakdown(client: AsyncClient, ngo, make_project):
    make_project(ngo.user, title="Half Way", funding_goal=30000, funding_received=18000)
    make_project(ngo.user, title="No Goal", funding_goal=0, funding_received=0)
    make_project(ngo.user, title="Over Funded", funding_goal=1000, funding_received=1500)

    response = await client.get("/api/ngo/funding", headers=ngo.headers)

    assert response.status_code == 200
    by_title = {p["title"]: p for p in response.json()["funding"]}
    assert by_title["Half Way"]["percent"] == 60
    assert by_title["No Goal"]["percent"] == 0
    assert by_title["Over Funded"]["percent"] == 150
    assert by_title["Half Way"]["status"] == "active"


@pytest.mark.asyncio
async def test_funding_is_empty_without_projects(client: AsyncClient, ngo):
    response = await client.get("/api/ngo/funding", headers=ngo.headers)
    assert response.json() == {"funding": []}
