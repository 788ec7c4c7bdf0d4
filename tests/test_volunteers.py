"""Tests for volunteer sign-up, hour logging and the volunteer dashboard."""
import re

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select

from greenworld.db.enums import ProjectStatus
from greenworld.db.models import Milestone, ProjectPhoto, Registration
from greenworld.services import volunteer_service


# =============================================================================
# Registration
# =============================================================================

@pytest.mark.asyncio
async def test_register_then_duplicate_is_rejected(client: AsyncClient, db, ngo, volunteer, make_project):
    project = make_project(ngo.user)
    url = f"/api/projects/{project.id}/register"

    first = await client.post(url, headers=volunteer.headers)
    assert first.status_code == 201
    data = first.json()
    assert data["message"] == "Successfully registered for project"
    assert data["registration"]["userId"] == volunteer.user.id
    assert data["registration"]["hoursContributed"] == 0

    second = await client.post(url, headers=volunteer.headers)
    assert second.status_code == 400
    assert second.json() == {"error": "Already registered for this project"}

    count = db.scalar(
        select(func.count(Registration.id)).where(
            Registration.user_id == volunteer.user.id,
            Registration.project_id == project.id,
        )
    )
    assert count == 1


@pytest.mark.asyncio
async def test_register_for_missing_project(client: AsyncClient, volunteer):
    response = await client.post("/api/projects/999/register", headers=volunteer.headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_register_for_hidden_draft_is_not_found(client: AsyncClient, db, ngo, volunteer, make_project):
    draft = make_project(ngo.user, status=ProjectStatus.DRAFT.value)

    response = await client.post(f"/api/projects/{draft.id}/register", headers=volunteer.headers)

    assert response.status_code == 404
    assert response.json() == {"error": "Project not found"}
    assert db.scalar(select(func.count(Registration.id))) == 0


@pytest.mark.asyncio
async def test_owner_can_register_for_own_draft(client: AsyncClient, ngo, make_project):
    draft = make_project(ngo.user, status=ProjectStatus.DRAFT.value)

    response = await client.post(f"/api/projects/{draft.id}/register", headers=ngo.headers)
    assert response.status_code == 201


# =============================================================================
# Log hours
# =============================================================================

@pytest.mark.asyncio
async def test_log_hours_replaces_previous_value(client: AsyncClient, ngo, volunteer, make_project):
    project = make_project(ngo.user)
    await client.post(f"/api/projects/{project.id}/register", headers=volunteer.headers)

    first = await client.put(
        "/api/volunteers/log-hours", json={"projectId": project.id, "hours": 5}, headers=volunteer.headers
    )
    assert first.status_code == 200
    assert first.json()["registration"]["hoursContributed"] == 5

    second = await client.put(
        "/api/volunteers/log-hours", json={"projectId": project.id, "hours": 3}, headers=volunteer.headers
    )
    assert second.status_code == 200
    assert second.json()["message"] == "Hours logged successfully"
    assert second.json()["registration"]["hoursContributed"] == 3

    stats = await client.get("/api/volunteers/stats", headers=volunteer.headers)
    assert stats.json()["hoursVolunteered"] == 3


@pytest.mark.asyncio
async def test_log_hours_without_registration(client: AsyncClient, ngo, volunteer, make_project):
    project = make_project(ngo.user)

    response = await client.put(
        "/api/volunteers/log-hours", json={"projectId": project.id, "hours": 2}, headers=volunteer.headers
    )

    assert response.status_code == 404
    assert response.json() == {"error": "Registration not found"}


@pytest.mark.asyncio
async def test_log_hours_rejects_negative(client: AsyncClient, ngo, volunteer, make_project):
    project = make_project(ngo.user)
    await client.post(f"/api/projects/{project.id}/register", headers=volunteer.headers)

    response = await client.put(
        "/api/volunteers/log-hours", json={"projectId": project.id, "hours": -1}, headers=volunteer.headers
    )
    assert response.status_code == 400


# =============================================================================
# Dashboard
# =============================================================================

@pytest.mark.asyncio
async def test_stats_for_new_volunteer_are_zero(client: AsyncClient, volunteer):
    response = await client.get("/api/volunteers/stats", headers=volunteer.headers)

    assert response.status_code == 200
    assert response.json() == {
        "hoursVolunteered": 0,
        "projectsCompleted": 0,
        "certificatesEarned": 0,
        "impactScore": 0,
    }


@pytest.mark.asyncio
async def test_stats_aggregate_registrations(client: AsyncClient, db, ngo, volunteer, make_project):
    active = make_project(ngo.user, title="Active One")
    done = make_project(ngo.user, title="Done One", status=ProjectStatus.COMPLETED.value)
    db.add(Registration(user_id=volunteer.user.id, project_id=active.id, hours_contributed=12))
    db.add(Registration(user_id=volunteer.user.id, project_id=done.id, hours_contributed=8))
    db.flush()
    volunteer_service.issue_certificate(db, volunteer.user.id, done.id)

    response = await client.get("/api/volunteers/stats", headers=volunteer.headers)

    assert response.json() == {
        "hoursVolunteered": 20,
        "projectsCompleted": 1,
        "certificatesEarned": 1,
        "impactScore": 700,
    }


@pytest.mark.asyncio
async def test_my_projects(client: AsyncClient, db, ngo, volunteer, make_project):
    project = make_project(
        ngo.user,
        title="Mangrove Restoration",
        status=ProjectStatus.COMPLETED.value,
        impact_value="2,000 hectares",
        image="🌿",
        milestones=["Survey", "Planting"],
    )
    db.get(Milestone, project.milestones[0].id).completed = True
    db.add(ProjectPhoto(project_id=project.id, url="https://img.example.com/m.jpg"))
    db.add(Registration(user_id=volunteer.user.id, project_id=project.id, hours_contributed=8))
    db.flush()
    volunteer_service.issue_certificate(db, volunteer.user.id, project.id)
    db.commit()

    response = await client.get("/api/volunteers/my-projects", headers=volunteer.headers)

    assert response.status_code == 200
    projects = response.json()["projects"]
    assert len(projects) == 1
    item = projects[0]
    assert item["name"] == "Mangrove Restoration"
    assert item["status"] == "Completed"
    assert item["hours"] == 8
    assert item["impact"] == "2,000 hectares"
    assert item["carbonOffset"] == "Calculating..."
    assert item["image"] == "🌿"
    assert item["certificate"] is True
    assert item["ngo"] == "Green Earth Society"
    assert item["gallery"] == ["https://img.example.com/m.jpg"]
    assert [m["status"] for m in item["milestones"]] == ["Done", "In Progress"]
    assert [m["title"] for m in item["milestones"]] == ["Survey", "Planting"]
    assert re.fullmatch(r"[A-Z][a-z]{2} \d{1,2}, \d{4}", item["date"])


@pytest.mark.asyncio
async def test_my_projects_defaults(client: AsyncClient, db, ngo, volunteer, make_project):
    project = make_project(ngo.user, impact_value=None, image=None)
    db.add(Registration(user_id=volunteer.user.id, project_id=project.id))
    db.flush()

    response = await client.get("/api/volunteers/my-projects", headers=volunteer.headers)

    item = response.json()["projects"][0]
    assert item["status"] == "In Progress"
    assert item["impact"] == "Impact pending"
    assert item["image"] == "🌱"
    assert item["certificate"] is False
    assert item["gallery"] == []


@pytest.mark.asyncio
async def test_certificates(client: AsyncClient, db, ngo, volunteer, make_project):
    project = make_project(ngo.user, title="Coastal Cleanup")
    db.add(Registration(user_id=volunteer.user.id, project_id=project.id, hours_contributed=6))
    db.flush()
    volunteer_service.issue_certificate(db, volunteer.user.id, project.id)

    response = await client.get("/api/volunteers/certificates", headers=volunteer.headers)

    assert response.status_code == 200
    certificates = response.json()["certificates"]
    assert len(certificates) == 1
    assert certificates[0]["projectName"] == "Coastal Cleanup"
    assert certificates[0]["hours"] == 6
    assert certificates[0]["ngo"] == "Green Earth Society"


def test_issue_certificate_requires_registration(db, ngo, volunteer, make_project):
    project = make_project(ngo.user)

    with pytest.raises(volunteer_service.RegistrationNotFoundError):
        volunteer_service.issue_certificate(db, volunteer.user.id, project.id)
