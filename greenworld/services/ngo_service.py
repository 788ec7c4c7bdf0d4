"""NGO workspace: volunteers across the NGO's projects and funding progress."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from greenworld.db.models import Project, Registration, User
from greenworld.services.impact_estimates import funding_percent


def list_volunteers(db: Session, ngo_id: int) -> list[dict]:
    """One row per registration on the NGO's projects, newest first."""
    rows = db.execute(
        select(User, Registration, Project)
        .join(Registration, Registration.user_id == User.id)
        .join(Project, Registration.project_id == Project.id)
        .where(Project.ngo_id == ngo_id)
        .order_by(Registration.registered_at.desc(), Registration.id.desc())
    ).all()

    return [
        {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "project_id": project.id,
            "project_title": project.title,
            "hours": registration.hours_contributed,
            "enrolled_at": registration.registered_at,
        }
        for user, registration, project in rows
    ]


def get_funding_breakdown(db: Session, ngo_id: int) -> list[dict]:
    projects = db.scalars(
        select(Project)
        .where(Project.ngo_id == ngo_id)
        .order_by(Project.created_at.desc(), Project.id.desc())
    )
    return [
        {
            "id": p.id,
            "title": p.title,
            "funding_goal": p.funding_goal,
            "funding_received": p.funding_received,
            "status": p.status,
            "percent": funding_percent(p.funding_received, p.funding_goal),
        }
        for p in projects
    ]
