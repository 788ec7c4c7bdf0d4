"""Volunteer dashboard: registered projects, personal stats, certificates, hours."""

from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from greenworld.db.enums import ProjectStatus
from greenworld.db.models import Certificate, Project, Registration
from greenworld.services.impact_estimates import volunteer_impact_score
from greenworld.services.project_service import get_ngo_display_names


class VolunteerServiceError(Exception):
    """Base exception for volunteer service errors."""

    pass


class RegistrationNotFoundError(VolunteerServiceError):
    """Caller is not registered for the project."""

    pass


def _format_date(value: datetime | None) -> str:
    """Short US-style date, e.g. "Mar 4, 2025"."""
    if value is None:
        return "N/A"
    return f"{value.strftime('%b')} {value.day}, {value.year}"


def get_my_projects(db: Session, user_id: int) -> list[dict]:
    """Projects the user registered for, with milestones, gallery and certificate flag."""
    registrations = list(
        db.scalars(
            select(Registration)
            .where(Registration.user_id == user_id)
            .options(
                selectinload(Registration.project).selectinload(Project.milestones),
                selectinload(Registration.project).selectinload(Project.photos),
            )
            .order_by(Registration.registered_at.desc(), Registration.id.desc())
        )
    )

    certified = set(
        db.scalars(
            select(Certificate.project_id).where(Certificate.user_id == user_id)
        )
    )
    ngo_names = get_ngo_display_names(db, {r.project.ngo_id for r in registrations})

    items = []
    for reg in registrations:
        project = reg.project
        items.append(
            {
                "id": project.id,
                "name": project.title,
                "description": project.description,
                "long_description": project.long_description,
                "status": "Completed" if project.status == ProjectStatus.COMPLETED.value else "In Progress",
                "hours": reg.hours_contributed,
                "impact": project.impact_value or "Impact pending",
                "carbon_offset": project.carbon_offset or "Calculating...",
                "date": _format_date(reg.registered_at),
                "certificate": project.id in certified,
                "image": project.image or "🌱",
                "ngo": ngo_names.get(project.ngo_id, "Unknown NGO"),
                "milestones": [
                    {
                        "id": m.id,
                        "title": m.name,
                        "status": "Done" if m.completed else "In Progress",
                    }
                    for m in project.milestones
                ],
                "gallery": [photo.url for photo in project.photos],
            }
        )
    return items


def get_volunteer_stats(db: Session, user_id: int) -> dict:
    """Hours, completed projects, certificates and the derived impact score."""
    total_hours = db.scalar(
        select(func.coalesce(func.sum(Registration.hours_contributed), 0))
        .where(Registration.user_id == user_id)
    ) or 0

    projects_completed = db.scalar(
        select(func.count(Registration.id))
        .join(Project, Registration.project_id == Project.id)
        .where(
            Registration.user_id == user_id,
            Project.status == ProjectStatus.COMPLETED.value,
        )
    ) or 0

    certificates = db.scalar(
        select(func.count(Certificate.id)).where(Certificate.user_id == user_id)
    ) or 0

    return {
        "hours_volunteered": int(total_hours),
        "projects_completed": projects_completed,
        "certificates_earned": certificates,
        "impact_score": volunteer_impact_score(int(total_hours)),
    }


def list_certificates(db: Session, user_id: int) -> list[dict]:
    rows = db.execute(
        select(Certificate, Project)
        .join(Project, Certificate.project_id == Project.id)
        .where(Certificate.user_id == user_id)
        .order_by(Certificate.issued_at.desc(), Certificate.id.desc())
    ).all()
    ngo_names = get_ngo_display_names(db, {project.ngo_id for _, project in rows})

    return [
        {
            "id": cert.id,
            "project_id": project.id,
            "project_name": project.title,
            "hours": cert.hours,
            "issued_at": cert.issued_at,
            "ngo": ngo_names.get(project.ngo_id, "Unknown NGO"),
        }
        for cert, project in rows
    ]


def log_hours(db: Session, user_id: int, project_id: int, hours: int) -> Registration:
    """
    Replace the hours on the caller's registration (not additive).

    Raises:
        RegistrationNotFoundError: caller never registered for the project
    """
    registration = db.scalar(
        select(Registration).where(
            Registration.user_id == user_id,
            Registration.project_id == project_id,
        )
    )
    if registration is None:
        raise RegistrationNotFoundError("Registration not found")
    registration.hours_contributed = hours
    db.flush()
    return registration


def issue_certificate(db: Session, user_id: int, project_id: int) -> Certificate:
    """
    Issue a certificate for the hours currently on a registration.

    Server-side only; there is no HTTP endpoint for this.
    """
    registration = db.scalar(
        select(Registration).where(
            Registration.user_id == user_id,
            Registration.project_id == project_id,
        )
    )
    if registration is None:
        raise RegistrationNotFoundError("Registration not found")
    certificate = Certificate(
        user_id=user_id,
        project_id=project_id,
        hours=registration.hours_contributed,
    )
    db.add(certificate)
    db.flush()
    return certificate
