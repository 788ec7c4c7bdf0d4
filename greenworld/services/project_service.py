"""Project CRUD, milestones, photos and volunteer sign-up."""

import logging
from typing import Any

from sqlalchemy import and_, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from greenworld.core.deps import can_edit_project, can_view_draft
from greenworld.db.enums import DEFAULT_PROJECT_STATUS, ProjectStatus, Role
from greenworld.db.models import Milestone, Project, ProjectPhoto, Registration, User
from greenworld.schemas.auth import UserSession

logger = logging.getLogger(__name__)

UNKNOWN_NGO = "Unknown NGO"
MAX_PAGE_SIZE = 100

# Columns an update may touch; id, ngo_id and created_at are never written
UPDATABLE_FIELDS = frozenset({
    "title",
    "description",
    "long_description",
    "location",
    "funding_goal",
    "funding_received",
    "status",
    "impact_type",
    "impact_value",
    "carbon_offset",
    "image",
})

# An explicit null for these is ignored rather than written
REQUIRED_FIELDS = frozenset({"title", "description", "location", "funding_goal", "funding_received", "status"})


class ProjectServiceError(Exception):
    """Base exception for project service errors."""

    pass


class ProjectNotFoundError(ProjectServiceError):
    """Project not found (or hidden from the caller)."""

    pass


class ProjectAccessDeniedError(ProjectServiceError):
    """Caller does not own the project."""

    pass


class MilestoneNotFoundError(ProjectServiceError):
    """Milestone not found on this project."""

    pass


class DuplicateRegistrationError(ProjectServiceError):
    """Caller is already registered for the project."""

    pass


# =============================================================================
# Reads
# =============================================================================

def _volunteer_counts(db: Session, project_ids: list[int]) -> dict[int, int]:
    if not project_ids:
        return {}
    rows = db.execute(
        select(Registration.project_id, func.count(Registration.id))
        .where(Registration.project_id.in_(project_ids))
        .group_by(Registration.project_id)
    ).all()
    return {project_id: count for project_id, count in rows}


def _ngo_name(project: Project) -> str:
    return project.ngo.display_organization if project.ngo else UNKNOWN_NGO


def _milestone_summaries(project: Project) -> list[dict]:
    return [
        {"id": m.id, "name": m.name, "completed": m.completed}
        for m in project.milestones
    ]


def _project_fields(project: Project) -> dict[str, Any]:
    return {
        "id": project.id,
        "title": project.title,
        "description": project.description,
        "long_description": project.long_description,
        "location": project.location,
        "funding_goal": project.funding_goal,
        "funding_received": project.funding_received,
        "status": project.status,
        "impact_type": project.impact_type,
        "impact_value": project.impact_value,
        "carbon_offset": project.carbon_offset,
        "image": project.image,
        "ngo_id": project.ngo_id,
        "created_at": project.created_at,
    }


def _visibility_filter(viewer: UserSession | None):
    """Drafts only show up for their owner; admins see everything."""
    not_draft = Project.status != ProjectStatus.DRAFT.value
    if viewer is None:
        return not_draft
    if viewer.role == Role.ADMIN:
        return None
    return not_draft | (Project.ngo_id == viewer.id)


def list_projects(
    db: Session,
    viewer: UserSession | None,
    search: str | None = None,
    location: str | None = None,
    status: str | None = None,
    impact_type: str | None = None,
    limit: int = 50,
    offset: int = 0,
) -> list[dict]:
    """
    List project cards, newest first.

    Filter values of "all" are treated as no filter.
    """
    filters = []
    if search:
        filters.append(Project.title.ilike(f"%{search}%"))
    if location and location != "all":
        filters.append(Project.location == location)
    if status and status != "all":
        filters.append(Project.status == status)
    if impact_type and impact_type != "all":
        filters.append(Project.impact_type == impact_type)
    visibility = _visibility_filter(viewer)
    if visibility is not None:
        filters.append(visibility)

    stmt = (
        select(Project)
        .options(selectinload(Project.ngo), selectinload(Project.milestones))
        .order_by(Project.created_at.desc(), Project.id.desc())
        .limit(min(max(limit, 0), MAX_PAGE_SIZE))
        .offset(max(offset, 0))
    )
    if filters:
        stmt = stmt.where(and_(*filters))

    projects = list(db.scalars(stmt))
    counts = _volunteer_counts(db, [p.id for p in projects])

    return [
        {
            **_project_fields(project),
            "volunteers": counts.get(project.id, 0),
            "ngo": _ngo_name(project),
            "milestones": _milestone_summaries(project),
        }
        for project in projects
    ]


def get_project(db: Session, project_id: int) -> Project:
    project = db.get(Project, project_id)
    if project is None:
        raise ProjectNotFoundError("Project not found")
    return project


def _get_visible_project(db: Session, project_id: int, viewer: UserSession | None) -> Project:
    # Drafts are reported as not found to anyone but their owner or an admin
    project = get_project(db, project_id)
    if project.status == ProjectStatus.DRAFT.value and not can_view_draft(viewer, project.ngo_id):
        raise ProjectNotFoundError("Project not found")
    return project


def get_project_detail(db: Session, project_id: int, viewer: UserSession | None) -> dict:
    """
    Project page with milestones, photos and the caller's registration flag.

    Drafts are reported as not found to anyone but their owner or an admin.
    """
    project = _get_visible_project(db, project_id, viewer)

    is_registered = False
    if viewer is not None:
        is_registered = _get_registration(db, viewer.id, project_id) is not None

    return {
        **_project_fields(project),
        "volunteers": _volunteer_counts(db, [project.id]).get(project.id, 0),
        "ngo": _ngo_name(project),
        "milestones": _milestone_summaries(project),
        "photos": [photo.url for photo in project.photos],
        "is_registered": is_registered,
    }


# =============================================================================
# Writes (caller commits)
# =============================================================================

def create_project(db: Session, owner: UserSession, data: dict) -> Project:
    """
    Create a project owned by the caller.

    Status is always the default (active); a caller-supplied status is ignored.
    """
    milestone_names = data.pop("milestones", None) or []
    data.pop("status", None)
    project = Project(
        **{k: v for k, v in data.items() if k in UPDATABLE_FIELDS},
        status=DEFAULT_PROJECT_STATUS.value,
        ngo_id=owner.id,
    )
    for index, name in enumerate(milestone_names):
        project.milestones.append(Milestone(name=name, order_index=index))
    db.add(project)
    db.flush()
    logger.info("Project %s created by user %s", project.id, owner.id)
    return project


def _get_owned_project(db: Session, project_id: int, user: UserSession) -> Project:
    project = get_project(db, project_id)
    if not can_edit_project(user, project.ngo_id):
        raise ProjectAccessDeniedError("Not authorized to update this project")
    return project


def update_project(db: Session, project_id: int, user: UserSession, changes: dict) -> Project:
    """
    Apply field changes. Non-admins must own the project.

    funding_received is deliberately not checked against funding_goal.
    """
    project = _get_owned_project(db, project_id, user)
    for field, value in changes.items():
        if field not in UPDATABLE_FIELDS:
            continue
        if value is None and field in REQUIRED_FIELDS:
            continue
        if field == "status" and value is not None:
            value = ProjectStatus(value).value
        setattr(project, field, value)
    db.flush()
    return project


def delete_project(db: Session, project_id: int, user: UserSession) -> None:
    """Delete a project; milestones, registrations, certificates and photos cascade."""
    project = _get_owned_project(db, project_id, user)
    db.delete(project)
    db.flush()
    logger.info("Project %s deleted by user %s", project_id, user.id)


def add_photo(db: Session, project_id: int, user: UserSession, url: str) -> ProjectPhoto:
    project = _get_owned_project(db, project_id, user)
    photo = ProjectPhoto(project_id=project.id, url=url)
    db.add(photo)
    db.flush()
    return photo


def toggle_milestone(db: Session, project_id: int, milestone_id: int) -> Milestone:
    """
    Flip a milestone's completed flag.

    Not idempotent: calling twice restores the original state.
    """
    milestone = db.get(Milestone, milestone_id)
    if milestone is None or milestone.project_id != project_id:
        raise MilestoneNotFoundError("Milestone not found")
    milestone.completed = not milestone.completed
    db.flush()
    return milestone


# =============================================================================
# Registration
# =============================================================================

def _get_registration(db: Session, user_id: int, project_id: int) -> Registration | None:
    return db.scalar(
        select(Registration).where(
            Registration.user_id == user_id,
            Registration.project_id == project_id,
        )
    )


def register_volunteer(db: Session, user: UserSession, project_id: int) -> Registration:
    """
    Register a user for a project with zero hours.

    Raises:
        ProjectNotFoundError: unknown project, or a draft the user cannot see
        DuplicateRegistrationError: pair already registered (also when a
            concurrent request wins the unique constraint)
    """
    _get_visible_project(db, project_id, user)
    if _get_registration(db, user.id, project_id) is not None:
        raise DuplicateRegistrationError("Already registered for this project")

    registration = Registration(user_id=user.id, project_id=project_id, hours_contributed=0)
    db.add(registration)
    try:
        db.flush()
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateRegistrationError("Already registered for this project") from exc
    return registration


def get_ngo_display_names(db: Session, ngo_ids: set[int]) -> dict[int, str]:
    """Map NGO user ids to the organization name shown on cards."""
    if not ngo_ids:
        return {}
    users = db.scalars(select(User).where(User.id.in_(ngo_ids)))
    return {user.id: user.display_organization for user in users}
