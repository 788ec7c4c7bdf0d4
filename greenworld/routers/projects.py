"""Project endpoints: listing, detail, NGO management, milestones and sign-up."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from greenworld.core.deps import RowId, get_current_user, get_db, get_optional_user, require_roles
from greenworld.db.enums import ROLES_CAN_MANAGE_PROJECTS
from greenworld.schemas.auth import UserSession
from greenworld.schemas.common import MessageResponse
from greenworld.schemas.project import (
    MilestoneRead,
    MilestoneResponse,
    PhotoCreate,
    PhotoRead,
    PhotoResponse,
    ProjectCreate,
    ProjectDetail,
    ProjectListResponse,
    ProjectRead,
    ProjectResponse,
    ProjectUpdate,
    RegistrationRead,
    RegistrationResponse,
)
from greenworld.services import project_service

router = APIRouter()


def _not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="Project not found")


# =============================================================================
# Reads (optional auth)
# =============================================================================

@router.get("", response_model=ProjectListResponse)
def list_projects(
    search: str | None = None,
    location: str | None = None,
    status_filter: str | None = Query(None, alias="status"),
    impact_type: str | None = Query(None, alias="impactType"),
    limit: int = Query(50, ge=0, le=project_service.MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    viewer: UserSession | None = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    """
    List projects, newest first.

    Drafts are only included for the owning NGO (and admins).
    """
    projects = project_service.list_projects(
        db,
        viewer,
        search=search,
        location=location,
        status=status_filter,
        impact_type=impact_type,
        limit=limit,
        offset=offset,
    )
    return {"projects": projects}


@router.get("/{project_id}", response_model=ProjectDetail)
def get_project(
    project_id: RowId,
    viewer: UserSession | None = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    """Project page with milestones, photos and the caller's registration flag."""
    try:
        return project_service.get_project_detail(db, project_id, viewer)
    except project_service.ProjectNotFoundError:
        raise _not_found()


# =============================================================================
# NGO / admin management
# =============================================================================

@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
def create_project(
    data: ProjectCreate,
    user: UserSession = Depends(require_roles(ROLES_CAN_MANAGE_PROJECTS)),
    db: Session = Depends(get_db),
):
    """Create a project owned by the caller. Status always starts as active."""
    project = project_service.create_project(db, user, data.model_dump())
    db.commit()
    return ProjectResponse(project=ProjectRead.model_validate(project))


@router.put("/{project_id}", response_model=ProjectResponse)
def update_project(
    project_id: RowId,
    data: ProjectUpdate,
    user: UserSession = Depends(require_roles(ROLES_CAN_MANAGE_PROJECTS)),
    db: Session = Depends(get_db),
):
    """Update project fields. NGOs may only update their own projects."""
    try:
        project = project_service.update_project(
            db, project_id, user, data.model_dump(exclude_unset=True)
        )
        db.commit()
    except project_service.ProjectNotFoundError:
        raise _not_found()
    except project_service.ProjectAccessDeniedError as e:
        raise HTTPException(status_code=403, detail=str(e))

    return ProjectResponse(project=ProjectRead.model_validate(project))


@router.delete("/{project_id}", response_model=MessageResponse)
def delete_project(
    project_id: RowId,
    user: UserSession = Depends(require_roles(ROLES_CAN_MANAGE_PROJECTS)),
    db: Session = Depends(get_db),
):
    """Delete a project together with its milestones, registrations, certificates and photos."""
    try:
        project_service.delete_project(db, project_id, user)
        db.commit()
    except project_service.ProjectNotFoundError:
        raise _not_found()
    except project_service.ProjectAccessDeniedError as e:
        raise HTTPException(status_code=403, detail=str(e))

    return MessageResponse(message="Project deleted successfully")


@router.post("/{project_id}/photos", response_model=PhotoResponse, status_code=status.HTTP_201_CREATED)
def add_photo(
    project_id: RowId,
    data: PhotoCreate,
    user: UserSession = Depends(require_roles(ROLES_CAN_MANAGE_PROJECTS)),
    db: Session = Depends(get_db),
):
    """Attach a photo URL to a project gallery."""
    try:
        photo = project_service.add_photo(db, project_id, user, data.url)
        db.commit()
    except project_service.ProjectNotFoundError:
        raise _not_found()
    except project_service.ProjectAccessDeniedError as e:
        raise HTTPException(status_code=403, detail=str(e))

    return PhotoResponse(photo=PhotoRead.model_validate(photo))


@router.put("/{project_id}/milestones/{milestone_id}", response_model=MilestoneResponse)
def toggle_milestone(
    project_id: RowId,
    milestone_id: RowId,
    user: UserSession = Depends(require_roles(ROLES_CAN_MANAGE_PROJECTS)),
    db: Session = Depends(get_db),
):
    """Flip a milestone between completed and not completed."""
    try:
        milestone = project_service.toggle_milestone(db, project_id, milestone_id)
        db.commit()
    except project_service.MilestoneNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return MilestoneResponse(milestone=MilestoneRead.model_validate(milestone))


# =============================================================================
# Volunteer sign-up
# =============================================================================

@router.post("/{project_id}/register", response_model=RegistrationResponse, status_code=status.HTTP_201_CREATED)
def register_for_project(
    project_id: RowId,
    user: UserSession = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Register the caller for a project. A second registration is rejected."""
    try:
        registration = project_service.register_volunteer(db, user, project_id)
        db.commit()
    except project_service.ProjectNotFoundError:
        raise _not_found()
    except project_service.DuplicateRegistrationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return RegistrationResponse(
        message="Successfully registered for project",
        registration=RegistrationRead.model_validate(registration),
    )
