"""Volunteer dashboard endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from greenworld.core.deps import get_current_user, get_db
from greenworld.schemas.auth import UserSession
from greenworld.schemas.project import RegistrationRead
from greenworld.schemas.volunteer import (
    CertificateListResponse,
    LogHoursRequest,
    LogHoursResponse,
    VolunteerProjectsResponse,
    VolunteerStats,
)
from greenworld.services import volunteer_service

router = APIRouter()


@router.get("/my-projects", response_model=VolunteerProjectsResponse)
def my_projects(
    user: UserSession = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Projects the caller registered for, newest registration first."""
    return {"projects": volunteer_service.get_my_projects(db, user.id)}


@router.get("/stats", response_model=VolunteerStats)
def my_stats(
    user: UserSession = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return volunteer_service.get_volunteer_stats(db, user.id)


@router.get("/certificates", response_model=CertificateListResponse)
def my_certificates(
    user: UserSession = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return {"certificates": volunteer_service.list_certificates(db, user.id)}


@router.put("/log-hours", response_model=LogHoursResponse)
def log_hours(
    data: LogHoursRequest,
    user: UserSession = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Set the hours on the caller's registration. The value replaces the previous one."""
    try:
        registration = volunteer_service.log_hours(db, user.id, data.project_id, data.hours)
        db.commit()
    except volunteer_service.RegistrationNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return LogHoursResponse(
        message="Hours logged successfully",
        registration=RegistrationRead.model_validate(registration),
    )
