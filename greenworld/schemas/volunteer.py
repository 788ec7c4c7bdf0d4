"""Volunteer dashboard schemas."""

from datetime import datetime

from pydantic import Field

from greenworld.schemas.common import MAX_INT, CamelModel
from greenworld.schemas.project import RegistrationRead


class LogHoursRequest(CamelModel):
    """PUT /volunteers/log-hours body. Hours replace the stored value."""
    project_id: int = Field(..., ge=1, le=MAX_INT)
    hours: int = Field(..., ge=0, le=MAX_INT)


class VolunteerMilestone(CamelModel):
    id: int
    title: str
    status: str  # "Done" | "In Progress"


class VolunteerProject(CamelModel):
    """A project the caller is registered for."""
    id: int
    name: str
    description: str
    long_description: str | None = None
    status: str  # "Completed" | "In Progress"
    hours: int
    impact: str
    carbon_offset: str
    date: str
    certificate: bool
    image: str
    ngo: str
    milestones: list[VolunteerMilestone]
    gallery: list[str]


class VolunteerProjectsResponse(CamelModel):
    projects: list[VolunteerProject]


class VolunteerStats(CamelModel):
    hours_volunteered: int
    projects_completed: int
    certificates_earned: int
    impact_score: int


class CertificateItem(CamelModel):
    id: int
    project_id: int
    project_name: str
    hours: int
    issued_at: datetime | None = None
    ngo: str


class CertificateListResponse(CamelModel):
    certificates: list[CertificateItem]


class LogHoursResponse(CamelModel):
    message: str
    registration: RegistrationRead
