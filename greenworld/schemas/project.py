"""Project, milestone and registration schemas."""

from datetime import datetime

from pydantic import Field

from greenworld.db.enums import ProjectStatus
from greenworld.schemas.common import MAX_INT, CamelModel


# =============================================================================
# Requests
# =============================================================================

class ProjectCreate(CamelModel):
    """
    POST /projects body.

    There is no status field: new projects always start active.
    """
    title: str = Field(..., min_length=3, max_length=255)
    description: str = Field(..., min_length=10)
    long_description: str | None = None
    location: str = Field(..., min_length=2, max_length=255)
    funding_goal: int = Field(0, ge=0, le=MAX_INT)
    impact_type: str | None = Field(None, max_length=50)
    impact_value: str | None = Field(None, max_length=255)
    carbon_offset: str | None = Field(None, max_length=255)
    image: str | None = Field(None, max_length=500)
    milestones: list[str] = Field(default_factory=list, description="Milestone names in order")


class ProjectUpdate(CamelModel):
    """
    PUT /projects/{id} body. Omitted fields are left unchanged.

    funding_received is not bounded by funding_goal.
    """
    title: str | None = Field(None, min_length=3, max_length=255)
    description: str | None = Field(None, min_length=10)
    long_description: str | None = None
    location: str | None = Field(None, min_length=2, max_length=255)
    funding_goal: int | None = Field(None, ge=0, le=MAX_INT)
    funding_received: int | None = Field(None, ge=0, le=MAX_INT)
    status: ProjectStatus | None = None
    impact_type: str | None = Field(None, max_length=50)
    impact_value: str | None = Field(None, max_length=255)
    carbon_offset: str | None = Field(None, max_length=255)
    image: str | None = Field(None, max_length=500)


class PhotoCreate(CamelModel):
    url: str = Field(..., min_length=1, max_length=1000)


# =============================================================================
# Responses
# =============================================================================

class MilestoneRead(CamelModel):
    id: int
    project_id: int
    name: str
    completed: bool
    order_index: int


class MilestoneSummary(CamelModel):
    """Milestone as embedded in project cards."""
    id: int
    name: str
    completed: bool


class PhotoRead(CamelModel):
    id: int
    project_id: int
    url: str
    uploaded_at: datetime | None = None


class ProjectRead(CamelModel):
    """Stored project row."""
    id: int
    title: str
    description: str
    long_description: str | None = None
    location: str
    funding_goal: int
    funding_received: int
    status: ProjectStatus
    impact_type: str | None = None
    impact_value: str | None = None
    carbon_offset: str | None = None
    image: str | None = None
    ngo_id: int
    created_at: datetime | None = None


class ProjectListItem(ProjectRead):
    """Project card for listings."""
    volunteers: int
    ngo: str
    milestones: list[MilestoneSummary]


class ProjectDetail(ProjectListItem):
    """Single project page."""
    photos: list[str]
    is_registered: bool


class RegistrationRead(CamelModel):
    id: int
    user_id: int
    project_id: int
    hours_contributed: int
    registered_at: datetime | None = None


class ProjectListResponse(CamelModel):
    projects: list[ProjectListItem]


class ProjectResponse(CamelModel):
    project: ProjectRead


class MilestoneResponse(CamelModel):
    milestone: MilestoneRead


class PhotoResponse(CamelModel):
    photo: PhotoRead


class RegistrationResponse(CamelModel):
    message: str
    registration: RegistrationRead
