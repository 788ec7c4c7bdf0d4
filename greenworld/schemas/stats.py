"""Dashboard statistics schemas."""

from datetime import datetime

from greenworld.db.enums import ProjectStatus
from greenworld.schemas.common import CamelModel


# =============================================================================
# Public
# =============================================================================

class PublicMetric(CamelModel):
    label: str
    value: str
    icon: str
    color: str
    bg: str


class MonthlyImpactPoint(CamelModel):
    month: str
    trees: int
    water: int
    co2: int


class ChartSlice(CamelModel):
    name: str
    value: int
    color: str


class PublicStats(CamelModel):
    metrics: list[PublicMetric]
    monthly_data: list[MonthlyImpactPoint]
    funding_channels: list[ChartSlice]


# =============================================================================
# Platform / NGO
# =============================================================================

class UserCounts(CamelModel):
    volunteers: int
    ngos: int
    corporates: int


class ProjectCounts(CamelModel):
    total: int
    active: int
    completed: int


class FundingTotals(CamelModel):
    goal: int
    received: int


class NgoFundingTotals(FundingTotals):
    percent: int


class PlatformImpact(CamelModel):
    volunteer_hours: int
    certificates_issued: int


class PlatformStats(CamelModel):
    users: UserCounts
    projects: ProjectCounts
    funding: FundingTotals
    impact: PlatformImpact


class NgoStats(CamelModel):
    projects: ProjectCounts
    volunteers: int
    volunteer_hours: int
    funding: NgoFundingTotals


# =============================================================================
# Corporate
# =============================================================================

class MonthlySpendingPoint(CamelModel):
    month: str
    spent: int
    target: int


class CorporateStats(CamelModel):
    projects_funded: int
    total_invested: int
    volunteer_hours: int
    co2_offset: int
    trees_planted: int
    water_saved: int
    impact_roi: int
    funding_breakdown: list[ChartSlice]
    monthly_spending: list[MonthlySpendingPoint]


# =============================================================================
# NGO workspace
# =============================================================================

class NgoVolunteer(CamelModel):
    id: int
    name: str
    email: str
    project_id: int
    project_title: str
    hours: int
    enrolled_at: datetime | None = None


class NgoVolunteersResponse(CamelModel):
    volunteers: list[NgoVolunteer]


class ProjectFunding(CamelModel):
    id: int
    title: str
    funding_goal: int
    funding_received: int
    status: ProjectStatus
    percent: int


class NgoFundingResponse(CamelModel):
    funding: list[ProjectFunding]
