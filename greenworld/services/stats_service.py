"""
Dashboard aggregation.

Each view is computed independently from the same tables on every request;
nothing is cached between views. A view either fully succeeds or the
SQLAlchemy error propagates to the router.
"""

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from greenworld.db.enums import ImpactType, ProjectStatus, Role
from greenworld.db.models import Certificate, Project, Registration, User
from greenworld.services import impact_estimates


# =============================================================================
# Illustrative series
# =============================================================================
# There is no history table, so the time series and channel splits shown on
# the public and corporate dashboards are fixed sample data.

ILLUSTRATIVE_MONTHLY_IMPACT = [
    {"month": "Jan", "trees": 2100, "water": 1200, "co2": 450},
    {"month": "Feb", "trees": 2800, "water": 1800, "co2": 620},
    {"month": "Mar", "trees": 3500, "water": 2400, "co2": 890},
    {"month": "Apr", "trees": 4200, "water": 3100, "co2": 1150},
    {"month": "May", "trees": 5100, "water": 3900, "co2": 1420},
    {"month": "Jun", "trees": 6200, "water": 4800, "co2": 1680},
]

ILLUSTRATIVE_FUNDING_CHANNELS = [
    {"name": "Corporates", "value": 65, "color": "hsl(var(--primary))"},
    {"name": "Government", "value": 20, "color": "hsl(var(--accent))"},
    {"name": "Individuals", "value": 10, "color": "#10b981"},
    {"name": "Foundations", "value": 5, "color": "#06b6d4"},
]

ILLUSTRATIVE_FUNDING_BREAKDOWN = [
    {"name": "Trees", "value": 40, "color": "#16a34a"},
    {"name": "Water", "value": 30, "color": "#0ea5e9"},
    {"name": "Waste", "value": 20, "color": "#f59e0b"},
    {"name": "Other", "value": 10, "color": "#94a3b8"},
]

ILLUSTRATIVE_MONTHLY_SPENDING = [
    {"month": "Jan", "spent": 4500, "target": 10000},
    {"month": "Feb", "spent": 5200, "target": 10000},
    {"month": "Mar", "spent": 4800, "target": 10000},
    {"month": "Apr", "spent": 6100, "target": 10000},
    {"month": "May", "spent": 5900, "target": 10000},
    {"month": "Jun", "spent": 7200, "target": 10000},
]

# Shown on the landing page when the database has nothing to count yet
DEFAULT_TREES_PLANTED = 15234
DEFAULT_ACTIVE_VOLUNTEERS = 342
DEFAULT_ACTIVE_PROJECTS = 28
DISPLAY_CO2_OFFSET_TONS = "8,492"
DISPLAY_VERIFIED_CLAIMS = "100%"


# =============================================================================
# Shared queries
# =============================================================================

def _count_users_by_role(db: Session) -> dict[str, int]:
    rows = db.execute(select(User.role, func.count(User.id)).group_by(User.role)).all()
    return {role: count for role, count in rows}


def _project_counts(db: Session, ngo_id: int | None = None) -> dict[str, int]:
    stmt = select(
        func.count(Project.id),
        func.count(case((Project.status == ProjectStatus.ACTIVE.value, 1))),
        func.count(case((Project.status == ProjectStatus.COMPLETED.value, 1))),
    )
    if ngo_id is not None:
        stmt = stmt.where(Project.ngo_id == ngo_id)
    total, active, completed = db.execute(stmt).one()
    return {"total": total, "active": active, "completed": completed}


def _funding_totals(db: Session, ngo_id: int | None = None) -> dict[str, int]:
    stmt = select(
        func.coalesce(func.sum(Project.funding_goal), 0),
        func.coalesce(func.sum(Project.funding_received), 0),
    )
    if ngo_id is not None:
        stmt = stmt.where(Project.ngo_id == ngo_id)
    goal, received = db.execute(stmt).one()
    return {"goal": int(goal), "received": int(received)}


def _total_volunteer_hours(db: Session) -> int:
    total = db.scalar(select(func.coalesce(func.sum(Registration.hours_contributed), 0)))
    return int(total or 0)


def _format_count(value: int) -> str:
    return f"{value:,}"


def _format_millions(amount: int) -> str:
    return f"${amount / 1_000_000:.1f}M"


# =============================================================================
# Views
# =============================================================================

def get_public_stats(db: Session) -> dict:
    """
    Landing-page metrics.

    Counts come from the database with fixed fallbacks when they are zero;
    the tree count is parsed from free-text impact values of tree projects.
    """
    total_projects = db.scalar(select(func.count(Project.id))) or 0
    total_volunteers = _count_users_by_role(db).get(Role.VOLUNTEER.value, 0)
    funding_received = _funding_totals(db)["received"]

    impact_values = db.scalars(
        select(Project.impact_value).where(Project.impact_type == ImpactType.TREES.value)
    )
    trees_planted = sum(impact_estimates.parse_impact_count(v) for v in impact_values)

    metrics = [
        {
            "label": "Trees Planted",
            "value": _format_count(trees_planted or DEFAULT_TREES_PLANTED),
            "icon": "TreePine", "color": "text-emerald-500", "bg": "emerald",
        },
        {
            "label": "CO₂ Offset (Tons)",
            "value": DISPLAY_CO2_OFFSET_TONS,
            "icon": "TrendingUp", "color": "text-blue-500", "bg": "blue",
        },
        {
            "label": "Active Volunteers",
            "value": _format_count(total_volunteers or DEFAULT_ACTIVE_VOLUNTEERS),
            "icon": "Users", "color": "text-purple-500", "bg": "purple",
        },
        {
            "label": "Active Projects",
            "value": _format_count(total_projects or DEFAULT_ACTIVE_PROJECTS),
            "icon": "Leaf", "color": "text-green-500", "bg": "green",
        },
        {
            "label": "Total Investment",
            "value": _format_millions(funding_received),
            "icon": "Zap", "color": "text-amber-500", "bg": "amber",
        },
        {
            "label": "Verified Claims",
            "value": DISPLAY_VERIFIED_CLAIMS,
            "icon": "ShieldCheck", "color": "text-cyan-500", "bg": "cyan",
        },
    ]

    return {
        "metrics": metrics,
        "monthly_data": ILLUSTRATIVE_MONTHLY_IMPACT,
        "funding_channels": ILLUSTRATIVE_FUNDING_CHANNELS,
    }


def get_platform_stats(db: Session) -> dict:
    """Exact platform totals."""
    users_by_role = _count_users_by_role(db)
    certificates_issued = db.scalar(select(func.count(Certificate.id))) or 0

    return {
        "users": {
            "volunteers": users_by_role.get(Role.VOLUNTEER.value, 0),
            "ngos": users_by_role.get(Role.NGO.value, 0),
            "corporates": users_by_role.get(Role.CORPORATE.value, 0),
        },
        "projects": _project_counts(db),
        "funding": _funding_totals(db),
        "impact": {
            "volunteer_hours": _total_volunteer_hours(db),
            "certificates_issued": certificates_issued,
        },
    }


def get_ngo_stats(db: Session, ngo_id: int) -> dict:
    """Totals restricted to projects owned by one NGO."""
    volunteers, hours = db.execute(
        select(
            func.count(Registration.id),
            func.coalesce(func.sum(Registration.hours_contributed), 0),
        )
        .join(Project, Registration.project_id == Project.id)
        .where(Project.ngo_id == ngo_id)
    ).one()
    funding = _funding_totals(db, ngo_id=ngo_id)

    return {
        "projects": _project_counts(db, ngo_id=ngo_id),
        "volunteers": volunteers,
        "volunteer_hours": int(hours),
        "funding": {
            **funding,
            "percent": impact_estimates.funding_percent(funding["received"], funding["goal"]),
        },
    }


def get_corporate_stats(db: Session) -> dict:
    """
    Platform-wide sponsor view.

    No entity links a corporate to the projects it funded, so every figure
    is platform-wide and the impact numbers are fixed-ratio estimates.
    """
    projects_funded = db.scalar(
        select(func.count(Project.id)).where(Project.status == ProjectStatus.COMPLETED.value)
    ) or 0
    total_invested = _funding_totals(db)["received"]

    return {
        "projects_funded": projects_funded,
        "total_invested": total_invested,
        "volunteer_hours": _total_volunteer_hours(db),
        "co2_offset": impact_estimates.estimate_co2_offset_tons(total_invested),
        "trees_planted": impact_estimates.estimate_trees_planted(total_invested),
        "water_saved": impact_estimates.estimate_water_saved(total_invested),
        "impact_roi": impact_estimates.estimate_impact_roi(),
        "funding_breakdown": ILLUSTRATIVE_FUNDING_BREAKDOWN,
        "monthly_spending": ILLUSTRATIVE_MONTHLY_SPENDING,
    }
