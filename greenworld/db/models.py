"""SQLAlchemy ORM models for users, projects and volunteer activity."""

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean, CheckConstraint, ForeignKey, Index, Integer, String, Text, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from greenworld.db.base import Base
from greenworld.db.enums import DEFAULT_PROJECT_STATUS, ProjectStatus, Role


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _in_clause(column: str, enum_cls) -> str:
    values = ", ".join(f"'{member.value}'" for member in enum_cls)
    return f"{column} IN ({values})"


# =============================================================================
# Identity
# =============================================================================

class User(Base):
    """
    Platform account.

    Email is stored lower-cased, which makes the unique index
    case-insensitive. Role never changes after creation.
    """
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(_in_clause("role", Role), name="role_valid"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    organization_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=_utcnow, nullable=False)

    # Relationships
    projects: Mapped[list["Project"]] = relationship(back_populates="ngo")
    registrations: Mapped[list["Registration"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    certificates: Mapped[list["Certificate"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def display_organization(self) -> str:
        """Name shown for an NGO on project cards."""
        return self.organization_name or self.name


# =============================================================================
# Projects
# =============================================================================

class Project(Base):
    """
    Environmental initiative owned by an NGO user.

    funding_received may exceed funding_goal; nothing enforces the bound.
    """
    __tablename__ = "projects"
    __table_args__ = (
        CheckConstraint(_in_clause("status", ProjectStatus), name="status_valid"),
        Index("idx_projects_ngo_id", "ngo_id"),
        Index("idx_projects_status", "status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    long_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    funding_goal: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    funding_received: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), default=DEFAULT_PROJECT_STATUS.value, nullable=False
    )
    impact_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    impact_value: Mapped[str | None] = mapped_column(String(255), nullable=True)  # e.g. "5,000 trees"
    carbon_offset: Mapped[str | None] = mapped_column(String(255), nullable=True)  # e.g. "3.2 tons/year"
    image: Mapped[str | None] = mapped_column(String(500), nullable=True)  # Emoji or URL
    ngo_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=_utcnow, nullable=False)

    # Relationships
    ngo: Mapped["User"] = relationship(back_populates="projects")
    milestones: Mapped[list["Milestone"]] = relationship(
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Milestone.order_index",
    )
    registrations: Mapped[list["Registration"]] = relationship(
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    certificates: Mapped[list["Certificate"]] = relationship(
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    photos: Mapped[list["ProjectPhoto"]] = relationship(
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ProjectPhoto.id",
    )


class Milestone(Base):
    """Progress checkpoint for a project."""
    __tablename__ = "milestones"
    __table_args__ = (
        Index("idx_milestones_project_id", "project_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    project_id: Mapped[int] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    order_index: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    project: Mapped["Project"] = relationship(back_populates="milestones")


class ProjectPhoto(Base):
    """Photo uploaded by the owning NGO."""
    __tablename__ = "project_photos"
    __table_args__ = (
        Index("idx_project_photos_project_id", "project_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    project_id: Mapped[int] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    url: Mapped[str] = mapped_column(String(1000), nullable=False)
    uploaded_at: Mapped[datetime] = mapped_column(default=_utcnow, nullable=False)

    project: Mapped["Project"] = relationship(back_populates="photos")


# =============================================================================
# Volunteer activity
# =============================================================================

class Registration(Base):
    """
    A volunteer signed up for a project.

    Constraint: UNIQUE(user_id, project_id) turns a concurrent double
    sign-up into an IntegrityError instead of a second row.
    """
    __tablename__ = "registrations"
    __table_args__ = (
        UniqueConstraint("user_id", "project_id", name="uq_registrations_user_project"),
        CheckConstraint("hours_contributed >= 0", name="hours_non_negative"),
        Index("idx_registrations_project_id", "project_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    project_id: Mapped[int] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    hours_contributed: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    registered_at: Mapped[datetime] = mapped_column(default=_utcnow, nullable=False)

    user: Mapped["User"] = relationship(back_populates="registrations")
    project: Mapped["Project"] = relationship(back_populates="registrations")


class Certificate(Base):
    """Certificate of volunteered hours. Several may exist per (user, project)."""
    __tablename__ = "certificates"
    __table_args__ = (
        Index("idx_certificates_user_id", "user_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    project_id: Mapped[int] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    hours: Mapped[int] = mapped_column(Integer, nullable=False)
    issued_at: Mapped[datetime] = mapped_column(default=_utcnow, nullable=False)

    user: Mapped["User"] = relationship(back_populates="certificates")
    project: Mapped["Project"] = relationship(back_populates="certificates")
