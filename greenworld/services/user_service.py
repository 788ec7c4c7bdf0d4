"""User accounts: registration, credential checks, profile and admin deletion."""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from greenworld.core.security import hash_password, verify_password
from greenworld.db.enums import Role
from greenworld.db.models import Project, User

logger = logging.getLogger(__name__)


class UserServiceError(Exception):
    """Base exception for user service errors."""

    pass


class EmailAlreadyRegisteredError(UserServiceError):
    """Another account already uses this email."""

    pass


class InvalidCredentialsError(UserServiceError):
    """Unknown email or wrong password."""

    pass


class UserNotFoundError(UserServiceError):
    """User not found."""

    pass


class SelfDeletionError(UserServiceError):
    """An admin tried to delete their own account."""

    pass


class UserOwnsProjectsError(UserServiceError):
    """User still owns projects, which are not cascaded on delete."""

    pass


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.scalar(select(User).where(User.email == normalize_email(email)))


def create_user(
    db: Session,
    email: str,
    password: str,
    name: str,
    role: Role,
    organization_name: str | None = None,
) -> User:
    """
    Create an account. Caller commits.

    Raises:
        EmailAlreadyRegisteredError: email taken (case-insensitive)
    """
    email = normalize_email(email)
    if get_user_by_email(db, email) is not None:
        raise EmailAlreadyRegisteredError("Email already registered")

    user = User(
        email=email,
        password_hash=hash_password(password),
        name=name,
        role=Role(role).value,
        organization_name=organization_name or None,
    )
    db.add(user)
    try:
        db.flush()
    except IntegrityError as exc:
        # Lost a race with a concurrent signup for the same email
        db.rollback()
        raise EmailAlreadyRegisteredError("Email already registered") from exc

    logger.info("Created user %s with role %s", user.id, user.role)
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    """
    Verify credentials.

    Raises:
        InvalidCredentialsError: same error for unknown email and bad password
    """
    user = get_user_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        raise InvalidCredentialsError("Invalid email or password")
    return user


def update_profile(
    db: Session,
    user_id: int,
    name: str | None = None,
    organization_name: str | None = None,
    fields_set: set[str] | None = None,
) -> User:
    """
    Update display name and organization. Role and email are not editable.

    Only fields named in fields_set are written, so an explicit null clears
    organization_name while an omitted field is kept.
    """
    user = db.get(User, user_id)
    if user is None:
        raise UserNotFoundError("User not found")

    fields_set = fields_set if fields_set is not None else {"name", "organization_name"}
    if "name" in fields_set and name is not None:
        user.name = name
    if "organization_name" in fields_set:
        user.organization_name = organization_name or None
    db.flush()
    return user


def list_users(db: Session) -> list[User]:
    """All users, newest first."""
    return list(db.scalars(select(User).order_by(User.created_at.desc(), User.id.desc())))


def delete_user(db: Session, user_id: int, acting_user_id: int) -> None:
    """
    Delete a user. Registrations and certificates cascade via foreign keys.

    Raises:
        SelfDeletionError: acting admin targets their own account
        UserNotFoundError: no such user
        UserOwnsProjectsError: an NGO with projects cannot be removed
    """
    if user_id == acting_user_id:
        raise SelfDeletionError("Cannot delete your own admin account")

    user = db.get(User, user_id)
    if user is None:
        raise UserNotFoundError("User not found")

    owned = db.scalar(select(func.count(Project.id)).where(Project.ngo_id == user_id))
    if owned:
        raise UserOwnsProjectsError("Cannot delete a user who still owns projects")

    db.delete(user)
    db.flush()
    logger.info("Deleted user %s (by admin %s)", user_id, acting_user_id)
