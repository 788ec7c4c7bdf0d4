"""Tests for demo data seeding and the CLI."""
from click.testing import CliRunner
from sqlalchemy import func, select

from greenworld.cli import cli
from greenworld.core.security import verify_password
from greenworld.db.enums import Role
from greenworld.db.models import Certificate, Milestone, Project, Registration, User
from greenworld.services import seed_service
from greenworld.services.seed_service import DEMO_PASSWORD, seed_demo_data


def _count(db, model) -> int:
    return db.scalar(select(func.count()).select_from(model))


def test_seed_inserts_demo_data(db):
    assert seed_demo_data(db) is True
    db.commit()

    assert _count(db, User) == 5
    assert _count(db, Project) == 4
    assert _count(db, Milestone) == 12
    assert _count(db, Registration) == 2
    assert _count(db, Certificate) == 1

    admin = db.scalar(select(User).where(User.email == "admin@greenworld.org"))
    assert admin.role == Role.ADMIN.value
    assert verify_password(DEMO_PASSWORD, admin.password_hash)


def test_seed_is_skipped_when_users_exist(db, make_user):
    make_user(Role.VOLUNTEER)

    assert seed_demo_data(db) is False
    assert _count(db, Project) == 0


def test_seeded_certificate_matches_registration_hours(db):
    seed_demo_data(db)

    certificate = db.scalar(select(Certificate))
    registration = db.scalar(
        select(Registration).where(
            Registration.user_id == certificate.user_id,
            Registration.project_id == certificate.project_id,
        )
    )
    assert certificate.hours == registration.hours_contributed


def test_cli_lists_commands():
    result = CliRunner().invoke(cli, ["--help"])

    assert result.exit_code == 0
    for command in ("init-db", "seed", "create-admin", "issue-certificate"):
        assert command in result.output


def test_demo_projects_all_have_known_owners():
    owners = {demo["key"] for demo in seed_service.DEMO_USERS}
    assert all(project["owner"] in owners for project in seed_service.DEMO_PROJECTS)


def test_create_admin_rejects_password_over_bcrypt_byte_limit():
    result = CliRunner().invoke(
        cli,
        ["create-admin", "--email", "ops@example.org", "--name", "Ops", "--password", "é" * 40],
    )

    assert result.exit_code == 1
    assert "at most 72 bytes" in result.output
